[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "discount"
version = "3.0.0"
description = "A Markdown block compiler with rendering flags, table-of-contents labels and small text tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["markdown", "markup", "toc", "flags", "text"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Text Processing :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
discount-cols = "discount.tools.cols:main"
discount-echo = "discount.tools.echo:main"
discount-rep = "discount.tools.rep:main"
discount-space2nl = "discount.tools.space2nl:main"
discount-branch = "discount.tools.branch:main"

[tool.hatch.build.targets.wheel]
packages = ["discount"]

[tool.hatch.build.targets.sdist]
include = ["discount", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
