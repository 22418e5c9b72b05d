"""Print a version tag for the current git branch, unless it is ``main``."""

from __future__ import annotations

import subprocess
import sys

__all__ = ["branch_label", "current_branch", "main"]


def branch_label(name: str) -> str:
    """The quoted ``(name)-`` tag for a branch; empty for ``main``."""
    if name == "main":
        return ""
    return f'"({name})-"'


def current_branch() -> str | None:
    """The name of the checked-out git branch, or ``None`` if it cannot be found."""
    try:
        result = subprocess.run(
            ["git", "branch"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    for row in result.stdout.splitlines():
        fields = row.split()
        if fields and "*" in fields[0]:
            return fields[1] if len(fields) > 1 else ""
    return None


def main(argv: list[str] | None = None) -> int:
    name = current_branch()
    if name:
        sys.stdout.write(branch_label(name))
        sys.stdout.flush()
    return 0