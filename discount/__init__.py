"""Markdown block compiler with rendering flags, TOC labels, option parsing and text tools."""

__version__ = "3.0.0"