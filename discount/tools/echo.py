"""Print arguments separated by spaces, with ``-n`` to leave off the newline."""

from __future__ import annotations

import sys
from typing import Iterable

__all__ = ["echo", "main"]


def echo(words: Iterable[str], newline: bool = True) -> str:
    """The words joined by single spaces, followed by a newline if asked."""
    text = " ".join(words)
    return text + "\n" if newline else text


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    newline = True
    if args and args[0] == "-n":
        args = args[1:]
        newline = False
    sys.stdout.write(echo(args, newline))
    sys.stdout.flush()
    return 0