"""Turn every space of the input into a newline."""

from __future__ import annotations

import sys
from typing import AnyStr

__all__ = ["space_to_newline", "main"]


def space_to_newline(text: AnyStr) -> AnyStr:
    """``text`` with each space replaced by a newline."""
    if isinstance(text, bytes):
        return text.replace(b" ", b"\n")
    return text.replace(" ", "\n")


def main(argv: list[str] | None = None) -> int:
    data = sys.stdin.buffer.read()
    sys.stdout.buffer.write(space_to_newline(data))
    sys.stdout.buffer.flush()
    return 0