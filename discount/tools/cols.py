"""Cut every line of input down to a number of columns, counting utf-8 characters."""

from __future__ import annotations

import re
import sys

__all__ = ["truncate_columns", "main"]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def truncate_columns(data: bytes, width: int) -> bytes:
    """Keep at most ``width`` characters of each line; utf-8 sequences count as one."""
    out = bytearray()
    stream = iter(data)
    column = 1
    c = next(stream, None)
    while c is not None:
        while c is not None and c & 0xC0:
            while True:
                if column <= width:
                    out.append(c)
                c = next(stream, None)
                if c is None or not (c & 0x80) or (c & 0x40):
                    break
            column += 1
        if c is None:
            break
        if c == 0x0A:
            column = 0
        if column <= width:
            out.append(c)
        column += 1
        c = next(stream, None)
    return bytes(out)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("usage: cols width", file=sys.stderr)
        return 1
    width = _atoi(args[0])
    if width < 1:
        print("cols: please set width to > 0", file=sys.stderr)
        return 1
    data = sys.stdin.buffer.read()
    sys.stdout.buffer.write(truncate_columns(data, width))
    sys.stdout.buffer.flush()
    return 0