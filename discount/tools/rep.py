"""Repeat a string a number of times, with an optional prefix and suffix."""

from __future__ import annotations

import re
import sys

__all__ = ["deformat", "repeat", "main"]

_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "b": "\b", "\\": "\\"}
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def deformat(text: str) -> str:
    """Expand ``\\n``, ``\\r``, ``\\t``, ``\\b`` and ``\\\\``; other backslashes stay."""
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            escaped = next(chars, None)
            if escaped is None:
                out.append(ch)
            elif escaped in _ESCAPES:
                out.append(_ESCAPES[escaped])
            else:
                out.append("\\" + escaped)
        else:
            out.append(ch)
    return "".join(out)


def repeat(
    string: str, count: int, prefix: str | None = None, suffix: str | None = None
) -> str:
    """``prefix``, then ``string`` ``count`` times, then ``suffix``."""
    return (prefix or "") + string * max(count, 0) + (suffix or "")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print("usage: rep [prefix] <string> <count> [suffix]", file=sys.stderr)
        return 1
    prefix = suffix = None
    if len(args) == 2:
        string, count = deformat(args[0]), _atoi(args[1])
    else:
        if len(args) > 3:
            suffix = deformat(args[3])
        prefix = deformat(args[0])
        string, count = deformat(args[1]), _atoi(args[2])
    sys.stdout.write(repeat(string, count, prefix, suffix))
    sys.stdout.flush()
    return 0