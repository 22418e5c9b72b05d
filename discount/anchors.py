"""Formatting of header text into anchor names."""

from __future__ import annotations

from .flags import Flag

__all__ = ["anchor_format"]

_HEX = "0123456789abcdef"
_SPACE_BYTES = frozenset(b" \t\n\v\f\r")


def _isalpha(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def _isalnum(byte: int) -> bool:
    return _isalpha(byte) or 0x30 <= byte <= 0x39


def anchor_format(text: str, labelformat: bool = True, flags: Flag | None = None) -> str:
    """Mangle ``text`` into a form suitable for ``href=`` or ``id=``.

    Without ``labelformat`` the text is returned as it is.  Otherwise the
    default style prefixes a label that does not start with a letter with
    ``L``, turns spaces into ``-`` and writes other bytes outside
    ``[A-Za-z0-9_:.]`` as ``-xx-``; with ``Flag.URLENCODEDANCHOR`` spaces
    become ``-`` and other whitespace and ``%`` are percent-encoded.
    """
    if not labelformat:
        return text

    h4anchor = not (flags is not None and flags & Flag.URLENCODEDANCHOR)
    data = text.encode("utf-8", errors="surrogateescape")
    out = bytearray()

    if h4anchor and not (data and _isalpha(data[0])):
        out += b"L"

    for byte in data:
        if h4anchor:
            keep = _isalnum(byte) or byte in b"_:."
        else:
            keep = byte not in _SPACE_BYTES and byte != ord("%")
        if keep:
            out.append(byte)
        elif byte == ord(" "):
            out += b"-"
        else:
            escaped = (_HEX[byte >> 4] + _HEX[byte & 0xF]).encode("ascii")
            if h4anchor:
                out += b"-" + escaped + b"-"
            else:
                out += b"%" + escaped
    return out.decode("utf-8", errors="surrogateescape")