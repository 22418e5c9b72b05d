"""Escaping text for xml output."""

from __future__ import annotations

from typing import TextIO

__all__ = ["xml_char", "xml_escape", "write_xml"]

_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "'": "&apos;",
}


def xml_char(char: str) -> str | None:
    """The entity for ``char``, or ``None`` if it passes through unchanged."""
    return _ENTITIES.get(char)


def xml_escape(text: str) -> str:
    """Return ``text`` with xml special characters replaced by entities."""
    return "".join(_ENTITIES.get(ch, ch) for ch in text)


def write_xml(text: str, out: TextIO) -> None:
    """Write ``text`` to ``out`` with xml special characters escaped."""
    out.write(xml_escape(text))