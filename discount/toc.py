"""Unique labels for headers, used by tables of contents."""

from __future__ import annotations

from typing import Iterator

from .document import Paragraph, ParagraphType

__all__ = ["unique_label", "uniquify"]


def _siblings(paragraph: Paragraph | None) -> Iterator[Paragraph]:
    while paragraph is not None:
        yield paragraph
        paragraph = paragraph.next


def _collides(paragraph: Paragraph | None, name: str) -> bool:
    return any(
        content.typ is ParagraphType.HDR
        and content.text is not None
        and content.label is not None
        and content.label == name
        for content in _siblings(paragraph)
    )


def _decollide(paragraph: Paragraph | None, name: str, base: str) -> str:
    for content in _siblings(paragraph):
        if content.down is not None:
            name = _decollide(content.down, name, base)
    seq = 0
    while _collides(paragraph, name):
        name = f"{base}_{seq}"
        seq += 1
    return name


def unique_label(root: Paragraph | None, name: str) -> str:
    """``name``, with a ``_N`` suffix if needed so no header label under ``root`` matches."""
    return _decollide(root, name, name)


def _label(root: Paragraph, paragraph: Paragraph | None) -> None:
    for content in _siblings(paragraph):
        if content.typ is ParagraphType.SOURCE:
            _label(root, content.down)
        elif content.typ is ParagraphType.HDR and content.text is not None:
            content.label = unique_label(root, content.text.text)


def uniquify(root: Paragraph | None) -> None:
    """Give every header in the document a label no other header has."""
    if root is not None:
        _label(root, root)