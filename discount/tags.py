"""Block-level html tags that pass through the formatter untouched."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

__all__ = ["BlockTag", "TagTable", "standard_tags", "search_tags", "define_tag"]


@dataclass(frozen=True)
class BlockTag:
    """An html block tag; ``selfclose`` tags need no closing tag."""

    name: str
    selfclose: bool = False

    @property
    def size(self) -> int:
        return len(self.name)


def _sort_key(tag: BlockTag) -> tuple[int, str]:
    return (tag.size, tag.name.upper())


_STANDARD_NAMES = (
    "STYLE", "SCRIPT", "ADDRESS", "BDO", "BLOCKQUOTE", "CENTER", "DFN", "DIV",
    "OBJECT", "H1", "H2", "H3", "H4", "H5", "H6", "LISTING", "NOBR", "FORM",
    "UL", "P", "OL", "DL", "PLAINTEXT", "PRE", "TABLE", "WBR", "XMP",
)
_STANDARD_SELFCLOSE = ("HR",)
_STANDARD_TRAILING = ("IFRAME", "MAP")

_STANDARD: tuple[BlockTag, ...] = tuple(
    sorted(
        [BlockTag(n) for n in _STANDARD_NAMES]
        + [BlockTag(n, True) for n in _STANDARD_SELFCLOSE]
        + [BlockTag(n) for n in _STANDARD_TRAILING],
        key=_sort_key,
    )
)


def standard_tags() -> list[BlockTag]:
    """The built-in block tags, ordered by length and then case-insensitively."""
    return list(_STANDARD)


class TagTable:
    """Standard block tags plus any extra tags defined at run time."""

    def __init__(self, standard: Iterable[BlockTag] | None = None) -> None:
        tags = _STANDARD if standard is None else standard
        self._standard = {tag.name.upper(): tag for tag in tags}
        self._extra: dict[str, BlockTag] = {}

    def define(self, name: str, selfclose: bool) -> BlockTag:
        """Add a tag unless one of that name already exists; return the tag in effect."""
        existing = self.search(name)
        if existing is not None:
            return existing
        tag = BlockTag(name, bool(selfclose))
        self._extra[name.upper()] = tag
        return tag

    def search(self, pattern: str) -> BlockTag | None:
        """Find a tag by case-insensitive name, standard tags first."""
        key = pattern.upper()
        found = self._standard.get(key)
        if found is None:
            found = self._extra.get(key)
        return found

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.search(name) is not None

    def __iter__(self):
        yield from sorted(
            [*self._standard.values(), *self._extra.values()], key=_sort_key
        )


_default_table = TagTable()


def search_tags(pattern: str) -> BlockTag | None:
    """Look a tag up in the shared table."""
    return _default_table.search(pattern)


def define_tag(name: str, selfclose: bool) -> BlockTag:
    """Define an extra block tag in the shared table."""
    return _default_table.define(name, selfclose)