"""Recognisers for the block-level structures of a markdown document."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from .document import Line, LineKind, ParagraphType
from .flags import Flag
from .tags import BlockTag, search_tags

__all__ = [
    "COMMENT_TAG",
    "HeaderStyle",
    "ListMatch",
    "checkline",
    "is_hr",
    "is_setext",
    "header_style",
    "is_quote",
    "is_code",
    "is_footnote",
    "is_open_tag",
    "is_code_fence",
    "is_div_marker",
    "is_definition",
    "is_extra_dd",
    "match_list",
    "end_of_block",
    "skip_empty",
]

COMMENT_TAG = BlockTag("!--")
"""Pseudo-tag returned by :func:`is_open_tag` for an html comment."""

_SPACES = frozenset(" \t\n\v\f\r")
_NUMBER = re.compile(r"[+-]?[0-9]+")


class HeaderStyle(enum.Enum):
    """How a header is written: ``# leading hashes`` or underlined."""

    ETX = enum.auto()
    SETEXT = enum.auto()


@dataclass(frozen=True)
class ListMatch:
    """A line that starts a list.

    ``list_class`` is what decides whether following items join the list
    (``DL``, ``UL`` or ``AL``); ``list_type`` is the paragraph type of the
    list itself.  For definition lists ``definition_style`` is 1 for the
    ``=term=`` style and 2 for the ``term`` / ``: definition`` style, and
    ``last_term`` is the last line of the terms.
    """

    list_class: ParagraphType
    list_type: ParagraphType
    clip: int
    definition_style: int = 0
    last_term: Line | None = None


def _on(flags: Flag | None, flag: Flag) -> bool:
    return flags is not None and bool(flags & flag)


def _char(line: Line, index: int) -> str:
    text = line.text
    return text[index] if 0 <= index < len(text) else ""


def _isspace(ch: str) -> bool:
    return ch in _SPACES


def _isalpha(ch: str) -> bool:
    return ch != "" and ch.isascii() and ch.isalpha()


def _isdigit(ch: str) -> bool:
    return ch != "" and "0" <= ch <= "9"


def _next_blank(line: Line, index: int) -> int:
    text = line.text
    while index < len(text) and not _isspace(text[index]):
        index += 1
    return index


def _next_nonblank(line: Line, index: int) -> int:
    text = line.text
    while index < len(text) and _isspace(text[index]):
        index += 1
    return index


def skip_empty(line: Line | None) -> Line | None:
    """The first line from ``line`` on that is not blank."""
    while line is not None and line.dle == len(line.text):
        line = line.next
    return line


def checkline(line: Line, flags: Flag | None = None) -> LineKind:
    """Classify ``line`` on its own, record the result on it and return its kind."""
    line.is_checked = True
    line.kind = LineKind.TEXT
    line.is_fenced = False
    line.count = 0

    if line.dle >= 4:
        line.kind = LineKind.CODE
        return line.kind

    text = line.text
    eol = len(text)
    while eol > line.dle and _isspace(text[eol - 1]):
        eol -= 1

    if _on(flags, Flag.FENCEDCODE) and not _on(flags, Flag.STRICT):
        first = _char(line, line.dle)
        if first in ("~", "`"):
            for ch in text[line.dle:eol]:
                if ch not in "~`":
                    break
                line.count += 1
            if line.count > 1:
                line.kind = LineKind.BACKTICK if first == "`" else LineKind.TILDE
                line.is_fenced = True
                return line.kind

    seen: set[str] = set()
    other = False
    for ch in text[line.dle:eol]:
        if ch != " ":
            line.count += 1
        if ch in "-=_*":
            seen.add(ch)
        elif ch != " ":
            other = True

    if len(seen) > 1:
        return line.kind

    if not other:
        if "_" in seen or "*" in seen:
            line.kind = LineKind.HR
        elif "-" in seen:
            line.kind = LineKind.DASH
        elif "=" in seen:
            line.kind = LineKind.EQUAL
    return line.kind


def is_hr(line: Line, flags: Flag | None = None) -> bool:
    """True if ``line`` is a horizontal rule."""
    if not line.is_checked:
        checkline(line, flags)
    if line.count > 2:
        return line.kind in (LineKind.HR, LineKind.DASH, LineKind.EQUAL)
    return False


def is_setext(line: Line, flags: Flag | None = None) -> bool:
    """True if the line after ``line`` underlines it as a header."""
    underline = line.next
    if underline is None:
        return False
    if not underline.is_checked:
        checkline(underline, flags)
    return underline.kind in (LineKind.DASH, LineKind.EQUAL)


def header_style(line: Line, flags: Flag | None = None) -> HeaderStyle | None:
    """The style of header ``line`` starts, or ``None`` if it is not a header."""
    if line.dle == 0 and len(line.text) > 1 and line.text[0] == "#":
        return HeaderStyle.ETX
    if is_setext(line, flags):
        return HeaderStyle.SETEXT
    return None


def is_quote(line: Line) -> bool:
    """True if ``line`` starts a blockquote."""
    return line.dle < 4 and _char(line, line.dle) == ">"


def is_code(line: Line) -> bool:
    """True if ``line`` is indented far enough to be code."""
    return line.dle >= 4


def is_footnote(line: Line) -> bool:
    """True if ``line`` looks like ``[label]: content`` with at most 3 spaces of indent."""
    index = line.dle
    if index > 3 or _char(line, index) != "[":
        return False
    for pos in range(index + 1, len(line.text)):
        ch = line.text[pos]
        if ch == "[":
            return False
        if ch == "]":
            return _char(line, pos + 1) == ":"
    return False


def is_open_tag(line: Line | None) -> BlockTag | None:
    """The block tag ``line`` opens, :data:`COMMENT_TAG` for a comment, or ``None``."""
    if line is None:
        return None
    text = line.text
    if len(text) < 3 or text[0] != "<":
        return None
    if text[1:4] == "!--":
        return COMMENT_TAG
    end = 1
    while end < len(text) and text[end] not in ">/" and not _isspace(text[end]):
        end += 1
    return search_tags(text[1:end])


def is_code_fence(
    line: Line,
    size: int,
    kind: LineKind | None = None,
    flags: Flag | None = None,
) -> bool:
    """True if ``line`` is a code fence at least ``size`` long.

    With ``kind`` of ``None`` (or ``LineKind.TEXT``) either fence character
    matches; otherwise the fence must be of that kind.
    """
    if not _on(flags, Flag.FENCEDCODE) or _on(flags, Flag.STRICT):
        return False
    if not line.is_checked:
        checkline(line, flags)
    if not line.is_fenced:
        return False
    if kind is not None and kind is not LineKind.TEXT:
        return line.kind is kind and line.count >= size
    return line.kind in (LineKind.TILDE, LineKind.BACKTICK) and line.count >= size


def _marker_class_size(text: str) -> int:
    lowered = text.lower()
    if lowered.startswith("id:"):
        return 3
    if lowered.startswith("class:"):
        return 6
    return 0


def _iscsschar(ch: str) -> bool:
    return _isalpha(ch) or ch in ("-", "_", " ")


def is_div_marker(line: Line, start: int = 0, flags: Flag | None = None) -> bool:
    """True if ``line`` from ``start`` is a ``%[id:|class:]name%`` div marker."""
    if _on(flags, Flag.NODIVQUOTE) or _on(flags, Flag.STRICT):
        return False
    start = _next_nonblank(line, start)
    marker = line.text[start:]
    last = len(marker) - 1
    if last <= 0 or marker[0] != "%" or marker[last] != "%":
        return False
    index = _marker_class_size(marker[1:])
    if not _iscsschar(marker[index + 1]):
        return False
    index += 1
    while index + 1 < last:
        index += 1
        ch = marker[index]
        if not (_isdigit(ch) or _iscsschar(ch)):
            return False
    return True


def is_extra_dd(line: Line) -> bool:
    """True if ``line`` is a ``: definition`` line."""
    return (
        line.dle < 4
        and _char(line, line.dle) == ":"
        and _isspace(_char(line, line.dle + 1))
    )


def _discount_dt(line: Line | None) -> tuple[Line, int] | None:
    current = line
    while (
        current is not None
        and current.next is not None
        and len(current.text) > 2
        and current.dle == 0
        and current.text[0] == "="
        and current.text[-1] == "="
    ):
        if current.next.dle >= 4:
            return current, 4
        current = current.next
    return None


def _extra_dt(line: Line | None, flags: Flag | None) -> tuple[Line, int] | None:
    current = line
    while current is not None and current.next is not None and current.text:
        if is_code(current) or end_of_block(current, flags):
            return None
        following = skip_empty(current.next)
        if following is not None and is_extra_dd(following):
            return current, following.dle + 2
        current = current.next
    return None


def is_definition(line: Line | None, flags: Flag | None = None) -> ListMatch | None:
    """The definition list ``line`` starts, if definition lists are enabled."""
    if line is None or _on(flags, Flag.STRICT):
        return None
    if _on(flags, Flag.DLDISCOUNT):
        found = _discount_dt(line)
        if found is not None:
            last, clip = found
            return ListMatch(ParagraphType.DL, ParagraphType.DL, clip, 1, last)
    if _on(flags, Flag.DLEXTRA):
        found = _extra_dt(line, flags)
        if found is not None:
            last, clip = found
            return ListMatch(ParagraphType.DL, ParagraphType.DL, clip, 2, last)
    return None


def match_list(line: Line, flags: Flag | None = None) -> ListMatch | None:
    """The list ``line`` starts, or ``None`` if it is not a list item."""
    if end_of_block(line, flags):
        return None

    definition = is_definition(line, flags)
    if definition is not None:
        return definition

    dle = line.dle
    marker = _char(line, dle)
    if marker in ("*", "-", "+") and _isspace(_char(line, dle + 1)):
        clip = min(_next_nonblank(line, dle + 1), 4)
        list_class = (
            ParagraphType.UL if _on(flags, Flag.EXPLICITLIST) else ParagraphType.AL
        )
        return ListMatch(list_class, ParagraphType.UL, clip)

    end = _next_blank(line, dle)
    if end > dle and line.text[end - 1] == ".":
        if (
            not (_on(flags, Flag.NOALPHALIST) or _on(flags, Flag.STRICT))
            and end == dle + 2
            and _isalpha(line.text[dle])
        ):
            clip = min(_next_nonblank(line, end), 4)
            return ListMatch(ParagraphType.AL, ParagraphType.AL, clip)

        number = _NUMBER.match(line.text, dle)
        if number is not None and number.end() == end - 1:
            clip = _next_nonblank(line, end)
            return ListMatch(ParagraphType.AL, ParagraphType.OL, clip)
    return None


def end_of_block(line: Line | None, flags: Flag | None = None) -> bool:
    """True if ``line`` is blank, a rule or a header, so ends a text block."""
    if line is None:
        return False
    return (
        len(line.text) <= line.dle
        or is_hr(line, flags)
        or header_style(line, flags) is not None
    )