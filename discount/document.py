"""Input documents: lines, paragraphs, footnotes and the reader that builds them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterator, TextIO, BinaryIO

from .flags import Flag

__all__ = [
    "LineKind",
    "Line",
    "ParagraphType",
    "Align",
    "Paragraph",
    "Footnote",
    "Document",
    "make_line",
    "read_document",
    "read_file",
]

_DEFAULT_TABSTOP = 4
_SPACES = frozenset(" \t\n\v\f\r")


def _isspace(ch: str) -> bool:
    return ch in _SPACES


class LineKind(enum.Enum):
    """What a line looks like on its own, once it has been checked."""

    TEXT = enum.auto()
    CODE = enum.auto()
    HR = enum.auto()
    DASH = enum.auto()
    TILDE = enum.auto()
    BACKTICK = enum.auto()
    EQUAL = enum.auto()


@dataclass(eq=False)
class Line:
    """One input line with tabs expanded; lines are chained through ``next``."""

    text: str = ""
    next: Line | None = field(default=None, repr=False)
    dle: int = 0
    has_pipechar: bool = False
    is_checked: bool = False
    kind: LineKind = LineKind.TEXT
    is_fenced: bool = False
    fence_class: str | None = None
    count: int = 0

    def first_nonblank(self) -> int:
        """Index of the first non-whitespace character, or the line length."""
        for index, ch in enumerate(self.text):
            if not _isspace(ch):
                return index
        return len(self.text)

    def trim(self, clip: int) -> None:
        """Drop ``clip`` leading characters and recompute the indent."""
        if clip >= len(self.text):
            self.text = ""
            self.dle = 0
        elif clip > 0:
            self.text = self.text[clip:]
            self.dle = self.first_nonblank()


class ParagraphType(enum.Enum):
    """The kind of block a paragraph holds."""

    WHITESPACE = 0
    CODE = enum.auto()
    QUOTE = enum.auto()
    MARKUP = enum.auto()
    HTML = enum.auto()
    STYLE = enum.auto()
    DL = enum.auto()
    UL = enum.auto()
    OL = enum.auto()
    AL = enum.auto()
    LISTITEM = enum.auto()
    HDR = enum.auto()
    HR = enum.auto()
    TABLE = enum.auto()
    SOURCE = enum.auto()


class Align(enum.Enum):
    """How a paragraph is wrapped when it is written out."""

    IMPLICIT = 0
    PARA = enum.auto()
    CENTER = enum.auto()


@dataclass(eq=False)
class Paragraph:
    """A block of lines, with the next block and any recompiled contents."""

    typ: ParagraphType = ParagraphType.WHITESPACE
    text: Line | None = None
    next: Paragraph | None = field(default=None, repr=False)
    down: Paragraph | None = field(default=None, repr=False)
    label: str | None = None
    ident: str | None = None
    lang: str | None = None
    align: Align = Align.IMPLICIT
    hnumber: int = 0
    github_check: bool = False
    is_checked: bool = False


@dataclass(eq=False)
class Footnote:
    """A reference-style link, image, or extra-style footnote."""

    tag: str = ""
    link: str = ""
    title: str = ""
    text: Paragraph | None = None
    attrib: str = ""
    height: int = 0
    width: int = 0
    refnumber: int = 0
    extra: bool = False
    referenced: bool = False


Callback = Callable[..., object]


class Document:
    """A document read from markdown input, ready to be compiled."""

    def __init__(self, tabstop: int = _DEFAULT_TABSTOP) -> None:
        self.title: Line | None = None
        self.author: Line | None = None
        self.date: Line | None = None
        self.content: Line | None = None
        self.code: Paragraph | None = None
        self.compiled = False
        self.dirty = False
        self.html = False
        self.tabstop = tabstop
        self.flags: Flag | None = None
        self.footnotes: list[Footnote] = []
        self._ref_prefix: str | None = None
        self._url_callback: Callback | None = None
        self._flags_callback: Callback | None = None
        self._anchor_callback: Callback | None = None
        self._code_format_callback: Callback | None = None

    def __iter__(self) -> Iterator[Line]:
        line = self.content
        while line is not None:
            yield line
            line = line.next

    @property
    def ref_prefix(self) -> str | None:
        """Prefix for the hrefs of extra-style footnotes."""
        return self._ref_prefix

    @ref_prefix.setter
    def ref_prefix(self, value: str | None) -> None:
        if value != self._ref_prefix:
            self.dirty = True
        self._ref_prefix = value

    @property
    def url_callback(self) -> Callback | None:
        """Callback that edits urls before they are written."""
        return self._url_callback

    @url_callback.setter
    def url_callback(self, value: Callback | None) -> None:
        if value is not self._url_callback:
            self.dirty = True
        self._url_callback = value

    @property
    def flags_callback(self) -> Callback | None:
        """Callback that supplies extra attributes for links."""
        return self._flags_callback

    @flags_callback.setter
    def flags_callback(self, value: Callback | None) -> None:
        if value is not self._flags_callback:
            self.dirty = True
        self._flags_callback = value

    @property
    def anchor_callback(self) -> Callback | None:
        """Callback that formats header anchors."""
        return self._anchor_callback

    @anchor_callback.setter
    def anchor_callback(self, value: Callback | None) -> None:
        if value is not self._anchor_callback:
            self.dirty = True
        self._anchor_callback = value

    @property
    def code_format_callback(self) -> Callback | None:
        """Callback that formats code blocks, e.g. for highlighting."""
        return self._code_format_callback

    @code_format_callback.setter
    def code_format_callback(self, value: Callback | None) -> None:
        if value is not self._code_format_callback:
            self.dirty = True
            self._code_format_callback = value


def make_line(text: str, tabstop: int = _DEFAULT_TABSTOP) -> Line:
    """Build a line, expanding tabs and dropping control characters."""
    chars: list[str] = []
    has_pipe = False
    column = 0
    for ch in text:
        if ch == "\t":
            while True:
                chars.append(" ")
                column += 1
                if column % tabstop == 0:
                    break
        elif ch >= " ":
            if ch == "|":
                has_pipe = True
            chars.append(ch)
            column += 1
    line = Line(text="".join(chars), has_pipechar=has_pipe)
    line.dle = line.first_nonblank()
    return line


def _kept(ch: str) -> bool:
    code = ord(ch)
    return code >= 0x80 or 0x20 <= code < 0x7F or _isspace(ch)


def read_document(text: str, flags: Flag | None = None) -> Document:
    """Split markdown text into a chain of lines, pulling out a pandoc header."""
    pandoc_allowed = flags is None or not (flags & (Flag.NOHEADER | Flag.STRICT))
    tabstop = _DEFAULT_TABSTOP
    document = Document(tabstop=tabstop)

    raw = "".join(ch for ch in text if _kept(ch)).split("\n")
    complete, tail = raw[:-1], raw[-1]

    header = pandoc_allowed and len(complete) >= 3 and all(
        row.startswith("%") for row in complete[:3]
    )

    lines = [make_line(row, tabstop) for row in complete]
    if tail:
        lines.append(make_line(tail, tabstop))

    if header:
        document.title, document.author, document.date = lines[:3]
        for line in lines[:3]:
            line.trim(1)
        lines = lines[3:]

    for current, following in zip(lines, lines[1:]):
        current.next = following
    document.content = lines[0] if lines else None
    return document


def read_file(stream: TextIO | BinaryIO, flags: Flag | None = None) -> Document:
    """Read markdown from an open text or binary stream."""
    data = stream.read()
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return read_document(data, flags)