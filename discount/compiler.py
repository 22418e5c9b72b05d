"""Compilation of a markdown document into a tree of block paragraphs."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .blocks import (
    COMMENT_TAG,
    HeaderStyle,
    checkline,
    header_style,
    is_code,
    is_code_fence,
    is_definition,
    is_div_marker,
    is_extra_dd,
    is_footnote,
    is_hr,
    is_open_tag,
    is_quote,
    is_setext,
    match_list,
    end_of_block,
    skip_empty,
)
from .document import (
    Align,
    Document,
    Footnote,
    Line,
    LineKind,
    Paragraph,
    ParagraphType,
    read_document,
)
from .flags import Flag, flags_differ
from .tags import BlockTag
from .toc import uniquify

__all__ = ["footnote_key", "compile_document", "compile_markdown"]

_SPACES = frozenset(" \t\n\v\f\r")
_DIMENSIONS = re.compile(r"=\s*([+-]?\d+)(?:x\s*([+-]?\d+))?")


@dataclass
class _Context:
    flags: Flag
    footnotes: list[Footnote] = field(default_factory=list)

    def on(self, flag: Flag) -> bool:
        return bool(self.flags & flag)


def _isspace(ch: str) -> bool:
    return ch in _SPACES


def _char(line: Line, index: int) -> str:
    text = line.text
    return text[index] if 0 <= index < len(text) else ""


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


def _lines(line: Line | None) -> Iterator[Line]:
    while line is not None:
        yield line
        line = line.next


def _link(paragraphs: list[Paragraph]) -> Paragraph | None:
    for current, following in zip(paragraphs, paragraphs[1:]):
        current.next = following
    if not paragraphs:
        return None
    paragraphs[-1].next = None
    return paragraphs[0]


def _is_blank(line: Line) -> bool:
    return len(line.text) <= line.dle


def _consume(line: Line | None) -> tuple[Line | None, int]:
    blanks = 0
    while line is not None and _is_blank(line):
        line = line.next
        blanks += 1
    return line, blanks


def _ascii_lower(ch: str) -> str:
    return chr(ord(ch) + 32) if "A" <= ch <= "Z" else ch


def footnote_key(footnote: Footnote) -> tuple[int, tuple[int, ...]]:
    """Sort key for footnotes: tag length, then tag case-insensitively.

    Any whitespace character compares equal to any other.
    """
    folded = tuple(
        32 if _isspace(ch) else ord(_ascii_lower(ch)) for ch in footnote.tag
    )
    return len(footnote.tag), folded


class _Cursor:
    """Reads characters across a chain of lines."""

    def __init__(self, line: Line | None) -> None:
        self.line = line
        self.index = 0

    def getc(self) -> str:
        while self.line is not None:
            if self.index < len(self.line.text):
                ch = self.line.text[self.index]
                self.index += 1
                return ch
            self.line = self.line.next
            self.index = 0
        return ""


def _split_line(line: Line, cutpoint: int) -> None:
    if cutpoint < len(line.text):
        line.next = Line(text=line.text[cutpoint:], next=line.next)
        line.text = line.text[:cutpoint]


def _comment_block(paragraph: Paragraph) -> tuple[Line | None, bool]:
    for line in _lines(paragraph.text):
        end = line.text.find("-->")
        if end >= 0:
            if _next_nonblank(line, end + 3) < len(line.text):
                continue
            rest = line.next
            line.next = None
            return rest, False
    return None, True


def _html_block(paragraph: Paragraph, tag: BlockTag) -> tuple[Line | None, bool]:
    """Cut an html block off the paragraph; return the rest and whether it was unclosed."""
    if tag is COMMENT_TAG:
        return _comment_block(paragraph)

    first = paragraph.text
    if tag.selfclose:
        rest = first.next
        first.next = None
        return rest, False

    cursor = _Cursor(first)
    depth = 0
    while True:
        c = cursor.getc()
        if not c:
            break
        if c != "<":
            continue
        c = cursor.getc()
        if c == "!":
            if cursor.getc() == "-" and cursor.getc() == "-":
                while True:
                    c = cursor.getc()
                    if not c:
                        break
                    if c == "-" and cursor.getc() == "-" and cursor.getc() == ">":
                        break
            continue

        closing = c == "/"
        if closing:
            c = cursor.getc()
        matched = 0
        while matched < tag.size and tag.name[matched] == c.upper():
            matched += 1
            c = cursor.getc()
        if matched == tag.size and not (c.isascii() and c.isalnum()):
            depth += -1 if closing else 1
            if depth == 0:
                while c and c != ">":
                    c = cursor.getc()
                if not c:
                    break
                if cursor.line is None:
                    return None, False
                _split_line(cursor.line, cursor.index)
                rest = cursor.line.next
                cursor.line.next = None
                return rest, False
    return None, True


def _header_block(paragraph: Paragraph, style: HeaderStyle) -> Line | None:
    line = paragraph.text
    if style is HeaderStyle.SETEXT:
        underline = line.next
        paragraph.hnumber = 1 if _char(underline, 0) == "=" else 2
        rest = underline.next
        line.next = None
        return rest

    text = line.text
    index = 0
    while index < len(text) - 1 and text[index] == text[0]:
        index += 1
    paragraph.hnumber = min(index, 6)
    while index < len(text) and _isspace(text[index]):
        index += 1
    text = text[index:]
    end = len(text)
    while end > 0 and _isspace(text[end - 1]):
        end -= 1
    text = text[:end]
    line.is_checked = False

    end = len(text)
    while end > 1 and text[end - 1] == "#":
        end -= 1
    while end and _isspace(text[end - 1]):
        end -= 1
    line.text = text[:end]

    rest = line.next
    line.next = None
    return rest


def _code_block(paragraph: Paragraph) -> Line | None:
    line = paragraph.text
    while line is not None:
        line.trim(4)
        following = skip_empty(line.next)
        if following is None or not is_code(following):
            line.next = None
            return following
        line = following
    return None


def _fenced_code_chunk(first: Line, flags: Flag) -> Line | None:
    if first.next is None or is_code_fence(first.next, first.count, first.kind, flags):
        first.kind = LineKind.TEXT
        first.is_fenced = False
        if first.next is not None:
            first.next.kind = LineKind.TEXT
            first.next.is_fenced = False
        return first.next

    for closing in _lines(first.next):
        if is_code_fence(closing, first.count, first.kind, flags):
            if len(first.text) - first.count > 0:
                lang = first.text[first.count:].lstrip(" ")
                if lang:
                    first.fence_class = lang
            line = first
            while line is not None and line is not closing:
                line.is_fenced = True
                line = line.next
            first.text = ""
            closing.text = ""
            closing.is_fenced = False
            return closing.next

    first.is_fenced = False
    first.kind = LineKind.TEXT
    return first


def _centered(first: Line | None, last: Line | None) -> Align:
    if first is not None and last is not None:
        if (
            len(last.text) > 2
            and first.text.startswith("->")
            and last.text.endswith("<-")
        ):
            first.text = first.text[2:]
            last.text = last.text[:-2]
            return Align.CENTER
    return Align.IMPLICIT


def _end_of_text_block(line: Line, toplevel: bool, flags: Flag) -> bool:
    if end_of_block(line, flags) or is_quote(line):
        return True
    return False if toplevel else match_list(line, flags) is not None


def _text_block(paragraph: Paragraph, toplevel: bool, flags: Flag) -> Line | None:
    line = paragraph.text
    while line is not None:
        if is_code_fence(line, line.count, None, flags):
            following = _fenced_code_chunk(line, flags)
        else:
            following = line.next
            if following is None or _end_of_text_block(following, toplevel, flags):
                paragraph.align = _centered(paragraph.text, line)
                line.next = None
                return following
        line = following
    return None


def _marker_class_size(text: str) -> int:
    lowered = text.lower()
    if lowered.startswith("id:"):
        return 3
    if lowered.startswith("class:"):
        return 6
    return 0


def _quote_block(paragraph: Paragraph, flags: Flag) -> Line | None:
    line = paragraph.text
    following: Line | None = None
    while line is not None:
        if is_quote(line):
            clip = line.text.index(">") + 1
            if _char(line, clip) == " ":
                clip += 1
            line.trim(clip)
            checkline(line, flags)

        following = skip_empty(line.next)
        if following is None or (
            following is not line.next
            and (not is_quote(following) or is_div_marker(following, 1, flags))
        ):
            line.next = None
            break
        line = following

    marker = paragraph.text
    if marker is not None and is_div_marker(marker, 0, flags):
        paragraph.text = marker.next
        size = _marker_class_size(marker.text[1:])
        prefix = "id" if size == 3 else "class"
        name = marker.text[size + 1:len(marker.text) - 1]
        paragraph.ident = f'{prefix}="{name}"'
    return following


def _list_item(
    paragraph: Paragraph,
    indent: int,
    flags: Flag,
    check: Callable[[Line], bool] | None,
) -> Line | None:
    clip = indent
    firstpara = True
    line = paragraph.text
    while line is not None:
        line.is_checked = False
        line.trim(clip)

        if firstpara and not (flags & (Flag.NORMAL_LISTITEM | Flag.STRICT)):
            rest = line.text[line.dle:line.dle + 3]
            if rest == "[ ]" or rest.lower() == "[x]":
                line.trim(3)
                paragraph.github_check = True
                if rest != "[ ]":
                    paragraph.is_checked = True
            firstpara = False

        if indent > 4:
            indent = 4

        following = skip_empty(line.next)
        if following is None:
            line.next = None
            return None

        if following is not line.next:
            if following.dle < indent:
                following = line.next
                line.next = None
                return following
            indent = clip if clip else 2

        if (
            following.dle < indent
            and (
                is_hr(following, flags)
                or match_list(following, flags) is not None
                or (check is not None and check(following))
            )
            and not is_setext(following, flags)
        ):
            following = line.next
            line.next = None
            return following

        clip = min(following.dle, indent)
        line = following
    return None


def _definition_block(top: Paragraph, clip: int, ctx: _Context) -> Line | None:
    items: list[Paragraph] = []
    following = top.text
    text: Line | None = None

    while (labels := following) is not None:
        match = is_definition(labels, ctx.flags)
        if match is None:
            break
        kind = match.definition_style
        last_term = match.last_term
        text = skip_empty(last_term.next)
        if text is None:
            break
        para = text is not last_term.next
        last_term.next = None
        if kind == 1:
            for label in _lines(labels):
                label.text = label.text[1:-1] if label.text else ""
                label.is_checked = False

        done = False
        while True:
            item = Paragraph(typ=ParagraphType.LISTITEM, text=text)
            items.append(item)
            text = _list_item(item, clip, ctx.flags, is_extra_dd if kind == 2 else None)
            item.down = _compile(item.text, False, ctx)
            item.text = labels
            labels = None
            if para and item.down is not None:
                item.down.align = Align.PARA

            following = skip_empty(text)
            if following is None:
                done = True
                break
            para = following is not text
            if para:
                text = following
            if not (kind == 2 and is_extra_dd(following)):
                break
        if done:
            break

    top.text = None
    top.down = _link(items)
    return text


def _enumerated_block(
    top: Paragraph, clip: int, ctx: _Context, list_class: ParagraphType
) -> Line | None:
    items: list[Paragraph] = []
    following = top.text
    text: Line | None = None
    para = False

    while (text := following) is not None:
        item = Paragraph(typ=ParagraphType.LISTITEM, text=text)
        items.append(item)
        text = _list_item(item, clip, ctx.flags, None)
        item.down = _compile(item.text, False, ctx)
        item.text = None
        if para and item.down is not None:
            item.down.align = Align.PARA

        following = skip_empty(text)
        if following is None:
            break
        match = match_list(following, ctx.flags)
        if match is None:
            break
        clip = match.clip
        if match.list_class is not list_class:
            break
        para = following is not text
        if para and item.down is not None:
            item.down.align = Align.PARA

    top.text = None
    top.down = _link(items)
    return text


def _quote_closer(ch: str) -> str:
    if ch in ("'", '"'):
        return ch
    return ")" if ch == "(" else ""


def _extra_block(line: Line | None) -> Line | None:
    while line is not None and line.next is not None:
        following = line.next
        if following.dle < 4 and following.dle < len(following.text):
            line.next = None
            return following
        following.trim(4)
        line = following
    return None


def _add_footnote(line: Line, ctx: _Context) -> Line | None:
    following = line.next
    footnote = Footnote()
    ctx.footnotes.append(footnote)

    start = line.dle + 1
    close = line.text.index("]", start)
    footnote.tag = line.text[start:close]
    pos = _next_nonblank(line, close + 2)

    if (
        ctx.on(Flag.EXTRA_FOOTNOTE)
        and not ctx.on(Flag.STRICT)
        and footnote.tag.startswith("^")
    ):
        footnote.extra = True
        line.trim(pos)
        following = _extra_block(line)
        footnote.text = _compile(line, False, ctx)
        return following

    end = _next_blank(line, pos)
    footnote.link = line.text[pos:end]
    pos = _next_nonblank(line, end)

    if _char(line, pos) == "=":
        dims = _DIMENSIONS.match(line.text, pos)
        if dims is not None:
            footnote.width = int(dims.group(1))
            if dims.group(2) is not None:
                footnote.height = int(dims.group(2))
        pos = _next_nonblank(line, _next_blank(line, pos))

    if (
        pos >= len(line.text)
        and following is not None
        and following.dle
        and _quote_closer(_char(following, following.dle))
    ):
        line = following
        following = line.next
        pos = line.dle

    closer = _quote_closer(_char(line, pos))
    if closer:
        title = line.text[pos + 1:]
        cut = title.rfind(closer)
        footnote.title = title[:cut] if cut >= 0 else ""
    return following


def _actually_a_table(flags: Flag, first: Line | None) -> bool:
    if flags & (Flag.NOTABLES | Flag.STRICT):
        return False
    if first is None or first.next is None or first.next.next is None:
        return False
    if not all(line.has_pipechar for line in _lines(first)):
        return False
    if _char(first, first.dle) == "|":
        if any(_char(line, min(line.dle, first.dle)) != "|" for line in _lines(first)):
            return False
    divider = first.next
    return all(
        _isspace(ch) or ch in "-:|" for ch in divider.text[divider.dle:]
    )


def _compile(line: Line | None, toplevel: bool, ctx: _Context) -> Paragraph | None:
    """Break a chain of lines into code, rules, lists, quotes, headers and text."""
    flags = ctx.flags
    paragraphs: list[Paragraph] = []
    para = int(toplevel)
    blocks = 0

    line, eaten = _consume(line)
    if line is not None:
        para = eaten

    while line is not None:
        if is_code(line):
            paragraph = Paragraph(typ=ParagraphType.CODE, text=line)
            if ctx.on(Flag.ONE_COMPAT):
                line.text = line.text.rstrip(" \t\n\v\f\r")
            line = _code_block(paragraph)
        elif is_hr(line, flags):
            paragraph = Paragraph(typ=ParagraphType.HR)
            line = line.next
        elif (match := match_list(line, flags)) is not None:
            if match.list_class is ParagraphType.DL:
                paragraph = Paragraph(typ=ParagraphType.DL, text=line)
                line = _definition_block(paragraph, match.clip, ctx)
            else:
                paragraph = Paragraph(typ=match.list_type, text=line)
                line = _enumerated_block(paragraph, match.clip, ctx, match.list_class)
        elif is_quote(line):
            paragraph = Paragraph(typ=ParagraphType.QUOTE, text=line)
            line = _quote_block(paragraph, flags)
            paragraph.down = _compile(paragraph.text, True, ctx)
            paragraph.text = None
        elif (style := header_style(line, flags)) is not None:
            paragraph = Paragraph(typ=ParagraphType.HDR, text=line)
            line = _header_block(paragraph, style)
        else:
            paragraph = Paragraph(typ=ParagraphType.MARKUP, text=line)
            unclosed = True
            if not ctx.on(Flag.NOHTML) and (tag := is_open_tag(line)) is not None:
                line, unclosed = _html_block(paragraph, tag)
                if not unclosed:
                    paragraph.typ = ParagraphType.HTML
            if unclosed:
                line = _text_block(paragraph, toplevel, flags)
                if _actually_a_table(flags, paragraph.text):
                    paragraph.typ = ParagraphType.TABLE
        paragraphs.append(paragraph)

        if (para or toplevel) and paragraph.align is Align.IMPLICIT:
            paragraph.align = Align.PARA

        blocks += 1
        para = int(toplevel or blocks > 1)
        line, eaten = _consume(line)
        if line is not None:
            para = eaten

        if para and paragraph.align is Align.IMPLICIT:
            paragraph.align = Align.PARA

    return _link(paragraphs)


def _compile_top(line: Line | None, ctx: _Context) -> Paragraph | None:
    """Split a document into html, style and source blocks, filing footnotes away."""
    flags = ctx.flags
    paragraphs: list[Paragraph] = []
    source: list[Line] = []

    def uncache() -> None:
        if source:
            for current, following in zip(source, source[1:]):
                current.next = following
            source[-1].next = None
            block = Paragraph(typ=ParagraphType.SOURCE)
            paragraphs.append(block)
            block.down = _compile(source[0], True, ctx)
            source.clear()

    while line is not None:
        tag = None if ctx.on(Flag.NOHTML) else is_open_tag(line)
        if tag is not None:
            uncache()
            if ctx.on(Flag.NOSTYLE) or ctx.on(Flag.STRICT) or tag.name != "STYLE":
                blocktype = ParagraphType.HTML
            else:
                blocktype = ParagraphType.STYLE
            paragraph = Paragraph(typ=blocktype, text=line)
            paragraphs.append(paragraph)
            line, unclosed = _html_block(paragraph, tag)
            if unclosed:
                paragraph.typ = ParagraphType.SOURCE
                paragraph.down = _compile(paragraph.text, True, ctx)
                paragraph.text = None
        elif is_footnote(line):
            line, _ = _consume(_add_footnote(line, ctx))
        elif is_code_fence(line, 2, None, flags):
            source.append(line)
            checkpoint = len(source)
            more = line.next
            while more is not None and not is_code_fence(more, line.count, line.kind, flags):
                source.append(more)
                more = more.next
            if more is not None:
                line = more
            else:
                del source[checkpoint:]
                line = line.next
        else:
            source.append(line)
            line = line.next

    uncache()
    head = _link(paragraphs)
    if ctx.on(Flag.TOC) and not ctx.on(Flag.STRICT):
        uniquify(head)
    return head


def compile_document(document: Document, flags: Flag | None = None) -> Paragraph | None:
    """Compile ``document`` into its paragraph tree, which is also stored on it.

    A compiled document is only recompiled when it is dirty or the flags
    change; its input lines are used up by the first compilation.
    """
    if document.compiled:
        if document.dirty or flags_differ(flags, document.flags):
            document.compiled = False
            document.dirty = False
            document.code = None
            document.footnotes = []
        else:
            return document.code

    document.compiled = True
    document.flags = flags if flags is not None else Flag(0)
    ctx = _Context(flags=document.flags)
    document.code = _compile_top(document.content, ctx)
    document.footnotes = sorted(ctx.footnotes, key=footnote_key)
    document.content = None
    return document.code


def compile_markdown(text: str, flags: Flag | None = None) -> Document:
    """Read and compile markdown text, returning the compiled document."""
    document = read_document(text, flags)
    compile_document(document, flags)
    return document