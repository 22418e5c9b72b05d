"""Rendering flags and conversion from the older bitmap flag layout."""

from __future__ import annotations

import enum

__all__ = ["Flag", "V2Flag", "flags_differ", "shared_flags", "from_v2"]


class Flag(enum.Flag):
    """Rendering options; each member is one bit, numbered in declaration order."""

    NOLINKS = 1 << 0  # don't do link processing, block <a> tags
    NOIMAGE = 1 << 1  # don't do image processing, block <img>
    NOPANTS = 1 << 2  # don't run smartypants()
    NOHTML = 1 << 3  # don't allow raw html through at all
    NORMAL_LISTITEM = 1 << 4  # disable github-style checkbox lists
    TAGTEXT = 1 << 5  # process text inside an html tag
    NO_EXT = 1 << 6  # don't allow pseudo-protocols
    NOEXT = NO_EXT
    EXPLICITLIST = 1 << 7  # don't combine numbered/bulleted lists
    CDATA = 1 << 8  # generate code for xml ![CDATA[...]]
    NOSUPERSCRIPT = 1 << 9  # no A^B
    STRICT = 1 << 10  # conform to the reference implementation
    NOTABLES = 1 << 11  # disallow tables
    NOSTRIKETHROUGH = 1 << 12  # forbid ~~strikethrough~~
    ONE_COMPAT = 1 << 13  # compatibility with MarkdownTest_1.0
    TOC = 1 << 14  # do table-of-contents processing
    AUTOLINK = 1 << 15  # make http://foo.com a link even without <>s
    NOHEADER = 1 << 16  # don't process header blocks
    TABSTOP = 1 << 17  # expand tabs to 4 spaces
    SAFELINK = 1 << 18  # paranoid check for link protocol
    NODIVQUOTE = 1 << 19  # forbid >%class% blocks
    NOALPHALIST = 1 << 20  # forbid alphabetic lists
    EXTRA_FOOTNOTE = 1 << 21  # enable markdown extra-style footnotes
    NOSTYLE = 1 << 22  # don't extract <style> blocks
    DLDISCOUNT = 1 << 23  # enable discount-style definition lists
    DLEXTRA = 1 << 24  # enable extra-style definition lists
    FENCEDCODE = 1 << 25  # enable fenced code blocks
    IDANCHOR = 1 << 26  # use id= anchors for TOC links
    GITHUBTAGS = 1 << 27  # allow dash and underscore in element names
    URLENCODEDANCHOR = 1 << 28  # urlencode non-identifier chars in anchors
    LATEX = 1 << 29  # handle embedded LaTeX escapes
    ALT_AS_TITLE = 1 << 30  # use alt text as title if no title is given
    IS_LABEL = 1 << 31  # internal: rendering a label

    @property
    def bit(self) -> int:
        """Position of the lowest set bit of this flag."""
        value = self.value
        return (value & -value).bit_length() - 1


class V2Flag(enum.IntFlag):
    """Flags of the older single-bitmap interface."""

    NOLINKS = 0x00000001
    NOIMAGE = 0x00000002
    NOPANTS = 0x00000004
    NOHTML = 0x00000008
    STRICT = 0x00000010
    TAGTEXT = 0x00000020
    NO_EXT = 0x00000040
    CDATA = 0x00000080
    NOSUPERSCRIPT = 0x00000100
    STRICT2 = 0x00000200
    NOTABLES = 0x00000400
    NOSTRIKETHROUGH = 0x00000800
    TOC = 0x00001000
    ONE_COMPAT = 0x00002000
    AUTOLINK = 0x00004000
    SAFELINK = 0x00008000
    NOHEADER = 0x00010000
    TABSTOP = 0x00020000
    NODIVQUOTE = 0x00040000
    NOALPHALIST = 0x00080000
    NODLIST = 0x00100000
    EXTRA_FOOTNOTE = 0x00200000
    NOSTYLE = 0x00400000
    NODLDISCOUNT = 0x00800000
    DLEXTRA = 0x01000000
    FENCEDCODE = 0x02000000
    IDANCHOR = 0x04000000
    GITHUBTAGS = 0x08000000
    URLENCODEDANCHOR = 0x10000000
    LATEX = 0x40000000
    EXPLICITLIST = 0x80000000


_V2_TO_FLAG = {
    V2Flag.STRICT: Flag.STRICT,
    V2Flag.NOLINKS: Flag.NOLINKS,
    V2Flag.NOIMAGE: Flag.NOIMAGE,
    V2Flag.NOPANTS: Flag.NOPANTS,
    V2Flag.NOHTML: Flag.NOHTML,
    V2Flag.TAGTEXT: Flag.TAGTEXT,
    V2Flag.NO_EXT: Flag.NO_EXT,
    V2Flag.CDATA: Flag.CDATA,
    V2Flag.NOSUPERSCRIPT: Flag.NOSUPERSCRIPT,
    V2Flag.STRICT2: Flag.STRICT,
    V2Flag.NOTABLES: Flag.NOTABLES,
    V2Flag.NOSTRIKETHROUGH: Flag.NOSTRIKETHROUGH,
    V2Flag.TOC: Flag.TOC,
    V2Flag.ONE_COMPAT: Flag.ONE_COMPAT,
    V2Flag.AUTOLINK: Flag.AUTOLINK,
    V2Flag.SAFELINK: Flag.SAFELINK,
    V2Flag.NOHEADER: Flag.NOHEADER,
    V2Flag.TABSTOP: Flag.TABSTOP,
    V2Flag.NODIVQUOTE: Flag.NODIVQUOTE,
    V2Flag.NOALPHALIST: Flag.NOALPHALIST,
    V2Flag.EXTRA_FOOTNOTE: Flag.EXTRA_FOOTNOTE,
    V2Flag.NOSTYLE: Flag.NOSTYLE,
    V2Flag.DLEXTRA: Flag.DLEXTRA,
    V2Flag.FENCEDCODE: Flag.FENCEDCODE,
    V2Flag.IDANCHOR: Flag.IDANCHOR,
    V2Flag.GITHUBTAGS: Flag.GITHUBTAGS,
    V2Flag.URLENCODEDANCHOR: Flag.URLENCODEDANCHOR,
    V2Flag.LATEX: Flag.LATEX,
    V2Flag.EXPLICITLIST: Flag.EXPLICITLIST,
}


def _or_empty(flags: Flag | None) -> Flag:
    return Flag(0) if flags is None else flags


def flags_differ(first: Flag | None, second: Flag | None) -> bool:
    """True if the two flag sets differ; ``None`` counts as no flags."""
    return _or_empty(first) != _or_empty(second)


def shared_flags(first: Flag | None, second: Flag | None) -> int:
    """Number of flags set in both sets; ``None`` counts as no flags."""
    return (_or_empty(first) & _or_empty(second)).value.bit_count()


def from_v2(bitmask: int) -> Flag:
    """Convert an old-style bitmap into a :class:`Flag` set.

    Discount-style definition lists are on unless the bitmap turns them off.
    Bits with no meaning are ignored.
    """
    bitmask = int(bitmask)
    result = Flag.DLDISCOUNT
    for v2bit, flag in _V2_TO_FLAG.items():
        if bitmask & v2bit:
            result |= flag
    if bitmask & V2Flag.NODLDISCOUNT:
        result &= ~Flag.DLDISCOUNT
    return result