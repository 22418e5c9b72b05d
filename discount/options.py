"""Named rendering options, as given on command lines and in environment strings."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from .flags import Flag

__all__ = [
    "Option",
    "OPTIONS",
    "UnknownOptionError",
    "set_flag_string",
    "format_flags",
    "show_flags",
]


@dataclass(frozen=True)
class Option:
    """A named option.

    ``off`` options name the feature that the flag turns off, so enabling
    the option clears the flag.  ``alias`` options are synonyms that are
    hidden from short listings.  ``special`` options set several flags at once.
    """

    name: str
    desc: str
    flag: Flag
    off: bool = False
    alias: bool = False
    sayenable: bool = True
    special: bool = False


_DLIST = Flag.DLDISCOUNT | Flag.DLEXTRA
_STANDARD = "conform to the markdown standard"
_DLIST_DESC = "both discount & markdown extra definition lists"

OPTIONS: tuple[Option, ...] = (
    Option("tabstop", "default (4-space) tabstops", Flag.TABSTOP),
    Option("image", "images", Flag.NOIMAGE, off=True),
    Option("links", "links", Flag.NOLINKS, off=True),
    Option("strict", _STANDARD, Flag.STRICT),
    Option("relax", _STANDARD, Flag.STRICT, off=True, alias=True),
    Option("standard", _STANDARD, Flag.STRICT, alias=True),
    Option("tables", "tables", Flag.NOTABLES, off=True),
    Option("header", "pandoc-style headers", Flag.NOHEADER, off=True),
    Option("html", "allow raw html", Flag.NOHTML, off=True, sayenable=False),
    Option("ext", "extended protocols", Flag.NO_EXT, off=True),
    Option("cdata", "generate cdata", Flag.CDATA, sayenable=False),
    Option("smarty", "smartypants", Flag.NOPANTS, off=True),
    Option("pants", "smartypants", Flag.NOPANTS, off=True, alias=True),
    Option("toc", "tables of contents", Flag.TOC),
    Option("autolink", "autolinking", Flag.AUTOLINK),
    Option("safelink", "safe links", Flag.SAFELINK),
    Option("strikethrough", "strikethrough", Flag.NOSTRIKETHROUGH, off=True),
    Option("del", "strikethrough", Flag.NOSTRIKETHROUGH, off=True, alias=True),
    Option("superscript", "superscript", Flag.NOSUPERSCRIPT, off=True),
    Option("divquote", ">%class% blockquotes", Flag.NODIVQUOTE, off=True),
    Option("alphalist", "alpha lists", Flag.NOALPHALIST, off=True),
    Option("1.0", "markdown 1.0 compatibility", Flag.ONE_COMPAT),
    Option("footnotes", "markdown extra footnotes", Flag.EXTRA_FOOTNOTE),
    Option("footnote", "markdown extra footnotes", Flag.EXTRA_FOOTNOTE, alias=True),
    Option("style", "extract style blocks", Flag.NOSTYLE, off=True),
    Option("dldiscount", "discount-style definition lists", Flag.DLDISCOUNT),
    Option("dlextra", "markdown extra-style definition lists", Flag.DLEXTRA),
    Option("fencedcode", "fenced code blocks", Flag.FENCEDCODE),
    Option("idanchor", "id= anchors in TOC", Flag.IDANCHOR),
    Option("githubtags", "- and _ in element names", Flag.GITHUBTAGS),
    Option("urlencodedanchor", "html5-style anchors", Flag.URLENCODEDANCHOR),
    Option("html5anchor", "html5-style anchors", Flag.URLENCODEDANCHOR, alias=True),
    Option("latex", "LaTeX escapes", Flag.LATEX),
    Option(
        "explicitlist",
        "merge adjacent numeric/bullet lists",
        Flag.EXPLICITLIST,
        sayenable=False,
    ),
    Option("github-listitem", "github-style check items", Flag.NORMAL_LISTITEM, off=True),
    Option(
        "regular-listitem",
        "github-style check items",
        Flag.NORMAL_LISTITEM,
        alias=True,
    ),
    Option("definitionlist", _DLIST_DESC, _DLIST, special=True),
    Option("dlist", _DLIST_DESC, _DLIST, alias=True, special=True),
    Option(
        "alt_as_title",
        "use the alt text as a title if there isn't one (images)",
        Flag.ALT_AS_TITLE,
    ),
)

_BY_NAME = {option.name.lower(): option for option in OPTIONS}


class UnknownOptionError(ValueError):
    """An option string named an option that does not exist.

    ``flags`` holds the flags as set by the options before the unknown one.
    """

    def __init__(self, option: str, flags: Flag) -> None:
        super().__init__(f"unknown option <{option}>")
        self.option = option
        self.flags = flags


def set_flag_string(flags: Flag | None, optionstring: str) -> Flag:
    """Apply a comma separated list of options to ``flags`` and return the result.

    Each option may be prefixed with ``+`` (enable), ``-`` or ``no`` (disable).
    """
    result = Flag(0) if flags is None else flags
    for arg in filter(None, optionstring.split(",")):
        if arg[0] in "+-":
            enable = arg[0] == "+"
            arg = arg[1:]
        elif arg[:2].lower() == "no":
            enable = False
            arg = arg[2:]
        else:
            enable = True

        option = _BY_NAME.get(arg.lower())
        if option is None:
            raise UnknownOptionError(arg, result)

        if option.off and not option.special:
            enable = not enable
        if enable:
            result |= option.flag
        else:
            result &= ~option.flag
    return result


def format_flags(byname: bool, verbose: bool = False, flags: Flag | None = None) -> str:
    """Describe the options, or only those whose flags are set in ``flags``.

    ``byname`` lists options alphabetically (aliases only when ``verbose``);
    otherwise options are listed by flag value with their bit in hex.
    """

    def selected(option: Option) -> bool:
        return flags is None or (flags & option.flag) == option.flag

    rows: list[str] = []
    if byname:
        for option in sorted(OPTIONS, key=lambda o: o.name):
            if option.alias and not verbose:
                continue
            if selected(option):
                rows.append(f"{option.name:>16} : {option.desc}\n")
    else:
        for option in sorted(OPTIONS, key=lambda o: o.flag.value):
            if option.special or option.alias:
                continue
            if selected(option):
                verb = ""
                if option.sayenable:
                    verb = "disable " if option.off else "enable "
                rows.append(f"{option.flag.value:08x} : {verb}{option.desc}\n")
    return "".join(rows)


def show_flags(
    byname: bool,
    verbose: bool = False,
    flags: Flag | None = None,
    stream: TextIO | None = None,
) -> None:
    """Write :func:`format_flags` output to ``stream`` (standard error by default)."""
    out = sys.stderr if stream is None else stream
    out.write(format_flags(byname, verbose, flags))