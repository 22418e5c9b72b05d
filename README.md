# discount

`discount` reads Markdown text and compiles it into a tree of block-level
paragraphs: headers, horizontal rules, bulleted, numbered and alphabetic
lists, definition lists, block quotes (including `%class%` div quotes),
code blocks, fenced code, tables, HTML and style blocks, and reference
footnotes. Alongside the compiler it has a set of rendering flags, parsing
of named options into those flags, unique table-of-contents labels for
headers, anchor-name formatting, XML escaping, and a few small
command-line text tools.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Compiling Markdown

```python
from discount.compiler import compile_markdown
from discount.flags import Flag

document = compile_markdown("Title\n=====\n\n* one\n* two\n", Flag.TOC)

block = document.code            # top-level paragraphs
while block is not None:
    print(block.typ)             # ParagraphType.SOURCE for plain markdown
    inner = block.down
    while inner is not None:
        print(" ", inner.typ, inner.hnumber, inner.label)
        inner = inner.next
    block = block.next
```

`compile_markdown(text, flags)` reads the text and compiles it, returning
the `discount.document.Document`; its `code` attribute holds the paragraph
tree and its `footnotes` attribute the reference footnotes, sorted by tag.

For finer control, read a document first with
`discount.document.read_document(text, flags)` (or `read_file(stream, flags)`
for an open text or binary stream) and pass it to
`discount.compiler.compile_document(document, flags)`, which returns the
tree and stores it on the document. A compiled document is compiled again
only when its flags change or it has been marked dirty (for instance by
setting `ref_prefix` or one of its callback attributes).

The tree is made of `discount.document.Paragraph` objects chained through
`next`, with nested content under `down`. Each has a `typ`
(`ParagraphType`), an `align` (`Align`), and where relevant `hnumber`
(header level), `label` (table-of-contents label), `ident` (div-quote
attribute), and `github_check` / `is_checked` for `[ ]` / `[x]` list items.
Paragraph text is a chain of `discount.document.Line` objects.

Documents whose first three lines begin with `%` have those lines taken as
a pandoc-style `title`, `author` and `date`, unless `Flag.NOHEADER` or
`Flag.STRICT` is set. Tabs are expanded to 4-column stops.

The individual recognisers the compiler uses (`checkline`, `is_hr`,
`header_style`, `match_list`, `is_code_fence`, `is_div_marker`,
`is_definition` and others) are in `discount.blocks`.

## Flags

`discount.flags.Flag` is an `enum.Flag` naming every rendering option:
`TOC`, `FENCEDCODE`, `DLDISCOUNT`, `DLEXTRA`, `NOTABLES`, `NOHTML`,
`STRICT`, `EXTRA_FOOTNOTE` and the rest. `from_v2(bitmask)` converts an
older single-integer bitmask (see `V2Flag`) into a `Flag`, with
discount-style definition lists on unless the bitmask turns them off.
`flags_differ(first, second)` and `shared_flags(first, second)` compare
two flag sets, treating `None` as no flags.

Flags can also be set by name, as command lines accept them:

```python
from discount.options import set_flag_string, format_flags, UnknownOptionError

flags = set_flag_string(None, "toc,fencedcode,nohtml,+dlist")
print(format_flags(True, False, flags))

try:
    set_flag_string(flags, "toc,nosuchthing")
except UnknownOptionError as error:
    print(error.option)   # "suchthing"
```

`set_flag_string` returns the new flags. A leading `+` or `-`, or a `no`
prefix, turns an option on or off; options that name a feature the flag
disables (such as `html`, `tables`, `smarty`) work the other way round.
`format_flags(byname, verbose, flags)` describes the options, either
alphabetically or by flag value; `show_flags` writes the same text to a
stream (standard error by default). The options themselves are listed in
`discount.options.OPTIONS`.

## Other pieces

- `discount.tags` holds the block-level HTML tags: `standard_tags()`,
  `search_tags(name)`, `define_tag(name, selfclose)` and the `TagTable`
  class behind them. Lookups are case-insensitive.
- `discount.toc` gives every header a unique label: `uniquify(root)` and
  `unique_label(root, name)`, which adds `_0`, `_1`, ... on a collision.
- `discount.anchors.anchor_format(text, labelformat, flags)` turns header
  text into an anchor name, in the default style or, with
  `Flag.URLENCODEDANCHOR`, percent-encoded.
- `discount.xmlescape` escapes `<`, `>`, `&`, `"` and `'` for XML:
  `xml_char`, `xml_escape` and `write_xml`.
- `discount.files.not_special(path)` is true when a path does not exist or
  is a regular file, so that it is safe to overwrite.

## Command-line tools

| Command | What it does |
| --- | --- |
| `discount-cols WIDTH` | copy standard input, cutting every line to WIDTH columns (a UTF-8 sequence counts as one) |
| `discount-echo [-n] WORDS...` | print the words separated by spaces; `-n` drops the final newline |
| `discount-rep [PREFIX] STRING COUNT [SUFFIX]` | print STRING COUNT times, with optional prefix and suffix; `\n`, `\r`, `\t`, `\b` and `\\` are understood |
| `discount-space2nl` | copy standard input, turning every space into a newline |
| `discount-branch` | print the current git branch as `"(name)-"`, or nothing on `main` or outside a repository |

Examples:

```
discount-rep '<' '-' 10 '>\n'
printf 'a b c\n' | discount-space2nl
discount-cols 40 < notes.text
```

The same functions are available from Python: `truncate_columns`, `echo`,
`deformat` / `repeat`, `space_to_newline`, and `branch_label` /
`current_branch` in the modules under `discount.tools`.

## What it does not do

The package stops at the paragraph tree. It does not render the tree or
inline markup (emphasis, links, images, code spans) to HTML, does not
produce tables of contents as HTML, and has no command that converts a
Markdown file into a web page or fills in a page template.