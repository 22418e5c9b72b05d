import pytest

from discount.compiler import compile_document, compile_markdown, footnote_key
from discount.document import Align, Footnote, ParagraphType, read_document
from discount.flags import Flag


def chain(node):
    while node is not None:
        yield node
        node = node.next


def body(text, flags=None):
    doc = compile_markdown(text, flags)
    assert doc.code.typ is ParagraphType.SOURCE
    return doc.code.down


@pytest.mark.parametrize(
    "text, level, title",
    [("# Hello #\n", 1, "Hello"), ("### Title\n", 3, "Title"), ("######## deep\n", 6, "deep")],
)
def test_etx_headers(text, level, title):
    header = body(text)
    assert header.typ is ParagraphType.HDR
    assert header.hnumber == level
    assert header.text.text == title


@pytest.mark.parametrize("underline, level", [("=====", 1), ("-----", 2)])
def test_setext_headers(underline, level):
    header = body(f"Title\n{underline}\n")
    assert header.typ is ParagraphType.HDR
    assert header.hnumber == level
    assert header.text.text == "Title"
    assert header.text.next is None


def test_horizontal_rule():
    assert body("***\n").typ is ParagraphType.HR


def test_code_block_trims_indent():
    code = body("    code line\n")
    assert code.typ is ParagraphType.CODE
    assert code.text.text == "code line"


def test_one_compat_tidies_first_code_line():
    assert body("    code   \n").text.text == "code   "
    assert body("    code   \n", Flag.ONE_COMPAT).text.text == "code"


def test_blockquote():
    quote = body("> quoted\n")
    assert quote.typ is ParagraphType.QUOTE
    assert quote.down.typ is ParagraphType.MARKUP
    assert quote.down.text.text == "quoted"


def test_div_quote_class_and_id():
    quote = body("> %note%\n> text\n")
    assert quote.ident == 'class="note"'
    assert quote.down.text.text == "text"
    assert body("> %id:main%\n> text\n").ident == 'id="main"'


def test_unordered_list_items():
    lst = body("* one\n* two\n")
    assert lst.typ is ParagraphType.UL
    items = list(chain(lst.down))
    assert [item.typ for item in items] == [ParagraphType.LISTITEM] * 2
    assert [item.down.text.text for item in items] == ["one", "two"]


def test_ordered_and_alpha_lists():
    assert body("1. first\n2. second\n").typ is ParagraphType.OL
    assert body("a. x\n").typ is ParagraphType.AL
    assert body("a. x\n", Flag.NOALPHALIST).typ is ParagraphType.MARKUP


def test_explicit_list_separates_kinds():
    merged = list(chain(body("* a\n1. b\n")))
    assert [p.typ for p in merged] == [ParagraphType.UL]
    assert len(list(chain(merged[0].down))) == 2
    split = list(chain(body("* a\n1. b\n", Flag.EXPLICITLIST)))
    assert [p.typ for p in split] == [ParagraphType.UL, ParagraphType.OL]


def test_checkbox_items():
    done = body("* [x] done\n").down
    assert done.github_check and done.is_checked
    todo = body("* [ ] todo\n").down
    assert todo.github_check and not todo.is_checked
    plain = body("* [x] done\n", Flag.NORMAL_LISTITEM).down
    assert not plain.github_check


def test_paragraphs_are_separated_by_blank_lines():
    paragraphs = list(chain(body("one\n\ntwo\n")))
    assert [p.typ for p in paragraphs] == [ParagraphType.MARKUP] * 2
    assert [p.text.text for p in paragraphs] == ["one", "two"]
    assert all(p.align is Align.PARA for p in paragraphs)


def test_centered_paragraph():
    paragraph = body("->centered<-\n")
    assert paragraph.align is Align.CENTER
    assert paragraph.text.text == "centered"


def test_table_detection():
    assert body("a | b\n--|--\n1 | 2\n").typ is ParagraphType.TABLE
    assert body("a | b\nxx|yy\n1 | 2\n").typ is ParagraphType.MARKUP
    assert body("a | b\n--|--\n1 | 2\n", Flag.NOTABLES).typ is ParagraphType.MARKUP


def test_html_block():
    doc = compile_markdown("<div>\nhello\n</div>\n")
    assert doc.code.typ is ParagraphType.HTML
    assert [line.text for line in chain(doc.code.text)] == ["<div>", "hello", "</div>"]
    assert doc.code.next is None


def test_unclosed_html_becomes_source():
    doc = compile_markdown("<div>\nhello\n")
    assert doc.code.typ is ParagraphType.SOURCE
    assert doc.code.down.typ is ParagraphType.MARKUP


def test_nohtml_keeps_html_as_source():
    doc = compile_markdown("<div>\nhello\n</div>\n", Flag.NOHTML)
    assert doc.code.typ is ParagraphType.SOURCE


def test_style_block():
    text = "<style>\np {}\n</style>\n"
    assert compile_markdown(text).code.typ is ParagraphType.STYLE
    assert compile_markdown(text, Flag.NOSTYLE).code.typ is ParagraphType.HTML


def test_comment_and_selfclosing_blocks():
    doc = compile_markdown("<!-- note -->\ntext\n")
    assert doc.code.typ is ParagraphType.HTML
    assert doc.code.text.text == "<!-- note -->"
    assert doc.code.next.typ is ParagraphType.SOURCE
    hr = compile_markdown("<hr>\ntext\n").code
    assert hr.typ is ParagraphType.HTML
    assert hr.text.next is None


def test_fenced_code():
    paragraph = body("```python\nprint(1)\n```\n", Flag.FENCEDCODE)
    assert paragraph.text.fence_class == "python"
    assert paragraph.text.next.text == "print(1)"
    assert paragraph.text.next.is_fenced


def test_discount_definition_list():
    dl = body("=term=\n    definition\n", Flag.DLDISCOUNT)
    assert dl.typ is ParagraphType.DL
    assert dl.down.typ is ParagraphType.LISTITEM
    assert dl.down.text.text == "term"
    assert dl.down.down.text.text == "definition"


def test_extra_definition_list():
    dl = body("Apple\n: A fruit\n", Flag.DLEXTRA)
    assert dl.typ is ParagraphType.DL
    assert dl.down.text.text == "Apple"
    assert dl.down.down.text.text == "A fruit"


def test_reference_footnote():
    doc = compile_markdown('[id]: http://example.com/ "Title"\n\nSee [id].\n')
    assert len(doc.footnotes) == 1
    note = doc.footnotes[0]
    assert (note.tag, note.link, note.title) == ("id", "http://example.com/", "Title")
    assert doc.code.down.text.text == "See [id]."


def test_footnote_dimensions_and_next_line_title():
    pic = compile_markdown("[pic]: /img.png =10x20\n").footnotes[0]
    assert (pic.link, pic.width, pic.height) == ("/img.png", 10, 20)
    note = compile_markdown('[x]: /url\n    "Next"\n').footnotes[0]
    assert note.title == "Next"


def test_footnotes_are_sorted():
    doc = compile_markdown("[b]: /b\n[ccc]: /c\n[a]: /a\n")
    assert [note.tag for note in doc.footnotes] == ["a", "b", "ccc"]
    assert doc.code is None


def test_extra_footnote():
    doc = compile_markdown("[^1]: note text\n", Flag.EXTRA_FOOTNOTE)
    note = doc.footnotes[0]
    assert note.extra
    assert note.text.typ is ParagraphType.MARKUP
    assert note.text.text.text == "note text"


def test_footnote_key_ignores_case_and_whitespace_kind():
    assert footnote_key(Footnote(tag="ABC")) == footnote_key(Footnote(tag="abc"))
    assert footnote_key(Footnote(tag="a b")) == footnote_key(Footnote(tag="a\tb"))
    assert footnote_key(Footnote(tag="zz")) < footnote_key(Footnote(tag="aaa"))


def test_toc_labels_are_unique():
    headers = list(chain(body("# A\n# A\n", Flag.TOC)))
    assert [h.label for h in headers] == ["A", "A_0"]


def test_compile_is_cached_until_flags_change():
    doc = read_document("# A\n")
    first = compile_document(doc)
    assert doc.compiled
    assert compile_document(doc) is first
    assert compile_document(doc, Flag.TOC) is None


def test_dirty_document_recompiles():
    doc = compile_markdown("# A\n")
    assert doc.code is not None and doc.code.down.typ is ParagraphType.HDR
    doc.ref_prefix = "ref"
    assert compile_document(doc) is None
    assert doc.dirty is False