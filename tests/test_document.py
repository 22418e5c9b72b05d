import io

import pytest

from discount.document import (
    Document,
    Line,
    LineKind,
    make_line,
    read_document,
    read_file,
)
from discount.flags import Flag


def texts(document):
    return [line.text for line in document]


def test_make_line_expands_tabs_to_tabstop():
    line = make_line("\tx", 4)
    assert line.text.lstrip() == "x"
    assert len(line.text) == 5
    assert line.dle == 4


def test_make_line_tab_after_text_reaches_next_stop():
    line = make_line("ab\tc", 4)
    assert line.text.index("c") == 4


def test_make_line_notes_pipe():
    assert make_line("a|b").has_pipechar is True
    assert make_line("ab").has_pipechar is False


def test_make_line_drops_control_characters():
    assert make_line("a\x01b\rc").text == "abc"


def test_first_nonblank():
    assert Line("   word").first_nonblank() == 3
    assert Line("   ").first_nonblank() == 3


def test_trim_recomputes_indent():
    line = make_line("  -  item")
    line.trim(3)
    assert line.text == "  item"
    assert line.dle == 2


def test_trim_past_end_empties_line():
    line = make_line("abc")
    line.trim(10)
    assert line.text == ""
    assert line.dle == 0


def test_trim_zero_is_noop():
    line = make_line("  abc")
    line.trim(0)
    assert line.text == "  abc"
    assert line.dle == 2


def test_line_defaults():
    line = Line()
    assert line.kind is LineKind.TEXT
    assert line.next is None


def test_read_document_chains_lines():
    doc = read_document("one\ntwo\nthree")
    assert texts(doc) == ["one", "two", "three"]


def test_trailing_newline_adds_no_empty_line():
    doc = read_document("one\n\ntwo\n")
    assert texts(doc) == ["one", "", "two"]


def test_pandoc_header_is_extracted():
    doc = read_document("% Title\n% Author\n% Date\nbody\n")
    assert doc.title.text.strip() == "Title"
    assert doc.author.text.strip() == "Author"
    assert doc.date.text.strip() == "Date"
    assert texts(doc) == ["body"]


def test_pandoc_header_needs_three_lines():
    doc = read_document("% Title\n% Author\nbody\n")
    assert doc.title is None
    assert texts(doc) == ["% Title", "% Author", "body"]


@pytest.mark.parametrize("flag", [Flag.NOHEADER, Flag.STRICT])
def test_pandoc_header_disabled_by_flags(flag):
    doc = read_document("% a\n% b\n% c\nbody\n", flag)
    assert doc.title is None
    assert len(texts(doc)) == 4


def test_empty_input_has_no_content():
    doc = read_document("")
    assert doc.content is None
    assert list(doc) == []


def test_read_file_text_and_binary():
    from_text = read_file(io.StringIO("a\nb\n"))
    from_bytes = read_file(io.BytesIO("a\nb\n".encode("utf-8")))
    assert texts(from_text) == texts(from_bytes) == ["a", "b"]


def test_non_ascii_kept():
    doc = read_document("caf\u00e9\n")
    assert texts(doc) == ["caf\u00e9"]


def test_setting_callbacks_marks_dirty():
    doc = Document()
    assert doc.dirty is False
    doc.url_callback = str.upper
    assert doc.dirty is True


def test_setting_same_prefix_stays_clean():
    doc = Document()
    doc.ref_prefix = None
    assert doc.dirty is False
    doc.ref_prefix = "fn"
    assert doc.dirty is True
    assert doc.ref_prefix == "fn"