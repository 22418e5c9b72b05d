import io

import pytest

from discount.xmlescape import write_xml, xml_char, xml_escape


@pytest.mark.parametrize(
    "char, entity",
    [("<", "&lt;"), (">", "&gt;"), ("&", "&amp;"), ('"', "&quot;"), ("'", "&apos;")],
)
def test_entities(char, entity):
    assert xml_char(char) == entity


@pytest.mark.parametrize("char", ["a", " ", "\u00e9", "\n"])
def test_ordinary_characters_pass(char):
    assert xml_char(char) is None


def test_escape_mixed_text():
    assert xml_escape("<a href=\"x\">&'") == "&lt;a href=&quot;x&quot;&gt;&amp;&apos;"


def test_plain_text_unchanged():
    assert xml_escape("caf\u00e9 bar") == "caf\u00e9 bar"


def test_escape_has_no_raw_specials():
    result = xml_escape("a<b>c\"d'e")
    assert not any(ch in result for ch in "<>\"'")


def test_write_xml_matches_escape():
    out = io.StringIO()
    write_xml("1 < 2 & 3", out)
    assert out.getvalue() == xml_escape("1 < 2 & 3")