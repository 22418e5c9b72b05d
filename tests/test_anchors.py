import re

import pytest

from discount.anchors import anchor_format
from discount.flags import Flag


def test_spaces_become_dashes():
    assert anchor_format("Hello World", True) == "Hello-World"


def test_leading_non_letter_gets_prefix():
    assert anchor_format("1st", True) == "L1st"


def test_empty_label_gets_prefix():
    assert anchor_format("", True).startswith("L")


def test_unlabelled_text_passes_through():
    assert anchor_format("a b%c", False) == "a b%c"


def test_urlencoded_percent():
    assert anchor_format("a%b", True, Flag.URLENCODEDANCHOR) == "a%25b"


def test_urlencoded_keeps_leading_digit_and_unicode():
    text = "1 caf\u00e9"
    result = anchor_format(text, True, Flag.URLENCODEDANCHOR)
    assert result.startswith("1-")
    assert result.endswith("caf\u00e9")


@pytest.mark.parametrize(
    "text", ["Hello World", "what's new?", "caf\u00e9 au lait", "a.b:c_d", "#!/bin"]
)
def test_default_labels_use_only_safe_characters(text):
    result = anchor_format(text, True)
    assert re.fullmatch(r"[A-Za-z0-9_:.\-]+", result)
    assert result[0].isalpha()


def test_escape_expands_each_byte():
    result = anchor_format("a\u00e9", True)
    assert result.startswith("a")
    assert len(result) == 1 + 2 * 4


def test_identifier_characters_kept():
    assert anchor_format("a.b:c_d", True) == "a.b:c_d"


def test_other_flags_do_not_change_default_style():
    assert anchor_format("x y", True, Flag.TOC) == anchor_format("x y", True)