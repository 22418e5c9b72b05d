import pytest

from discount.flags import Flag, V2Flag, flags_differ, from_v2, shared_flags


def test_noext_alias_converts_like_no_ext():
    assert from_v2(V2Flag.NO_EXT) == Flag.NOEXT | Flag.DLDISCOUNT
    assert flags_differ(Flag.NOEXT, Flag.NO_EXT) is False


def test_v2_raw_bit_values_convert():
    assert from_v2(0x00001000) == Flag.TOC | Flag.DLDISCOUNT
    assert from_v2(0x80000000) == Flag.EXPLICITLIST | Flag.DLDISCOUNT
    assert from_v2(0x00800000) == Flag(0)


def test_from_v2_zero_turns_on_discount_dl():
    assert from_v2(0) == Flag.DLDISCOUNT


def test_from_v2_nodldiscount_clears_default():
    assert from_v2(V2Flag.NODLDISCOUNT) == Flag(0)


def test_from_v2_strict2_maps_to_strict():
    assert from_v2(V2Flag.STRICT2) == Flag.STRICT | Flag.DLDISCOUNT
    assert from_v2(V2Flag.STRICT | V2Flag.STRICT2) == Flag.STRICT | Flag.DLDISCOUNT


def test_from_v2_accepts_plain_int():
    assert from_v2(int(V2Flag.TOC | V2Flag.FENCEDCODE)) == (
        Flag.TOC | Flag.FENCEDCODE | Flag.DLDISCOUNT
    )


def test_from_v2_ignores_unknown_bits():
    assert from_v2(0x20000000) == Flag.DLDISCOUNT


@pytest.mark.parametrize(
    "v2, v3",
    [
        (V2Flag.NOLINKS, Flag.NOLINKS),
        (V2Flag.NOIMAGE, Flag.NOIMAGE),
        (V2Flag.NOPANTS, Flag.NOPANTS),
        (V2Flag.NOHTML, Flag.NOHTML),
        (V2Flag.TAGTEXT, Flag.TAGTEXT),
        (V2Flag.NO_EXT, Flag.NO_EXT),
        (V2Flag.CDATA, Flag.CDATA),
        (V2Flag.NOTABLES, Flag.NOTABLES),
        (V2Flag.ONE_COMPAT, Flag.ONE_COMPAT),
        (V2Flag.TABSTOP, Flag.TABSTOP),
        (V2Flag.DLEXTRA, Flag.DLEXTRA),
        (V2Flag.LATEX, Flag.LATEX),
        (V2Flag.EXPLICITLIST, Flag.EXPLICITLIST),
    ],
)
def test_from_v2_single_bits(v2, v3):
    assert from_v2(v2) == v3 | Flag.DLDISCOUNT


def test_from_v2_nodlist_has_no_effect():
    assert from_v2(V2Flag.NODLIST) == Flag.DLDISCOUNT


def test_flags_differ():
    assert flags_differ(None, Flag(0)) is False
    assert flags_differ(None, None) is False
    assert flags_differ(Flag.TOC, None) is True
    assert flags_differ(Flag.TOC | Flag.STRICT, Flag.STRICT | Flag.TOC) is False
    assert flags_differ(Flag.TOC, Flag.STRICT) is True


def test_shared_flags():
    assert shared_flags(None, Flag.TOC) == 0
    assert shared_flags(Flag.TOC | Flag.STRICT | Flag.CDATA, Flag.TOC | Flag.CDATA) == 2
    assert shared_flags(Flag.TOC, Flag.STRICT) == 0


def test_shared_flags_is_symmetric():
    a = Flag.TOC | Flag.LATEX | Flag.NOHTML
    b = Flag.LATEX | Flag.NOHTML | Flag.CDATA
    assert shared_flags(a, b) == shared_flags(b, a)