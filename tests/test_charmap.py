"""Tests for the character escape and locale tables."""

from rtfterms.converter import charmap


def test_hex_escapes_decode_back() -> None:
    """Every ``\\'hh`` entry decodes to the character it encodes."""

    for char, byte in charmap.HEX_ESCAPES.items():
        assert charmap.escape_char(char) == f"\\'{byte:02x}"
        assert charmap.decode_hex(byte) == char


def test_hex_escapes_match_windows_1252() -> None:
    """Table bytes agree with the document code page."""

    for char, byte in charmap.HEX_ESCAPES.items():
        assert char.encode("cp1252") == bytes([byte])


def test_typographic_characters_use_unicode_escapes() -> None:
    assert charmap.escape_char("—") == "\\u8212?"
    assert charmap.escape_char("“") == "\\u8220?"
    assert charmap.escape_char("•") == "\\u8226?"


def test_ascii_passes_through() -> None:
    assert charmap.escape_char("a") == "a"
    assert charmap.escape_char(" ") == " "


def test_unknown_characters_use_unicode_escapes() -> None:
    assert charmap.escape_char("ş") == "\\u351?"


def test_values_above_signed_range_are_negative() -> None:
    """Code points from 32768 are written as signed 16-bit numbers."""

    assert charmap.unicode_escape(0xFF21) == "\\u-223?"
    assert charmap.unicode_escape(32768) == "\\u-32768?"
    assert charmap.unicode_escape(32767) == "\\u32767?"


def test_astral_code_points_become_surrogate_pairs() -> None:
    assert charmap.unicode_escape(0x1F600) == "\\u-10179?\\u-8704?"


def test_decode_hex_falls_back_to_codepage() -> None:
    assert charmap.decode_hex(0x9C) == "œ"
    assert charmap.decode_hex(0xE9, "cp1251") == "é"
    assert charmap.decode_hex(0xC0, "cp1251") == "À"


def test_codepage_name() -> None:
    assert charmap.codepage_name(None) == "cp1252"
    assert charmap.codepage_name(1251) == "cp1251"
    assert charmap.codepage_name(99999) == "cp1252"


def test_locale_id_uses_primary_subtag() -> None:
    assert charmap.locale_id("es") == 3082
    assert charmap.locale_id("ES-mx") == 3082
    assert charmap.locale_id("fr-CA") == 1036
    assert charmap.locale_id("xx") == 1033
    assert charmap.locale_id(None) == 1033
    assert charmap.locale_id("") == 1033


def test_locale_tag_ignores_region() -> None:
    assert charmap.locale_tag(3082) == "es"
    assert charmap.locale_tag(2058) == "es"
    assert charmap.locale_tag(1033) == "en"
    assert charmap.locale_tag(None) is None
    assert charmap.locale_tag(9999) is None
