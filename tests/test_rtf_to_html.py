"""Tests for the RTF to HTML decoder."""

import importlib

import pytest

from rtfterms.converter import decode_document, html_to_rtf, rtf_to_html
from rtfterms.converter.list_block import BULLETED, NUMBERED, ListBlock
from rtfterms.converter.paragraph import Paragraph
from rtfterms.envelope import wrap_envelope

decoder_module = importlib.import_module("rtfterms.converter.rtf_to_html")


@pytest.mark.parametrize("value", [None, ""])
def test_empty_input(value: str | None) -> None:
    assert rtf_to_html(value) == ""


def test_plain_paragraphs() -> None:
    rtf = "{\\rtf1\\ansi\\deff0 First\\par Second\\par}"

    assert rtf_to_html(rtf) == "<p>First</p><p>Second</p>"


def test_character_formatting() -> None:
    rtf = "{\\rtf1 {\\b Bold} {\\i it}\\ul under\\ulnone  end\\par}"

    assert rtf_to_html(rtf) == (
        "<p><b>Bold</b> <i>it</i><u>under</u> end</p>"
    )


def test_bold_toggle_with_parameter() -> None:
    rtf = "{\\rtf1 \\b on\\b0  off\\par}"

    assert rtf_to_html(rtf) == "<p><b>on</b> off</p>"


def test_adjacent_formatting_is_merged() -> None:
    rtf = "{\\rtf1 {\\b one}{\\b  two}\\par}"

    assert rtf_to_html(rtf) == "<p><b>one two</b></p>"


def test_skipped_destinations() -> None:
    rtf = (
        "{\\rtf1{\\fonttbl{\\f0 Arial;}}{\\colortbl;\\red255\\green0\\blue0;}"
        "{\\stylesheet{\\s0 Normal;}}{\\info{\\title Hidden}}"
        "{\\*\\generator Writer;}Body\\par}"
    )

    assert rtf_to_html(rtf) == "<p>Body</p>"


def test_font_and_color_tables_are_read() -> None:
    rtf = (
        "{\\rtf1{\\fonttbl{\\f0\\fcharset0 Times New Roman;}"
        "{\\f2\\fcharset0 Segoe UI;}}"
        "{\\colortbl;\\red255\\green0\\blue0;}x\\par}"
    )

    document = decode_document(rtf)

    assert document.fonts[2].name == "Segoe UI"
    assert document.fonts[0].charset == 0
    assert document.colors[0] is None
    assert document.colors[1].hex() == "#ff0000"


def test_hex_escapes_use_codepage() -> None:
    rtf = "{\\rtf1\\ansi\\ansicpg1252 \\'d1and\\'fa \\'9c\\par}"

    assert rtf_to_html(rtf) == "<p>Ñandú œ</p>"


def test_unicode_escape_skips_fallback() -> None:
    rtf = "{\\rtf1\\uc1 caf\\u233?\\u-223?\\par}"

    assert rtf_to_html(rtf) == "<p>caféＡ</p>"


def test_unicode_escape_with_longer_fallback() -> None:
    rtf = "{\\rtf1\\uc2 x\\u8212\\'97\\'97y\\par}"

    assert rtf_to_html(rtf) == "<p>x—y</p>"


def test_surrogate_pair_is_combined() -> None:
    rtf = "{\\rtf1\\uc1 \\u-10179?\\u-8704?\\par}"

    assert rtf_to_html(rtf) == "<p>\U0001f600</p>"


def test_special_characters() -> None:
    rtf = (
        "{\\rtf1 a\\~b\\_c\\-d \\emdash  \\ldblquote q\\rdblquote "
        "\\bullet\\par}"
    )

    assert rtf_to_html(rtf) == "<p>a b-cd — “q”•</p>"


def test_line_and_tab() -> None:
    rtf = "{\\rtf1 one\\line two\\tab three\\par}"

    assert rtf_to_html(rtf) == "<p>one<br>two three</p>"


def test_html_special_characters_are_escaped() -> None:
    rtf = "{\\rtf1 a < b & c\\par}"

    assert rtf_to_html(rtf) == "<p>a &lt; b &amp; c</p>"


def test_empty_paragraphs_are_dropped() -> None:
    rtf = "{\\rtf1 \\par\\par  \\par Text\\par\\par}"

    assert rtf_to_html(rtf) == "<p>Text</p>"


def test_bulleted_marker_group() -> None:
    rtf = (
        "{\\rtf1 {\\pntext\\f3\\'b7\\tab}One\\par"
        "{\\pntext\\f3\\'b7\\tab}Two\\par After\\par}"
    )

    assert rtf_to_html(rtf) == "<ul><li>One</li><li>Two</li></ul><p>After</p>"


def test_listtext_numbered_marker() -> None:
    rtf = (
        "{\\rtf1 Intro\\par{\\listtext 1.\\tab}One\\par"
        "{\\listtext 2.\\tab}Two\\par}"
    )

    assert rtf_to_html(rtf) == "<p>Intro</p><ol><li>One</li><li>Two</li></ol>"


def test_pn_destination_classifies_list() -> None:
    rtf = "{\\rtf1 {\\*\\pn\\pnlvlbody\\pndec{\\pntxta .}}Item\\par}"

    assert rtf_to_html(rtf) == "<ol><li>Item</li></ol>"


def test_lists_of_different_kinds_stay_apart() -> None:
    rtf = (
        "{\\rtf1 {\\pntext \\bullet\\tab}A\\par"
        "{\\pntext 1.\\tab}B\\par}"
    )

    document = decode_document(rtf)

    assert [block.kind for block in document.blocks] == [BULLETED, NUMBERED]


def test_headings_from_font_size() -> None:
    rtf = (
        "{\\rtf1 {\\fs40 Big}\\par{\\fs36 Mid}\\par{\\fs28 Small}\\par"
        "{\\fs26 Tiny}\\par{\\fs22 Body}\\par}"
    )

    assert rtf_to_html(rtf) == (
        "<h1>Big</h1><h2>Mid</h2><h3>Small</h3><h4>Tiny</h4><p>Body</p>"
    )


def test_alignment() -> None:
    rtf = "{\\rtf1 \\pard\\qc Centered\\par\\pard Left\\par}"

    assert rtf_to_html(rtf) == (
        '<p style="text-align:center">Centered</p><p>Left</p>'
    )


def test_language_differs_from_default() -> None:
    rtf = (
        "{\\rtf1\\deflang1033 {\\lang1033 Hello }"
        "{\\lang3082 Hola}\\par}"
    )

    assert rtf_to_html(rtf) == '<p>Hello <span lang="es">Hola</span></p>'


def test_first_lang_before_content_is_default() -> None:
    rtf = "{\\rtf1 \\lang3082 Hola {\\lang1033 Hi}\\par}"

    assert rtf_to_html(rtf) == '<p>Hola <span lang="en">Hi</span></p>'


def test_hyperlink_field() -> None:
    rtf = (
        '{\\rtf1 See {\\field{\\*\\fldinst{HYPERLINK "https://example.com"}}'
        "{\\fldrslt{\\ul terms}}}.\\par}"
    )

    assert rtf_to_html(rtf) == (
        '<p>See <a href="https://example.com">terms</a>.</p>'
    )


def test_plain_text_content() -> None:
    text = "Welcome\n\n- first\n- second\nBye & thanks"

    assert rtf_to_html(text) == (
        "<p>Welcome</p><ul><li>first</li><li>second</li></ul>"
        "<p>Bye &amp; thanks</p>"
    )


def test_malformed_rtf_does_not_raise() -> None:
    html = rtf_to_html("{\\rtf1 unbalanced {\\b bold")

    assert html == "<p>unbalanced <b>bold</b></p>"


def test_unexpected_failure_returns_empty_string(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken(rtf: str) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(decoder_module, "rtf_to_document", broken)

    assert decoder_module.rtf_to_html("{\\rtf1 x\\par}") == ""


def test_envelope_gives_same_html_as_inner_rtf() -> None:
    rtf = html_to_rtf("<p>Hola <b>mundo</b></p>")

    assert rtf_to_html(wrap_envelope(rtf)) == rtf_to_html(rtf)
    assert rtf_to_html(wrap_envelope(rtf)) == "<p>Hola <b>mundo</b></p>"


def test_envelope_literal() -> None:
    envelope = '{"TermsAndConditions":{"Content":"{\\\\rtf1 Hi\\\\par}"}}'

    assert rtf_to_html(envelope) == "<p>Hi</p>"


def test_document_blocks() -> None:
    document = decode_document(html_to_rtf("<h2>T</h2><ul><li>a</li></ul>"))

    heading, listing = document.blocks
    assert isinstance(heading, Paragraph)
    assert heading.heading == 2
    assert isinstance(listing, ListBlock)
    assert listing.items[0].runs[0].text == "a"


def test_document_to_dict() -> None:
    data = decode_document(html_to_rtf("<p><b>x</b></p>")).to_dict()

    assert data["blocks"] == [
        {
            "runs": [
                {
                    "text": "x",
                    "bold": True,
                    "italic": False,
                    "underline": False,
                    "lang": None,
                    "href": None,
                }
            ],
            "heading": None,
            "align": None,
        }
    ]
    assert data["fonts"]["2"]["name"] == "Segoe UI"


def test_no_break_spaces_become_spaces() -> None:
    rtf = "{\\rtf1 a\\u160?b\\'a0c\\par}"

    assert rtf_to_html(rtf) == "<p>a b c</p>"


def test_out_of_range_unicode_escape_is_dropped() -> None:
    rtf = (
        html_to_rtf("<p>Uno</p><p>Dos</p>")
        .replace("Dos", "Dos \\u9999999?y\\u-9999999?")
    )

    assert rtf_to_html(rtf) == "<p>Uno</p><p>Dos y</p>"
