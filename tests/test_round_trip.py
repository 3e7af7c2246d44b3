"""Round trips from editor HTML through RTF and back."""

import pytest

from rtfterms.converter import html_to_rtf, rtf_to_html
from rtfterms.envelope import wrap_envelope


@pytest.mark.parametrize(
    "html",
    [
        "<p>Hola</p>",
        "<h1>Title</h1><p>Body</p>",
        "<h3>Section</h3><h4>Detail</h4>",
        "<ul><li>Uno</li><li>Dos</li></ul>",
        "<ol><li>First</li><li>Second</li></ol>",
        "<p>Intro</p><ul><li>a</li></ul><p>Outro</p>",
        "<p><b>bold</b> and <i>italic</i> and <u>under</u></p>",
        "<p><b><i>both</i></b></p>",
        '<p style="text-align:center">Centered</p>',
        '<p style="text-align:justify">Justified</p>',
        '<p>Read the <a href="https://example.com/terms">terms</a>.</p>',
        '<p>Text <span lang="es">en español</span></p>',
        "<p>Ñandú come papá</p>",
        "<p>“Quoted” — text…</p>",
        "<p>a &lt; b &amp; c</p>",
        "<p>braces {and} back\\slash</p>",
        "<ul><li>line one<br>line two</li></ul>",
    ],
)
def test_supported_html_survives_round_trip(html: str) -> None:
    assert rtf_to_html(html_to_rtf(html)) == html


def test_list_scenario() -> None:
    rtf = html_to_rtf("<ul><li>Uno</li><li>Dos</li></ul>")

    assert rtf.count("{\\pntext") == 2
    assert rtf_to_html(rtf) == "<ul><li>Uno</li><li>Dos</li></ul>"


def test_accent_scenario() -> None:
    rtf = html_to_rtf("Ñandú come papá")

    assert "\\'d1" in rtf
    assert rtf_to_html(rtf) == "<p>Ñandú come papá</p>"


@pytest.mark.parametrize("char", ["가", "Ａ", "\U0001f600"])
def test_unicode_overflow_scenario(char: str) -> None:
    rtf = html_to_rtf(f"<p>{char}</p>")

    assert "\\u-" in rtf
    assert rtf_to_html(rtf) == f"<p>{char}</p>"


def test_envelope_scenario() -> None:
    rtf = html_to_rtf("<h2>Terms</h2><ol><li>One</li></ol>")

    assert rtf_to_html(wrap_envelope(rtf)) == rtf_to_html(rtf)


def test_empty_document_decodes_to_nothing() -> None:
    assert rtf_to_html(html_to_rtf("")) == ""
    assert rtf_to_html(html_to_rtf(None)) == ""


def test_layout_whitespace_is_not_content() -> None:
    html = "<div>\n  <p>A</p>\n  <ul>\n    <li>B</li>\n  </ul>\n</div>"

    assert rtf_to_html(html_to_rtf(html)) == "<p>A</p><ul><li>B</li></ul>"
