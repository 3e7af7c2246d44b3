"""Character escape and locale tables shared by both converters."""

from __future__ import annotations

import codecs

# Characters written as ``\'hh`` using their Windows-1252 byte.
HEX_ESCAPES: dict[str, int] = {
    "á": 0xE1,
    "é": 0xE9,
    "í": 0xED,
    "ó": 0xF3,
    "ú": 0xFA,
    "Á": 0xC1,
    "É": 0xC9,
    "Í": 0xCD,
    "Ó": 0xD3,
    "Ú": 0xDA,
    "ñ": 0xF1,
    "Ñ": 0xD1,
    "ü": 0xFC,
    "Ü": 0xDC,
    "à": 0xE0,
    "è": 0xE8,
    "ì": 0xEC,
    "ò": 0xF2,
    "ù": 0xF9,
    "À": 0xC0,
    "È": 0xC8,
    "Ò": 0xD2,
    "â": 0xE2,
    "ê": 0xEA,
    "î": 0xEE,
    "ô": 0xF4,
    "û": 0xFB,
    "ä": 0xE4,
    "ë": 0xEB,
    "ï": 0xEF,
    "ö": 0xF6,
    "ã": 0xE3,
    "õ": 0xF5,
    "ç": 0xE7,
    "Ç": 0xC7,
    "¿": 0xBF,
    "¡": 0xA1,
    "ª": 0xAA,
    "º": 0xBA,
    "«": 0xAB,
    "»": 0xBB,
    "©": 0xA9,
    "®": 0xAE,
    "°": 0xB0,
    "·": 0xB7,
    "§": 0xA7,
    "¢": 0xA2,
    "£": 0xA3,
    "¥": 0xA5,
    "€": 0x80,
}

# Typographic characters written as ``\uN?``.
UNICODE_ESCAPES: dict[str, int] = {
    "–": 8211,
    "—": 8212,
    "‘": 8216,
    "’": 8217,
    "“": 8220,
    "”": 8221,
    "•": 8226,
    "…": 8230,
    "™": 8482,
}

ENCODE_TABLE: dict[str, str] = {
    **{char: f"\\'{byte:02x}" for char, byte in HEX_ESCAPES.items()},
    **{char: f"\\u{code}?" for char, code in UNICODE_ESCAPES.items()},
}
HEX_DECODE_TABLE: dict[int, str] = {
    byte: char for char, byte in HEX_ESCAPES.items()
}

# Language tag to RTF language id.
LOCALE_IDS: dict[str, int] = {
    "en": 1033,
    "es": 3082,
    "fr": 1036,
    "de": 1031,
    "it": 1040,
    "pt": 2070,
    "ru": 1049,
    "ja": 1041,
    "zh": 2052,
    "ar": 1025,
    "hi": 1081,
    "he": 1037,
}
DEFAULT_LOCALE_ID = LOCALE_IDS["en"]

# The low ten bits of a language id name the primary language, so regional
# variants such as 10250 (es-MX) resolve to the same tag as 3082.
_PRIMARY_LANGUAGES: dict[int, str] = {
    lcid & 0x3FF: tag for tag, lcid in LOCALE_IDS.items()
}

DEFAULT_CODEPAGE = "cp1252"


def locale_id(tag: str | None) -> int:
    """Return the RTF language id for a language tag.

    Args:
        tag: Language tag such as ``"es"`` or ``"ES-mx"``. Only the primary
            subtag is considered.

    Returns:
        Matching language id, ``1033`` when the tag is unknown.
    """

    if not tag:
        return DEFAULT_LOCALE_ID
    primary = tag.split("-", 1)[0].strip().lower()
    return LOCALE_IDS.get(primary, DEFAULT_LOCALE_ID)


def locale_tag(lcid: int | None) -> str | None:
    """Return the primary language tag for an RTF language id."""

    if lcid is None:
        return None
    return _PRIMARY_LANGUAGES.get(lcid & 0x3FF)


def unicode_escape(code_point: int) -> str:
    """Return the ``\\uN?`` escape for ``code_point``.

    RTF stores the value as a signed 16-bit integer, so values from 32768 are
    written as negative numbers and code points beyond the BMP become a
    UTF-16 surrogate pair of escapes.
    """

    if code_point > 0xFFFF:
        offset = code_point - 0x10000
        high = 0xD800 + (offset >> 10)
        low = 0xDC00 + (offset & 0x3FF)
        return unicode_escape(high) + unicode_escape(low)

    value = code_point if code_point < 32768 else code_point - 65536
    return f"\\u{value}?"


def escape_char(char: str) -> str:
    """Return the RTF representation of a single character.

    Table characters use their fixed escape, ASCII passes through and any
    other code point becomes a Unicode escape. Reserved characters are not
    handled here.
    """

    escape = ENCODE_TABLE.get(char)
    if escape is not None:
        return escape
    code_point = ord(char)
    if code_point < 128:
        return char
    return unicode_escape(code_point)


def decode_hex(byte: int, codepage: str = DEFAULT_CODEPAGE) -> str:
    """Return the character for a ``\\'hh`` escape.

    Args:
        byte: Value of the two hex digits.
        codepage: Python codec name of the document code page.

    Returns:
        The table character when known, otherwise the byte decoded with
        ``codepage``.
    """

    char = HEX_DECODE_TABLE.get(byte)
    if char is not None:
        return char
    return bytes([byte]).decode(codepage, errors="replace")


def codepage_name(number: int | None) -> str:
    """Return a usable codec name for an ``\\ansicpgN`` value."""

    if number is None:
        return DEFAULT_CODEPAGE
    name = f"cp{number}"
    try:
        codecs.lookup(name)
    except LookupError:
        return DEFAULT_CODEPAGE
    return name
