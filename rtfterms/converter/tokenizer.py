"""Split RTF text into a flat token stream."""

from __future__ import annotations

import re

from .rtf_token import (
    CONTROL_SYMBOL,
    CONTROL_WORD,
    GROUP_CLOSE,
    GROUP_OPEN,
    HEX,
    TEXT,
    Token,
)
from .types import TokenList

# A control word is up to 32 letters with an optional signed parameter; one
# trailing space belongs to the word as its delimiter.
_CONTROL_WORD_RE = re.compile(r"\\([a-zA-Z]{1,32})(-?\d{1,10})? ?")
_HEX_RE = re.compile(r"\\'([0-9a-fA-F]{2})")
_TEXT_RE = re.compile(r"[^\\{}\r\n]+")


def tokenize(rtf: str) -> TokenList:
    """Split RTF text into tokens.

    Malformed sequences never raise: a backslash that starts nothing
    recognisable is dropped and raw line breaks are ignored, as RTF readers
    do.

    Args:
        rtf: RTF document or fragment.

    Returns:
        Tokens in source order.
    """

    tokens: TokenList = []
    pos = 0
    length = len(rtf)

    while pos < length:
        char = rtf[pos]

        if char == "{":
            tokens.append(Token(GROUP_OPEN))
            pos += 1
        elif char == "}":
            tokens.append(Token(GROUP_CLOSE))
            pos += 1
        elif char in "\r\n":
            pos += 1
        elif char == "\\":
            pos = _read_escape(rtf, pos, tokens)
        else:
            match = _TEXT_RE.match(rtf, pos)
            if match is None:  # pragma: no cover - guarded by branches above
                pos += 1
                continue
            tokens.append(Token(TEXT, text=match.group(0)))
            pos = match.end()

    return tokens


def _read_escape(rtf: str, pos: int, tokens: TokenList) -> int:
    """Read the sequence starting with the backslash at ``pos``.

    Returns:
        Position just after the consumed sequence.
    """

    match = _CONTROL_WORD_RE.match(rtf, pos)
    if match:
        param = int(match.group(2)) if match.group(2) is not None else None
        tokens.append(Token(CONTROL_WORD, word=match.group(1), param=param))
        return match.end()

    match = _HEX_RE.match(rtf, pos)
    if match:
        tokens.append(Token(HEX, param=int(match.group(1), 16)))
        return match.end()

    # Trailing lone backslash.
    if pos + 1 >= len(rtf):
        return pos + 1

    symbol = rtf[pos + 1]
    if symbol in "\\{}":
        tokens.append(Token(TEXT, text=symbol))
    elif symbol in "\r\n":
        # A backslash before a line break is an alias for ``\par``.
        tokens.append(Token(CONTROL_WORD, word="par"))
    elif symbol == "'":
        # Incomplete hex escape, nothing to decode.
        pass
    else:
        tokens.append(Token(CONTROL_SYMBOL, word=symbol))
    return pos + 2
