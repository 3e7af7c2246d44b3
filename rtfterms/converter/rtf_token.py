"""Token emitted by the RTF tokenizer."""

from __future__ import annotations

from attrs import define

GROUP_OPEN = "group_open"
GROUP_CLOSE = "group_close"
CONTROL_WORD = "control_word"
CONTROL_SYMBOL = "control_symbol"
HEX = "hex"
TEXT = "text"


@define(slots=True, frozen=True)
class Token:
    """Token emitted by the RTF tokenizer.

    Attributes:
        kind: One of the token kind constants of this module.
        word: Control word name (``"b"``), the symbol character for control
            symbols, or ``None``.
        param: Numeric parameter of a control word or the byte value of a
            ``\\'hh`` escape.
        text: Literal text for ``text`` tokens.
    """

    kind: str
    word: str | None = None
    param: int | None = None
    text: str = ""
