"""Entries of the RTF font and colour tables."""

from __future__ import annotations

from attrs import define


@define(slots=True)
class FontEntry:
    """Font declared in ``\\fonttbl``.

    Attributes:
        index: Number used by ``\\fN`` to select the font.
        name: Family name without the trailing semicolon.
        charset: Value of ``\\fcharsetN`` when present.
    """

    index: int
    name: str
    charset: int | None = None


@define(slots=True)
class ColorEntry:
    """Colour declared in ``\\colortbl``."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def hex(self) -> str:
        """Return the colour as ``#rrggbb``."""

        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
