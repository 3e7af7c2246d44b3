"""Logical document produced by the RTF decoder."""

from __future__ import annotations

from typing import Any

from attrs import asdict, define, field

from .types import BlockList, ColorTable, FontTable


@define(slots=True)
class Document:
    """Logical document produced by the RTF decoder.

    Attributes:
        blocks: Paragraphs and lists in document order.
        fonts: Font table keyed by font index.
        colors: Colour table; ``None`` entries stand for the auto colour.
    """

    blocks: BlockList = field(factory=list)
    fonts: FontTable = field(factory=dict, repr=False)
    colors: ColorTable = field(factory=list, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Return plain data suitable for JSON or YAML dumps.

        Font indexes become string keys so that every JSON encoder accepts
        them.
        """

        return {
            "blocks": [asdict(block) for block in self.blocks],
            "fonts": {
                str(index): asdict(font) for index, font in self.fonts.items()
            },
            "colors": [
                asdict(color) if color is not None else None
                for color in self.colors
            ],
        }
