"""Inline run of text sharing one set of character styles."""

from __future__ import annotations

from attrs import define


@define(slots=True)
class Run:
    """Inline run of text sharing one set of character styles.

    Attributes:
        text: Visible text. A ``"\\n"`` marks a soft line break.
        bold: Whether the run is bold.
        italic: Whether the run is italic.
        underline: Whether the run is underlined.
        lang: Language tag (``"es"``) when it differs from the document
            default.
        href: Hyperlink target when the run belongs to a link.
    """

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    lang: str | None = None
    href: str | None = None

    def same_style(self, other: Run) -> bool:
        """Return ``True`` when ``other`` carries identical styles."""

        return (
            self.bold == other.bold
            and self.italic == other.italic
            and self.underline == other.underline
            and self.lang == other.lang
            and self.href == other.href
        )
