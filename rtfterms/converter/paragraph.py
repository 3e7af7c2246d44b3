"""Represents a paragraph or heading of the document."""

from __future__ import annotations

from attrs import define, field

from .types import RunList


@define(slots=True)
class Paragraph:
    """Represents a paragraph or heading of the document.

    Attributes:
        runs: Ordered inline runs.
        heading: Heading level from 1 to 4, ``None`` for body text.
        align: ``center``, ``right`` or ``justify``; ``None`` means left.
    """

    runs: RunList = field(factory=list)
    heading: int | None = None
    align: str | None = None
