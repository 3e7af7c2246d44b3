"""Bulleted and numbered lists."""

from __future__ import annotations

from attrs import define, field

from .types import ListItemList, RunList

BULLETED = "bulleted"
NUMBERED = "numbered"


@define(slots=True)
class ListItem:
    """Single entry of a list.

    Attributes:
        runs: Ordered inline runs of the item.
    """

    runs: RunList = field(factory=list)


@define(slots=True)
class ListBlock:
    """Sequence of list items sharing one marker style.

    Attributes:
        kind: Either ``"bulleted"`` or ``"numbered"``.
        items: Items in display order. Numbered lists count from 1.
    """

    kind: str
    items: ListItemList = field(factory=list)
