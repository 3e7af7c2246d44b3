"""Common type aliases for converter structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from .list_block import ListBlock, ListItem  # noqa: F401
    from .nodes import Element, Text  # noqa: F401
    from .paragraph import Paragraph  # noqa: F401
    from .rtf_tables import ColorEntry, FontEntry  # noqa: F401
    from .run import Run  # noqa: F401
    from .rtf_token import Token  # noqa: F401


Node = Union["Element", "Text"]
NodeList = list[Node]
AttributeMap = dict[str, str]
RunList = list["Run"]
ListItemList = list["ListItem"]
Block = Union["Paragraph", "ListBlock"]
BlockList = list[Block]
FontTable = dict[int, "FontEntry"]
ColorTable = list[Union["ColorEntry", None]]
TokenList = list["Token"]
