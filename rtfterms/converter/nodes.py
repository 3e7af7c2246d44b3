"""Markup tree used by the HTML to RTF encoder."""

from __future__ import annotations

from attrs import define, field

from .types import AttributeMap, NodeList


@define(slots=True)
class Text:
    """Literal text found between tags.

    Attributes:
        content: Decoded text with HTML entities already resolved.
    """

    content: str


@define(slots=True)
class Element:
    """A markup element with its attributes and ordered children.

    Attributes:
        tag: Lower-case tag name such as ``p`` or ``span``.
        attributes: Attribute values keyed by lower-case name. Multi-valued
            attributes (``class``) are joined with spaces.
        children: Child elements and text nodes in document order.
    """

    tag: str
    attributes: AttributeMap = field(factory=dict)
    children: NodeList = field(factory=list, repr=False)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the value of attribute ``name`` or ``default``."""

        return self.attributes.get(name, default)
