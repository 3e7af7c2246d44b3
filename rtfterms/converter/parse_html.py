"""Parse HTML content into a markup tree."""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .nodes import Element, Text
from .types import AttributeMap, NodeList

# Elements whose content never reaches the document.
DROPPED_TAGS = ["style", "script", "head", "title", "meta", "link"]

# Editor preview container; when present only its content is converted.
PREVIEW_ID = "termsPreview"


def _attributes(tag: Tag) -> AttributeMap:
    """Return attribute values of ``tag`` as plain strings."""

    attributes: AttributeMap = {}
    for name, value in tag.attrs.items():
        # ``class`` and similar attributes come back as lists.
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        attributes[name.lower()] = str(value)
    return attributes


def _convert_children(tag: Any) -> NodeList:  # noqa: ANN401
    """Convert the children of a BeautifulSoup tag into tree nodes."""

    children: NodeList = []
    for child in tag.children:
        if isinstance(child, Tag):
            children.append(
                Element(
                    tag=child.name.lower(),
                    attributes=_attributes(child),
                    children=_convert_children(child),
                )
            )
        elif isinstance(child, PreformattedString):
            # Comments, doctypes and processing instructions.
            continue
        elif isinstance(child, NavigableString):
            children.append(Text(content=str(child)))
    return children


def parse_html(html: str | None) -> Element:
    """Parse HTML content into a markup tree.

    Args:
        html: Raw HTML, usually the inner HTML of the rich-text editor.

    Returns:
        A ``div`` element holding the converted content. Missing input yields
        an empty root.
    """

    if not html:
        return Element(tag="div")

    soup = BeautifulSoup(html, "html.parser")

    # Remove elements that only carry presentation or metadata.
    for tag in soup.find_all(DROPPED_TAGS):
        tag.decompose()

    # Restrict conversion to the preview container when it exists.
    preview: Any = soup.find(id=PREVIEW_ID)
    source = preview if preview is not None else soup

    return Element(tag="div", children=_convert_children(source))
