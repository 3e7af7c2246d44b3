"""Convert HTML produced by the rich-text editor into an RTF document."""

from __future__ import annotations

import logging
import re

from attrs import define, field

from .charmap import escape_char, locale_id
from .nodes import Element, Text
from .parse_html import parse_html
from .types import Node

logger = logging.getLogger(__name__)

HEADER = (
    "{\\rtf1\\ansi\\ansicpg1252\\uc1\\htmautsp\\deff2\\deflang1033"
    "{\\fonttbl{\\f0\\fcharset0 Times New Roman;}"
    "{\\f2\\fcharset0 Segoe UI;}{\\f3\\fcharset0 Aptos;}}"
    "{\\colortbl\\red0\\green0\\blue0;\\red255\\green255\\blue255;}\r\n"
)

# Bulleted template (listid1) and decimal template (listid2). Paragraphs pick
# one through ``\ls1`` or ``\ls2``.
LIST_TABLE = (
    "{\\*\\listtable"
    "{\\list\\listtemplateid1\\listhybrid"
    "{\\listlevel\\levelnfc23\\levelnfcn23\\leveljc0\\leveljcn0\\levelfollow0"
    "\\levelstartat1\\levelspace0\\levelindent0"
    "{\\leveltext\\leveltemplateid5\\'01\\'b7;}{\\levelnumbers;}"
    "\\f3\\fi-360\\li720\\lin720\\jclisttab\\tx720}"
    "{\\listname ;}\\listid1}"
    "{\\list\\listtemplateid2\\listhybrid"
    "{\\listlevel\\levelnfc0\\levelnfcn0\\leveljc0\\leveljcn0\\levelfollow0"
    "\\levelstartat1\\levelspace0\\levelindent0"
    "{\\leveltext\\leveltemplateid6\\'02\\'00.;}{\\levelnumbers\\'01;}"
    "\\fi-360\\li720\\lin720\\jclisttab\\tx720}"
    "{\\listname ;}\\listid2}}\r\n"
    "{\\*\\listoverridetable"
    "{\\listoverride\\listid1\\listoverridecount0\\ls1}"
    "{\\listoverride\\listid2\\listoverridecount0\\ls2}}\r\n"
)

BODY_START = (
    "\\loch\\hich\\dbch\\pard\\plain\\ltrpar\\itap0"
    "{\\lang1033\\fs21\\f2\\cf0 "
)
BODY_END = "}"
DOCUMENT_END = "}"

PARAGRAPH_BREAK = "\\par\r\n"
LINE_BREAK = "\\line "
LOOSE_PARAGRAPH = "\\pard\\ltrpar "
PARAGRAPH_SPACING = "\\li0\\ri0\\sa160\\sb0\\fi0"
LIST_SPACING = "\\li720\\ri0\\sa160\\sb0\\fi-360\\jclisttab\\tx720\\ql"
EMPTY_PARAGRAPH = (
    "\\pard\\ltrpar{\\f2\\fs22 }"
    + PARAGRAPH_SPACING
    + "\\ql"
    + PARAGRAPH_BREAK
)

BULLET_MARKER = (
    "{\\pntext\\f3\\'b7\\tab}"
    "{\\*\\pn\\pnlvlblt\\pnf3\\pnindent360{\\pntxtb\\'b7}}"
)
NUMBER_MARKER = (
    "{{\\pntext\\f3 {number}.\\tab}}"
    "{{\\*\\pn\\pnlvlbody\\pndec\\pnstart1\\pnindent360{{\\pntxta .}}}}"
)

ALIGNMENTS = {
    "left": "\\ql",
    "start": "\\ql",
    "center": "\\qc",
    "right": "\\qr",
    "end": "\\qr",
    "justify": "\\qj",
}

# Heading font sizes in half-points.
HEADING_SIZES = {"h1": 40, "h2": 36, "h3": 28, "h4": 26, "h5": 26, "h6": 26}

CHARACTER_FORMATS = {
    "b": "\\b",
    "strong": "\\b",
    "i": "\\i",
    "em": "\\i",
    "u": "\\ul",
    "ins": "\\ul",
}

# Containers whose formatting whitespace between child blocks is ignored.
BLOCK_CONTAINERS = {
    "div",
    "body",
    "html",
    "section",
    "article",
    "main",
    "header",
    "footer",
    "blockquote",
}

_TEXT_ALIGN_RE = re.compile(r"text-align\s*:\s*([a-z-]+)", re.IGNORECASE)


def _escape_text(text: str, line_break: str) -> str:
    """Escape literal text for inclusion in an RTF stream.

    Args:
        text: Text node content.
        line_break: Control word emitted for each newline.

    Returns:
        RTF-safe representation of ``text``.
    """

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    parts: list[str] = []
    for char in text:
        if char in "\\{}":
            parts.append("\\" + char)
        elif char == "\n":
            parts.append(line_break)
        elif char == "\t":
            parts.append("\\tab ")
        else:
            parts.append(escape_char(char))
    return "".join(parts)


def _escape_field_argument(value: str) -> str:
    """Escape a hyperlink target for a ``HYPERLINK`` field instruction."""

    return _escape_text(value.replace('"', "%22"), " ")


def _alignment(element: Element) -> str:
    """Return the alignment control word requested by ``element``."""

    value = element.get("align")
    if not value:
        match = _TEXT_ALIGN_RE.search(element.get("style") or "")
        value = match.group(1) if match else None
    return ALIGNMENTS.get((value or "").lower(), "\\ql")


def _contains_list(element: Element) -> bool:
    """Return ``True`` when a ``ul`` or ``ol`` appears below ``element``."""

    for child in element.children:
        if isinstance(child, Element):
            if child.tag in ("ul", "ol") or _contains_list(child):
                return True
    return False


@define(slots=True)
class _Encoder:
    """Per-call state of a single HTML to RTF conversion.

    Attributes:
        parts: RTF fragments in output order.
        in_item: Whether a list item body is being written.
        in_paragraph: Whether a paragraph or heading body is being written.
        pending_lists: Lists found inside the current item, written after it.
        loose: Whether inline content was written outside any paragraph.
    """

    parts: list[str] = field(factory=list)
    in_item: bool = False
    in_paragraph: bool = False
    pending_lists: list[Element] = field(factory=list)
    loose: bool = False

    def emit(self, fragment: str) -> None:
        self.parts.append(fragment)

    def children(self, element: Element) -> None:
        for child in element.children:
            self.node(child, element)

    def node(self, node: Node, parent: Element) -> None:
        """Dispatch ``node`` to the handler for its kind."""

        if isinstance(node, Text):
            self.text(node, parent)
            return

        tag = node.tag
        if tag == "p":
            self.paragraph(node)
        elif tag in HEADING_SIZES:
            self.paragraph(node, font=3, size=HEADING_SIZES[tag])
        elif tag == "br":
            self.emit(LINE_BREAK if self.in_item else PARAGRAPH_BREAK)
        elif tag in CHARACTER_FORMATS:
            self.emit("{" + CHARACTER_FORMATS[tag] + " ")
            self.children(node)
            self.emit("}")
        elif tag == "span":
            self.span(node)
        elif tag == "a":
            self.link(node)
        elif tag in ("ul", "ol"):
            if self.in_item:
                # Nested lists are flattened after the enclosing item.
                self.pending_lists.append(node)
            else:
                self.list_block(node, ordered=tag == "ol")
        elif tag == "li":
            # Items are only meaningful inside their list.
            return
        else:
            self.children(node)

    def text(self, node: Text, parent: Element) -> None:
        content = node.content
        if (
            parent.tag in BLOCK_CONTAINERS
            and not content.strip()
            and "\n" in content
        ):
            return

        line_break = LINE_BREAK if self.in_item else PARAGRAPH_BREAK
        escaped = _escape_text(content, line_break)
        if not escaped:
            return

        # Inline content outside any block opens its own plain paragraph.
        if not self.in_item and not self.in_paragraph and not self.loose:
            self.emit(LOOSE_PARAGRAPH)
            self.loose = True
        self.emit(escaped)

    def close_loose(self) -> None:
        """End a paragraph made of inline content outside any block."""

        if self.loose:
            self.emit(PARAGRAPH_BREAK)
            self.loose = False

    def paragraph(
        self, element: Element, font: int = 2, size: int = 22
    ) -> None:
        """Write a paragraph or heading."""

        # Inside list items and paragraphs the element is treated as inline.
        if self.in_item or self.in_paragraph:
            self.children(element)
            return

        self.close_loose()
        self.emit(f"\\pard\\ltrpar{{\\f{font}\\fs{size} ")
        self.in_paragraph = True
        try:
            self.children(element)
        finally:
            self.in_paragraph = False
        self.emit(
            "}" + PARAGRAPH_SPACING + _alignment(element) + PARAGRAPH_BREAK
        )

    def span(self, element: Element) -> None:
        lang = element.get("lang")
        direction = (element.get("dir") or "").lower()

        # Plain spans carry no formatting of their own.
        if not lang and direction not in ("rtl", "ltr"):
            self.children(element)
            return

        prefix = "{"
        if lang:
            prefix += f"\\lang{locale_id(lang)}"
        prefix += "\\rtlch" if direction == "rtl" else "\\ltrch"
        self.emit(prefix + " ")
        self.children(element)
        self.emit("}")

    def link(self, element: Element) -> None:
        href = (element.get("href") or "").strip()
        if not href:
            self.children(element)
            return

        self.emit(
            "{\\field{\\*\\fldinst{HYPERLINK \""
            + _escape_field_argument(href)
            + "\"}}{\\fldrslt{\\ul "
        )
        self.children(element)
        self.emit("}}}")

    def list_block(self, element: Element, ordered: bool) -> None:
        """Write each direct ``li`` child as a list paragraph."""

        self.close_loose()
        number = 0
        for child in element.children:
            if not isinstance(child, Element) or child.tag != "li":
                continue

            number += 1
            if ordered:
                marker = NUMBER_MARKER.format(number=number)
                self.emit("\\pard\\ltrpar\\ls2\\ilvl0" + marker)
            else:
                self.emit("\\pard\\ltrpar\\ls1\\ilvl0" + BULLET_MARKER)

            self.emit("{\\f2\\fs22 ")
            nested = self.item(child)
            self.emit("}" + LIST_SPACING + PARAGRAPH_BREAK)

            for sublist in nested:
                self.list_block(sublist, ordered=sublist.tag == "ol")

    def item(self, element: Element) -> list[Element]:
        """Write the body of a list item and return its nested lists."""

        outer_pending = self.pending_lists
        self.pending_lists = []
        self.in_item = True
        try:
            self.children(element)
        finally:
            self.in_item = False
            nested, self.pending_lists = self.pending_lists, outer_pending
        return nested


def _assemble(body: str, has_lists: bool) -> str:
    """Wrap an encoded body with the document header and closing groups."""

    if not body.strip():
        body = EMPTY_PARAGRAPH
    header = HEADER + (LIST_TABLE if has_lists else "")
    return header + BODY_START + body + BODY_END + DOCUMENT_END


def html_to_rtf(html: str | Element | None) -> str:
    """Convert HTML content into a complete RTF document.

    Args:
        html: HTML from the rich-text editor, or a markup tree already
            built by ``parse_html``. ``None`` or an empty string produce a
            document holding one empty paragraph.

    Returns:
        RTF text. Unexpected failures are logged and yield the empty
        document instead of an exception.
    """

    try:
        root = html if isinstance(html, Element) else parse_html(html)
        encoder = _Encoder()
        encoder.children(root)
        encoder.close_loose()
        return _assemble("".join(encoder.parts), _contains_list(root))
    except Exception:
        logger.exception("HTML to RTF conversion failed")
        return _assemble("", False)
