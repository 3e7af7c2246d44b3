"""Render a logical document as an HTML fragment."""

from __future__ import annotations

import html
import re

from .document import Document
from .list_block import NUMBERED, ListBlock
from .paragraph import Paragraph
from .run import Run
from .types import RunList

# A closing tag directly followed by the same opening tag sits between two
# siblings with identical formatting and can be dropped.
_ADJACENT_TAGS_RE = re.compile(r"</(b|i|u)><\1>")


def _render_run(run: Run) -> str:
    """Return the HTML for one run, formatting tags nested outside-in."""

    text = html.escape(run.text, quote=False).replace("\n", "<br>")

    # Links are underlined by the browser already.
    if run.underline and not run.href:
        text = f"<u>{text}</u>"
    if run.italic:
        text = f"<i>{text}</i>"
    if run.bold:
        text = f"<b>{text}</b>"
    if run.lang:
        text = f'<span lang="{html.escape(run.lang)}">{text}</span>'
    if run.href:
        text = f'<a href="{html.escape(run.href)}">{text}</a>'
    return text


def render_runs(runs: RunList) -> str:
    """Render inline runs, merging adjacent identical formatting tags."""

    markup = "".join(_render_run(run) for run in runs)
    return _ADJACENT_TAGS_RE.sub("", markup)


def _render_paragraph(paragraph: Paragraph) -> str:
    tag = f"h{paragraph.heading}" if paragraph.heading else "p"
    style = (
        f' style="text-align:{paragraph.align}"' if paragraph.align else ""
    )
    return f"<{tag}{style}>{render_runs(paragraph.runs)}</{tag}>"


def _render_list(block: ListBlock) -> str:
    tag = "ol" if block.kind == NUMBERED else "ul"
    items = "".join(
        f"<li>{render_runs(item.runs)}</li>" for item in block.items
    )
    return f"<{tag}>{items}</{tag}>"


def render_html(document: Document) -> str:
    """Render a logical document as an HTML fragment.

    Args:
        document: Decoded document.

    Returns:
        HTML with one element per block, in document order.
    """

    parts: list[str] = []
    for block in document.blocks:
        if isinstance(block, ListBlock):
            parts.append(_render_list(block))
        else:
            parts.append(_render_paragraph(block))
    return "".join(parts)
