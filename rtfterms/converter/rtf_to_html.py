"""Convert stored RTF terms content into HTML for the editor."""

from __future__ import annotations

import logging

from ..envelope import unwrap_envelope
from .document import Document
from .render_html import render_html
from .rtf_to_document import plain_text_to_document, rtf_to_document

logger = logging.getLogger(__name__)

RTF_SIGNATURE = "{\\rtf"


def decode_document(rtf_or_envelope: str | None) -> Document:
    """Decode RTF, or a JSON envelope holding it, into a logical document.

    Args:
        rtf_or_envelope: RTF text, the JSON envelope or plain text.

    Returns:
        The decoded document; empty when there is no input.
    """

    if not rtf_or_envelope:
        return Document()

    content = unwrap_envelope(rtf_or_envelope).strip()

    # Settings created before the editor existed hold plain text.
    if not content.startswith(RTF_SIGNATURE):
        logger.debug("Content is not RTF, decoding it as plain text")
        return plain_text_to_document(content)

    return rtf_to_document(content)


def rtf_to_html(rtf_or_envelope: str | None) -> str:
    """Convert RTF, or a JSON envelope holding it, into an HTML fragment.

    Args:
        rtf_or_envelope: RTF document text or the persisted JSON envelope.

    Returns:
        HTML fragment, or an empty string when the input is empty or the
        conversion fails. Failures are logged, never raised.
    """

    if not rtf_or_envelope:
        return ""

    try:
        return render_html(decode_document(rtf_or_envelope))
    except Exception:
        logger.exception("RTF to HTML conversion failed")
        return ""
