"""Convert editor HTML to RTF and stored RTF back to HTML."""

from __future__ import annotations

from fastapi import APIRouter, Form, Query  # type: ignore[import-not-found]
from fastapi.responses import (  # type: ignore[import-not-found]
    HTMLResponse,
    PlainTextResponse,
)

from rtfterms.converter import html_to_rtf, rtf_to_html
from rtfterms.envelope import wrap_envelope

router = APIRouter()


@router.post("/to-rtf")
async def to_rtf_endpoint(
    html: str = Form(""),
    envelope: bool = Query(default=False),
) -> PlainTextResponse:
    """Encode editor HTML as RTF.

    Args:
        html: HTML fragment from the editor.
        envelope: Wrap the RTF in the settings JSON envelope.

    Returns:
        The RTF document, or the envelope JSON, as plain text.
    """

    rtf = html_to_rtf(html)
    return PlainTextResponse(wrap_envelope(rtf) if envelope else rtf)


@router.post("/to-html")
async def to_html_endpoint(rtf: str = Form("")) -> HTMLResponse:
    """Decode RTF, or the settings envelope, as an HTML fragment."""

    return HTMLResponse(rtf_to_html(rtf))
