"""Load and save the stored terms and conditions."""

from __future__ import annotations

from fastapi import (  # type: ignore[import-not-found]
    APIRouter,
    Depends,
    Form,
    HTTPException,
)
from fastapi.responses import (  # type: ignore[import-not-found]
    HTMLResponse,
    JSONResponse,
)

from rtfterms.file_store import FileStore, FileStoreError
from rtfterms.terms import load_terms_html, save_terms_html

from ..utils import get_store, settings_file

router = APIRouter()


@router.get("/terms")
async def get_terms(
    store: FileStore = Depends(get_store),
    file_name: str = Depends(settings_file),
) -> HTMLResponse:
    """Return the stored terms as HTML.

    Raises:
        HTTPException: 404 when the settings file is missing, 502 when it
            cannot be read.
    """

    try:
        html = load_terms_html(store, file_name)
    except FileStoreError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    if html is None:
        raise HTTPException(status_code=404, detail="Terms not found")
    return HTMLResponse(html)


@router.post("/terms")
async def save_terms(
    html: str = Form(""),
    store: FileStore = Depends(get_store),
    file_name: str = Depends(settings_file),
) -> JSONResponse:
    """Encode the edited HTML and save it into the settings file.

    Raises:
        HTTPException: 502 when the store rejects the write.
    """

    if not save_terms_html(store, html, file_name):
        raise HTTPException(status_code=502, detail="Saving the terms failed")
    return JSONResponse({"saved": True})
