"""FastAPI application exposing the terms converters to the editor UI."""

from __future__ import annotations

from fastapi import FastAPI  # type: ignore[import-not-found]

from .routes import convert, terms

app = FastAPI(title="rtfterms")
app.include_router(convert.router)
app.include_router(terms.router)
