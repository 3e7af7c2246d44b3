"""Utility helpers for web routes."""

from __future__ import annotations

import os

from rtfterms.file_store import FileStore, store_from_env
from rtfterms.terms import SETTINGS_FILE


def get_store() -> FileStore:
    """Return the store configured by the environment.

    Used as a FastAPI dependency so tests can override it.
    """

    return store_from_env()


def settings_file() -> str:
    """Return the name of the settings file holding the terms."""

    return os.environ.get("RTFTERMS_SETTINGS_FILE", SETTINGS_FILE)
