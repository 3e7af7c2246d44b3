"""Load and save the terms and conditions kept in the settings file."""

from __future__ import annotations

import logging
from datetime import datetime

from .converter import html_to_rtf, rtf_to_html
from .envelope import settings_terms, update_settings
from .file_store import FileStore, FileStoreError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "app_settings.json"


def load_terms_html(
    store: FileStore, file_name: str = SETTINGS_FILE
) -> str | None:
    """Return the stored terms as HTML for the editor.

    Args:
        store: Store holding the settings file.
        file_name: Name of the settings file.

    Returns:
        HTML fragment, ``""`` when the settings hold no terms, or ``None``
        when the settings file is missing.

    Raises:
        FileStoreError: The settings file exists but could not be read.
    """

    content = store.get_file_content(file_name)
    if content is None:
        logger.warning(f"{file_name} not found, no terms to load")
        return None

    return rtf_to_html(settings_terms(content))


def save_terms_html(
    store: FileStore,
    html: str,
    file_name: str = SETTINGS_FILE,
    now: datetime | None = None,
) -> bool:
    """Encode edited HTML and write it into the settings file.

    The other settings sections already present in the file are kept, so
    nothing is written when the current file could not be read.

    Args:
        store: Store holding the settings file.
        html: Editor HTML.
        file_name: Name of the settings file.
        now: Modification time stamped on the terms.

    Returns:
        Whether the store accepted the new content.
    """

    rtf = html_to_rtf(html)
    try:
        current = store.get_file_content(file_name)
    except FileStoreError as exc:
        logger.error(f"Not saving terms to {file_name}: {exc}")
        return False

    settings = update_settings(current, rtf, now)
    saved = store.save_file_content(file_name, settings)
    if saved:
        logger.info(f"Saved terms ({len(rtf)} RTF characters) to {file_name}")
    return saved
