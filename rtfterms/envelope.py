"""JSON envelope holding the terms-and-conditions RTF in the settings file.

The persisted shape is ``{"TermsAndConditions": {"Content": "<RTF>"}}``. The
``app_settings.json`` file stores the same object next to other sections
(``Course``, ``Videos``) and stamps ``TermsAndConditions.LastModified``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from .json_utils import json_dumps, json_loads

logger = logging.getLogger(__name__)

TERMS_KEY = "TermsAndConditions"
CONTENT_KEY = "Content"
MODIFIED_KEY = "LastModified"


def wrap_envelope(rtf: str) -> str:
    """Return the JSON envelope text holding ``rtf``."""

    return json_dumps({TERMS_KEY: {CONTENT_KEY: rtf}})


def _section_content(data: dict[str, Any]) -> str | None:
    section = data.get(TERMS_KEY)
    if isinstance(section, dict) and isinstance(
        section.get(CONTENT_KEY), str
    ):
        return section[CONTENT_KEY]
    if isinstance(data.get(CONTENT_KEY), str):
        return data[CONTENT_KEY]
    return None


def unwrap_envelope(text: str) -> str:
    """Extract the RTF content from a JSON envelope.

    Text that does not look like an envelope, fails to parse, or lacks the
    content field is returned unchanged.

    Args:
        text: Envelope JSON, or RTF/plain text.

    Returns:
        ``TermsAndConditions.Content`` (or a top-level ``Content``), or
        ``text`` itself.
    """

    if not text.lstrip().startswith("{") or f'"{CONTENT_KEY}"' not in text:
        return text

    try:
        data = json_loads(text)
    except ValueError:
        logger.debug("Content looks like JSON but does not parse")
        return text

    if not isinstance(data, dict):
        return text

    content = _section_content(data)
    return text if content is None else content


def settings_terms(settings_text: str) -> str:
    """Return the terms document kept in a settings file.

    A settings JSON object without terms content yields an empty string.
    Text that is not a JSON object is taken to be the document itself.
    """

    if not settings_text.lstrip().startswith("{"):
        return settings_text

    try:
        data = json_loads(settings_text)
    except ValueError:
        return settings_text

    if not isinstance(data, dict):
        return settings_text

    content = _section_content(data)
    if content is None:
        logger.warning("Settings hold no terms content")
        return ""
    return content


def format_timestamp(now: datetime) -> str:
    """Return ``now`` as an ISO-8601 UTC timestamp with millisecond precision.

    Naive datetimes are taken to be in UTC already.
    """

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    stamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def update_settings(
    settings_text: str | None, rtf: str, now: datetime | None = None
) -> str:
    """Write new terms content into a settings JSON document.

    Args:
        settings_text: Current content of the settings file, if any.
        rtf: Encoded terms document.
        now: Modification time; the current time when omitted.

    Returns:
        Settings JSON text with ``TermsAndConditions.Content`` and
        ``TermsAndConditions.LastModified`` replaced and every other key kept.
    """

    settings: dict[str, Any] = {}
    if settings_text and settings_text.strip():
        try:
            loaded = json_loads(settings_text)
        except ValueError:
            logger.warning("Settings file is not valid JSON, starting over")
            loaded = None
        if isinstance(loaded, dict):
            settings = loaded

    section = settings.get(TERMS_KEY)
    if not isinstance(section, dict):
        section = {}

    section[CONTENT_KEY] = rtf
    section[MODIFIED_KEY] = format_timestamp(now or datetime.now(timezone.utc))
    settings[TERMS_KEY] = section
    return json_dumps(settings, indent=True)
