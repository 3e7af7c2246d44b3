"""File-content stores used to load and save the settings file.

Two stores share one contract: ``get_file_content(name)`` returns the text of
a file or ``None`` when it is missing, raising :class:`FileStoreError` when
it exists but cannot be read, and ``save_file_content(name, content)``
returns whether the write succeeded.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

import requests  # type: ignore[import-untyped]
from attrs import define, field

from .json_utils import json_loads

logger = logging.getLogger(__name__)

GRAPH_ENDPOINT = "https://graph.microsoft.com/v1.0"
STORE_DIR = Path.home() / ".rtfterms"


class FileStoreError(Exception):
    """Raised when a stored file could not be read."""


class FileStore(Protocol):
    """Storage for named text files."""

    def get_file_content(self, name: str) -> str | None: ...

    def save_file_content(self, name: str, content: str) -> bool: ...


def is_saveable(name: str, content: str) -> bool:
    """Return whether ``content`` may be written to the file ``name``.

    Empty content is never written, and ``.json`` files must hold valid JSON
    so that a broken editor state cannot overwrite the settings.
    """

    if not content or not content.strip():
        logger.error(f"Refusing to save empty content to {name}")
        return False

    if name.lower().endswith(".json"):
        try:
            json_loads(content)
        except ValueError:
            logger.error(f"Refusing to save invalid JSON to {name}")
            return False

    return True


@define(slots=True)
class LocalFileStore:
    """Files kept in a local directory, read and written as UTF-8.

    Attributes:
        root: Directory holding the files; created on the first save.
    """

    root: Path = field(converter=Path)

    def get_file_content(self, name: str) -> str | None:
        path = self.root / name
        if not path.is_file():
            logger.debug(f"{path} does not exist")
            return None

        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error(f"Failed to read {path}: {exc}")
            raise FileStoreError(f"Failed to read {path}: {exc}") from exc

    def save_file_content(self, name: str, content: str) -> bool:
        if not is_saveable(name, content):
            return False

        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.info(f"Saved {len(content)} characters to {path}")
        return True


@define(slots=True)
class GraphFileStore:
    """Files kept in a SharePoint document library, reached through Graph.

    Attributes:
        drive_id: Identifier of the document library drive.
        token: Bearer token with read/write access to the drive.
        endpoint: Graph API base URL.
        folder: Optional folder path inside the drive.
        timeout: Request timeout in seconds.
    """

    drive_id: str
    token: str = field(repr=False)
    endpoint: str = GRAPH_ENDPOINT
    folder: str = ""
    timeout: float = 30

    def content_url(self, name: str) -> str:
        """Return the Graph URL of the content of the file ``name``."""

        folder = self.folder.strip("/")
        path = f"{folder}/{name}" if folder else name
        return (
            f"{self.endpoint.rstrip('/')}/drives/{self.drive_id}"
            f"/root:/{quote(path)}:/content"
        )

    def _headers(self, content_type: str | None = None) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self.token}"}
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def get_file_content(self, name: str) -> str | None:
        url = self.content_url(name)
        try:
            response = requests.get(
                url, headers=self._headers(), timeout=self.timeout
            )
            if response.status_code == 404:
                logger.info(f"{name} does not exist in drive {self.drive_id}")
                return None
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error(f"Failed to read {name}: {exc}")
            raise FileStoreError(f"Failed to read {name}: {exc}") from exc

        response.encoding = "utf-8"
        return response.text

    def save_file_content(self, name: str, content: str) -> bool:
        if not is_saveable(name, content):
            return False

        content_type = (
            "application/json"
            if name.lower().endswith(".json")
            else "text/plain"
        )
        try:
            response = requests.put(
                self.content_url(name),
                data=content.encode("utf-8"),
                headers=self._headers(content_type),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.error(f"Failed to save {name}: {exc}")
            return False

        logger.info(f"Saved {name} to drive {self.drive_id}")
        return True


def store_from_env() -> FileStore:
    """Build the store described by the environment.

    The Graph store is used when both ``RTFTERMS_GRAPH_TOKEN`` and
    ``RTFTERMS_DRIVE_ID`` are set; otherwise files live under
    ``RTFTERMS_STORE_DIR`` (``~/.rtfterms`` by default).
    """

    token = os.environ.get("RTFTERMS_GRAPH_TOKEN")
    drive_id = os.environ.get("RTFTERMS_DRIVE_ID")
    if token and drive_id:
        return GraphFileStore(
            drive_id=drive_id,
            token=token,
            endpoint=os.environ.get("RTFTERMS_GRAPH_ENDPOINT", GRAPH_ENDPOINT),
            folder=os.environ.get("RTFTERMS_GRAPH_FOLDER", ""),
        )

    return LocalFileStore(os.environ.get("RTFTERMS_STORE_DIR", STORE_DIR))
