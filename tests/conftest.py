"""Shared fixtures for the test suite."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from rtfterms.file_store import LocalFileStore


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Drop configuration leaking from the developer environment.

    Stores default to a directory inside ``tmp_path``.
    """

    for name in list(os.environ):
        if name.startswith("RTFTERMS_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("RTFTERMS_STORE_DIR", str(tmp_path / "store"))


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Directory backing the default local store."""

    return tmp_path / "store"


@pytest.fixture
def local_store(store_dir: Path) -> LocalFileStore:
    """Local store rooted at the default store directory."""

    return LocalFileStore(store_dir)


class FailingStore:
    """Store whose reads find nothing and whose writes always fail."""

    def __init__(self) -> None:
        self.saved: list[tuple[str, str]] = []

    def get_file_content(self, name: str) -> str | None:
        return None

    def save_file_content(self, name: str, content: str) -> bool:
        self.saved.append((name, content))
        return False


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()
