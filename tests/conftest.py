"""Pytest fixtures for tagtodos tests."""

from typing import Optional

import pytest

from tagtodos.models import DocumentInfo, DocumentMetadata
from tagtodos.vault import DocumentStore, index_document


class InMemoryStore(DocumentStore):
    """DocumentStore backed by a dict of path -> (text, created_ts)."""

    def __init__(self, files: dict[str, tuple[str, float]]):
        self.files = dict(files)
        self.writes: list[tuple[str, str]] = []

    def list_documents(self) -> list[DocumentInfo]:
        return [
            DocumentInfo(path=path, name=path.rsplit("/", 1)[-1], created_ts=ts)
            for path, (_, ts) in self.files.items()
        ]

    def read(self, document: DocumentInfo) -> Optional[str]:
        entry = self.files.get(document.path)
        return entry[0] if entry else None

    def metadata(self, document: DocumentInfo) -> Optional[DocumentMetadata]:
        text = self.read(document)
        return index_document(text) if text is not None else None

    def write(self, document: DocumentInfo, text: str) -> None:
        self.files[document.path] = (text, self.files[document.path][1])
        self.writes.append((document.path, text))


@pytest.fixture
def make_store():
    """Factory for in-memory stores.

    Returns:
        Callable taking a dict of path -> (text, created_ts)
    """
    return InMemoryStore


@pytest.fixture
def temp_vault(tmp_path):
    """Create a temporary vault directory for testing.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path to temporary vault root
    """
    vault_root = tmp_path / "test_vault"
    vault_root.mkdir()
    return vault_root


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TAGTODOS_* variables so tests see only their own settings."""
    for name in (
        "TAGTODOS_VAULT",
        "TAGTODOS_TAG",
        "TAGTODOS_SORT",
        "TAGTODOS_GROUP_BY",
        "TAGTODOS_IGNORE_FOLDER",
        "TAGTODOS_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
