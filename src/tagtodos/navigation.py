"""Resolve link targets to documents and hand them to a viewer."""

from typing import Callable, Iterable, Optional

from .models import DocumentInfo
from .vault import DocumentStore

DocumentOpener = Callable[[DocumentInfo, bool], None]


def ensure_md_extension(path: str) -> str:
    if not path.endswith(".md"):
        return f"{path}.md"
    return path


def find_document(path: str, documents: Iterable[DocumentInfo]) -> Optional[DocumentInfo]:
    """First document whose path ends with ``path`` (``.md`` appended if missing)."""
    path = ensure_md_extension(path)
    for document in documents:
        if document.path.endswith(path):
            return document
    return None


def open_document(
    path: str,
    store: DocumentStore,
    opener: DocumentOpener,
    new_pane: bool = False,
) -> Optional[DocumentInfo]:
    """Resolve ``path`` against the store and pass the document to ``opener``.

    Returns the opened document, or None if nothing matched.
    """
    document = find_document(path, store.list_documents())
    if document is None:
        return None
    opener(document, new_pane)
    return document
