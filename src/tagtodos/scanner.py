"""Per-document todo scanning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .builder import TodoNester, get_todo_from_line, links_by_line
from .lines import split_lines
from .models import DocumentInfo, DocumentMetadata, TagMeta, TagOccurrence, TodoItem
from .tags import get_tag_meta


@dataclass(frozen=True)
class LoadedDocument:
    """A document with its content and metadata fetched from the store.

    ``valid_tags`` is None when tag filtering is off, otherwise the tag
    occurrences on the page that match the filter.
    """

    document: DocumentInfo
    content: str
    metadata: Optional[DocumentMetadata]
    valid_tags: Optional[list[TagOccurrence]] = None


def _scan_region(
    doc: LoadedDocument,
    lines: list[str],
    start_line: int,
    tag_meta: Optional[TagMeta],
) -> list[TodoItem]:
    links = doc.metadata.links if doc.metadata and doc.metadata.links else []
    line_links = links_by_line(links)
    nester = TodoNester()
    for i in range(start_line, len(lines)):
        item = get_todo_from_line(lines[i], doc.document, tag_meta, line_links.get(i, []), i)
        if item is None:
            nester.close_all()
            continue
        nester.add(item)
    return nester.build()


def find_todos_from_tag(doc: LoadedDocument, tag: TagOccurrence) -> list[TodoItem]:
    """Todos from the tag's line to the end of the document."""
    return _scan_region(doc, split_lines(doc.content), tag.start_line, get_tag_meta(tag.tag))


def find_todos_in_document(doc: LoadedDocument) -> list[TodoItem]:
    """Todos anywhere in the document, without tag context."""
    return _scan_region(doc, split_lines(doc.content), 0, None)


def get_todos_from_document(doc: LoadedDocument) -> list[TodoItem]:
    """Scan one document.

    With tag filtering, every matching tag occurrence opens its own region, so
    overlapping regions may yield the same line more than once.
    """
    if doc.valid_tags is None:
        return find_todos_in_document(doc)
    todos: list[TodoItem] = []
    for tag in doc.valid_tags:
        todos.extend(find_todos_from_tag(doc, tag))
    return todos
