"""Collect todos across a vault and group them for presentation."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

from .models import DocumentInfo, GroupBy, SortDirection, TodoGroup, TodoItem
from .scanner import LoadedDocument, get_todos_from_document
from .tags import matching_tags
from .vault import DocumentStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def is_ignored(document: DocumentInfo, ignored_folder: str) -> bool:
    """True if ``ignored_folder`` is one of the path segments of ``document``."""
    return bool(ignored_folder) and ignored_folder in document.path.split("/")


def _load_document(
    store: DocumentStore, document: DocumentInfo, tag_filter: str
) -> Optional[LoadedDocument]:
    """Index ``document`` once; read its content only if it carries the filter tag."""
    metadata = store.metadata(document)
    valid_tags = None
    if tag_filter:
        valid_tags = matching_tags(metadata, tag_filter)
        if not valid_tags:
            return None
    return LoadedDocument(
        document=document,
        content=store.read(document) or "",
        metadata=metadata,
        valid_tags=valid_tags,
    )


def _claim(todo: TodoItem, seen: set[tuple[str, int]]) -> TodoItem:
    seen.add(todo.key)
    children = [_claim(child, seen) for child in todo.children if child.key not in seen]
    return todo.model_copy(update={"children": children})


def dedupe_todos(todos: Iterable[TodoItem]) -> list[TodoItem]:
    """Keep the first todo for each (file_path, line).

    Keys are tracked through nested children too, so a line never shows up twice
    anywhere in the result.
    """
    seen: set[tuple[str, int]] = set()
    unique: list[TodoItem] = []
    for todo in todos:
        if todo.key in seen:
            continue
        unique.append(_claim(todo, seen))
    return unique


def sort_todos(todos: list[TodoItem], sort: SortDirection) -> list[TodoItem]:
    """Stable sort by document creation time."""
    return sorted(
        todos,
        key=lambda t: t.file_created_ts,
        reverse=SortDirection(sort) == SortDirection.NEW_TO_OLD,
    )


def parse_todos(
    documents: list[DocumentInfo],
    store: DocumentStore,
    tag_filter: str = "",
    sort: SortDirection = SortDirection.NEW_TO_OLD,
    ignored_folder: str = "",
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[TodoItem]:
    """Collect todos from ``documents``.

    Args:
        documents: Candidate documents, usually ``store.list_documents()``
        store: Store used to read content and metadata
        tag_filter: Main tag to filter on ("" scans every line of every document)
        sort: Ordering by document creation time
        ignored_folder: Path segment whose documents are skipped ("" disables)
        max_workers: Upper bound on concurrent document reads

    Returns:
        Deduplicated, sorted list of top-level todos (nested todos in ``children``)

    Raises:
        MalformedTagError: If the metadata index holds a tag without '#'
    """
    unignored = [d for d in documents if not is_ignored(d, ignored_folder)]
    if not unignored:
        return []

    workers = max(1, min(max_workers, len(unignored)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() yields in input order regardless of completion order
        loaded = list(executor.map(lambda d: _load_document(store, d, tag_filter), unignored))

    to_parse = [doc for doc in loaded if doc is not None]
    logger.debug(
        f"{len(documents)} documents, {len(unignored)} not ignored, {len(to_parse)} to parse"
    )
    non_empty = [doc for doc in to_parse if doc.content]
    all_todos: list[TodoItem] = []
    for doc in non_empty:
        all_todos.extend(get_todos_from_document(doc))

    final_todos = dedupe_todos(all_todos)
    logger.info(
        f"Found {len(final_todos)} todos in {len(non_empty)} documents "
        f"({len(all_todos) - len(final_todos)} duplicates dropped)"
    )
    return sort_todos(final_todos, sort)


def _group_key(item: TodoItem, group_by: GroupBy) -> str:
    if group_by == GroupBy.PAGE:
        return item.file_path
    return "#" + "/".join(t for t in (item.main_tag, item.sub_tag) if t is not None)


def group_todos(items: Iterable[TodoItem], group_by: GroupBy) -> list[TodoGroup]:
    """Group todos by document or by tag, in first-seen order."""
    group_by = GroupBy(group_by)
    groups: list[TodoGroup] = []
    by_key: dict[str, TodoGroup] = {}
    for item in items:
        key = _group_key(item, group_by)
        group = by_key.get(key)
        if group is None:
            if group_by == GroupBy.PAGE:
                name: Optional[str] = item.file_label
            else:
                name = item.sub_tag or item.main_tag
            group = TodoGroup(group_id=key, group_name=name, type=group_by)
            by_key[key] = group
            groups.append(group)
        group.todos.append(item)
    return [g for g in groups if g.todos]
