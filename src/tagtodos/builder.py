"""Build TodoItems from single lines and nest them by indentation."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .lines import (
    checkbox_source,
    indent_width,
    is_checked,
    is_valid_todo_line,
    payload_text,
    remove_tag_from_text,
)
from .models import CrossReference, DocumentInfo, LinkMeta, TagMeta, TodoItem
from .tokenizer import parse_display

_MD_NAME_RE = re.compile(r"^(.+)\.md$")


def get_file_label(file_name: str) -> Optional[str]:
    m = _MD_NAME_RE.match(file_name)
    return m.group(1) if m else None


def links_by_line(links: Iterable[CrossReference]) -> dict[int, list[LinkMeta]]:
    """Group cross-references by the line they start on."""
    grouped: dict[int, list[LinkMeta]] = defaultdict(list)
    for link in links:
        grouped[link.start_line].append(LinkMeta(file_path=link.target, link_name=link.display_label))
    return grouped


def form_todo(
    line: str,
    document: DocumentInfo,
    tag_meta: Optional[TagMeta],
    line_links: Iterable[LinkMeta],
    line_num: int,
) -> TodoItem:
    """Build a TodoItem (without children) from a line already known to be a todo."""
    line = checkbox_source(line, tag_meta.main if tag_meta else None)
    text = payload_text(line) or ""
    if tag_meta is not None:
        text = remove_tag_from_text(text, tag_meta.main)
    return TodoItem(
        main_tag=tag_meta.main if tag_meta else None,
        sub_tag=tag_meta.sub if tag_meta else None,
        checked=is_checked(line),
        display=parse_display(text, line_links),
        file_path=document.path,
        file_name=document.name,
        file_label=get_file_label(document.name),
        file_created_ts=document.created_ts,
        line=line_num,
        spaces_indented=indent_width(line),
    )


def get_todo_from_line(
    line: str,
    document: DocumentInfo,
    tag_meta: Optional[TagMeta],
    line_links: Iterable[LinkMeta],
    line_num: int,
) -> Optional[TodoItem]:
    """Return a TodoItem for ``line``, or None if it is not a todo."""
    if not is_valid_todo_line(line, tag_meta.main if tag_meta else None):
        return None
    return form_todo(line, document, tag_meta, line_links, line_num)


@dataclass
class _Node:
    item: TodoItem
    children: list[_Node] = field(default_factory=list)

    def freeze(self) -> TodoItem:
        return self.item.model_copy(update={"children": [c.freeze() for c in self.children]})


class TodoNester:
    """Assemble parent/child trees from todos fed in line order.

    An item indented deeper than the top of the open stack becomes its child. An
    item indented the same or less closes scopes until a shallower ancestor is
    found, and becomes a root if none is left.
    """

    def __init__(self) -> None:
        self._roots: list[_Node] = []
        self._stack: list[tuple[int, _Node]] = []

    def add(self, item: TodoItem) -> None:
        node = _Node(item)
        while self._stack and self._stack[-1][0] >= item.spaces_indented:
            self._stack.pop()
        if self._stack:
            self._stack[-1][1].children.append(node)
        else:
            self._roots.append(node)
        self._stack.append((item.spaces_indented, node))

    def close_all(self) -> None:
        """Close every open scope; the next item starts a new root."""
        self._stack.clear()

    def build(self) -> list[TodoItem]:
        return [node.freeze() for node in self._roots]


def nest_todos(items: Iterable[TodoItem]) -> list[TodoItem]:
    """Nest a contiguous run of todos by indentation."""
    nester = TodoNester()
    for item in items:
        nester.add(item)
    return nester.build()
