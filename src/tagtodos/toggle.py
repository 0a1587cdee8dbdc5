"""Tick and untick checkbox lines in document text."""

import logging
import re
from typing import Optional

from .lines import checkbox_source, is_checked, is_valid_todo_line
from .models import TodoItem
from .vault import DocumentStore

logger = logging.getLogger(__name__)

_CHECKBOX_RE = re.compile(r"^(\s*(?:#[^\s#]\S*\s+)*-\s\[)([^\]]+)(\].*)$")


def set_line_to(line: str, checked: bool) -> str:
    """Rewrite the checkbox of ``line``; lines without one are returned unchanged."""
    mark = "x" if checked else " "
    return _CHECKBOX_RE.sub(lambda m: f"{m.group(1)}{mark}{m.group(3)}", line, count=1)


def set_todo_status_at_line(text: str, line: int, checked: bool) -> Optional[str]:
    """Return ``text`` with the checkbox on ``line`` set to ``checked``.

    Only that line changes; line endings (including ``\\r\\n``) are preserved.
    Returns None if ``line`` is out of range.
    """
    lines = text.split("\n")
    if not 0 <= line < len(lines):
        return None
    lines[line] = set_line_to(lines[line], checked)
    return "\n".join(lines)


def toggle_todo_item(item: TodoItem, store: DocumentStore) -> bool:
    """Flip the checkbox of ``item`` in its document and write it back.

    Returns False (and writes nothing) if the document is gone or empty.
    """
    document = store.find(item.file_path)
    if document is None:
        logger.debug(f"Toggle skipped, document not found: {item.file_path}")
        return False
    content = store.read(document)
    if not content:
        return False
    new_content = set_todo_status_at_line(content, item.line, not item.checked)
    if new_content is None:
        return False
    store.write(document, new_content)
    return True


def toggle_line(store: DocumentStore, path: str, line: int) -> Optional[bool]:
    """Flip the checkbox at ``path``:``line`` based on its current state.

    Returns the new checked state, or None if there is no todo at that line.
    """
    document = store.find(path)
    if document is None:
        return None
    content = store.read(document)
    if not content:
        return None
    lines = content.split("\n")
    if not 0 <= line < len(lines):
        return None
    source = checkbox_source(lines[line].rstrip("\r"))
    if not is_valid_todo_line(source):
        return None
    new_state = not is_checked(source)
    new_content = set_todo_status_at_line(content, line, new_state)
    if new_content is None:
        return None
    store.write(document, new_content)
    return new_state
