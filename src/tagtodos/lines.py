"""Checkbox line classification.

A todo line looks like ``- [ ] text`` or ``- [x] text``, optionally indented and
optionally carrying a tag token (``#todo/work``) anywhere in the text.
"""

import re
from typing import Optional

_VALID_TODO_RE = re.compile(r"^\s*-\s\[(\s|x)\]\s*\S")
_TODO_PARTS_RE = re.compile(r"^(\s*)-\s\[(\s|x)\]\s?(.*)$")
_CHECKED_RE = re.compile(r"^\s*-\s\[x\]")
_LINE_BREAK_RE = re.compile(r"\r?\n")
_LEADING_TAGS_RE = re.compile(r"^(\s*)(?:#[^\s#]\S*\s+)+(?=-\s\[)")


def split_lines(text: str) -> list[str]:
    return _LINE_BREAK_RE.split(text)


def remove_tag_from_text(text: str, tag: str) -> str:
    """Remove every ``#tag...`` token (and one preceding whitespace) from ``text``."""
    return re.sub(rf"\s?#{re.escape(tag)}\S*", "", text).strip()


def is_valid_todo_line(line: str, tag: Optional[str] = None) -> bool:
    """Check whether ``line`` is a checkbox item with some text after the box.

    When ``tag`` is given, tag tokens are removed first so that ``- [ ] #todo``
    on its own does not count as a todo.
    """
    if not line:
        return False
    if tag:
        line = remove_tag_from_text(line, tag)
    return _VALID_TODO_RE.match(line) is not None


def is_checked(line: str) -> bool:
    return _CHECKED_RE.match(line) is not None


def indent_width(line: str) -> int:
    """Number of whitespace characters before the ``- [`` marker (0 for non-todos)."""
    m = _TODO_PARTS_RE.match(line)
    return len(m.group(1)) if m else 0


def payload_text(line: str) -> Optional[str]:
    """Text after ``- [ ]`` / ``- [x]`` and its following space, tags still in place."""
    m = _TODO_PARTS_RE.match(line)
    return m.group(3) if m else None


def checkbox_source(line: str, tag: Optional[str] = None) -> str:
    """``line`` rewritten so that it starts with its checkbox.

    Tags written in front of the box (``#todo - [ ] x``) are dropped and the
    indentation is kept. With ``tag`` given, every token of that tag is removed;
    otherwise only the tags leading the box are.
    """
    if _TODO_PARTS_RE.match(line):
        return line
    if tag is None:
        return _LEADING_TAGS_RE.sub(r"\1", line, count=1)
    indent = line[: len(line) - len(line.lstrip())]
    return indent + remove_tag_from_text(line, tag)
