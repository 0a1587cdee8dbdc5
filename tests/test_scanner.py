"""Tests for per-document scanning."""

from tagtodos.models import DocumentInfo, TagOccurrence
from tagtodos.scanner import LoadedDocument, get_todos_from_document
from tagtodos.vault import index_document

DOC = DocumentInfo(path="Plan.md", name="Plan.md", created_ts=1.0)

CONTENT = "\n".join(
    [
        "- [ ] before the tag",
        "## Work #todo/work",
        "- [ ] write report",
        "  - [x] outline",
        "some prose",
        "- [ ] email [[Alice|Al]]",
    ]
)


def _loaded(content, valid_tags=None):
    return LoadedDocument(
        document=DOC,
        content=content,
        metadata=index_document(content),
        valid_tags=valid_tags,
    )


def test_tag_region_runs_to_end_of_document():
    todos = get_todos_from_document(_loaded(CONTENT, [TagOccurrence(tag="#todo/work", start_line=1)]))
    assert [t.line for t in todos] == [2, 5]
    assert all(t.main_tag == "todo" and t.sub_tag == "work" for t in todos)
    assert [c.line for c in todos[0].children] == [3]
    assert todos[0].children[0].checked is True


def test_prose_line_breaks_nesting():
    content = "- [ ] a\ntext\n  - [ ] b"
    todos = get_todos_from_document(_loaded(content))
    assert [t.line for t in todos] == [0, 2]


def test_links_resolved_from_metadata():
    todos = get_todos_from_document(_loaded(CONTENT, [TagOccurrence(tag="#todo", start_line=1)]))
    link = todos[-1].display[1]
    assert link.type == "link"
    assert link.file_path == "Alice"
    assert link.label == "Al"


def test_aliased_and_section_links_resolve_to_their_target():
    content = "- [ ] ping [[Alice]] and [[Bob|B]] about [[Plan#Goals]]"
    todos = get_todos_from_document(_loaded(content))
    display = todos[0].display
    assert (display[1].file_path, display[1].label) == ("Alice", "Alice")
    assert (display[3].file_path, display[3].label) == ("Bob", "B")
    assert (display[5].file_path, display[5].label) == ("Plan", "Plan")
    # children still show the text as written
    assert display[3].children[0].value == "Bob|B"


def test_without_tag_filter_scans_whole_document():
    todos = get_todos_from_document(_loaded(CONTENT))
    assert [t.line for t in todos] == [0, 2, 5]
    assert all(t.main_tag is None for t in todos)


def test_overlapping_tag_regions_repeat_lines():
    content = "#todo\n- [ ] a\n#todo\n- [ ] b"
    tags = [TagOccurrence(tag="#todo", start_line=0), TagOccurrence(tag="#todo", start_line=2)]
    todos = get_todos_from_document(_loaded(content, tags))
    assert [t.line for t in todos] == [1, 3, 3]
