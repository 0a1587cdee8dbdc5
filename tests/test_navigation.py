"""Tests for link navigation helpers."""

from tagtodos.models import DocumentInfo
from tagtodos.navigation import ensure_md_extension, find_document, open_document

DOCS = [
    DocumentInfo(path="projects/Plan.md", name="Plan.md", created_ts=0.0),
    DocumentInfo(path="Alice.md", name="Alice.md", created_ts=0.0),
]


def test_ensure_md_extension():
    assert ensure_md_extension("Plan") == "Plan.md"
    assert ensure_md_extension("Plan.md") == "Plan.md"


def test_find_document_by_suffix():
    assert find_document("Plan", DOCS).path == "projects/Plan.md"
    assert find_document("projects/Plan.md", DOCS).path == "projects/Plan.md"
    assert find_document("Bob", DOCS) is None


def test_open_document_calls_opener(make_store):
    store = make_store({"projects/Plan.md": ("x", 0.0)})
    opened = []
    doc = open_document("Plan", store, lambda d, new_pane: opened.append((d.path, new_pane)), new_pane=True)
    assert doc.path == "projects/Plan.md"
    assert opened == [("projects/Plan.md", True)]


def test_open_document_without_match(make_store):
    opened = []
    assert open_document("Nope", make_store({}), lambda d, p: opened.append(d)) is None
    assert opened == []
