"""Tests for tag parsing."""

import pytest

from tagtodos.models import DocumentMetadata, TagOccurrence
from tagtodos.tags import MalformedTagError, get_tag_meta, matching_tags


def test_main_tag_only():
    meta = get_tag_meta("#todo")
    assert meta.main == "todo"
    assert meta.sub is None


def test_main_and_sub_tag():
    meta = get_tag_meta("#todo/work")
    assert meta.main == "todo"
    assert meta.sub == "work"


def test_sub_keeps_everything_after_first_slash():
    meta = get_tag_meta("#todo/work/urgent")
    assert meta.main == "todo"
    assert meta.sub == "work/urgent"


def test_trailing_slash_has_no_sub():
    assert get_tag_meta("#todo/").sub is None


@pytest.mark.parametrize("bad", ["todo", "", "#", "#/work"])
def test_malformed_tags_raise(bad):
    with pytest.raises(MalformedTagError):
        get_tag_meta(bad)


def test_malformed_tag_is_value_error():
    with pytest.raises(ValueError):
        get_tag_meta("todo")


def test_matching_tags_filters_on_main_category():
    metadata = DocumentMetadata(
        tags=[
            TagOccurrence(tag="#todo", start_line=0),
            TagOccurrence(tag="#todo/work", start_line=4),
            TagOccurrence(tag="#todos", start_line=6),
            TagOccurrence(tag="#idea", start_line=8),
        ]
    )
    assert [t.start_line for t in matching_tags(metadata, "todo")] == [0, 4]


def test_matching_tags_without_metadata():
    assert matching_tags(None, "todo") == []
    assert matching_tags(DocumentMetadata(tags=None), "todo") == []
