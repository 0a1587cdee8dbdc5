"""Tests for the inline tokenizer and chunk decoration."""

import re

import pytest

from tagtodos.models import BoldChunk, LinkChunk, LinkMeta, TextChunk, TokenChunk
from tagtodos.tokenizer import (
    decorate_chunks,
    find_all_matches,
    map_link_meta,
    parse_display,
    tokenize,
)


def _shape(chunks):
    return [(c.type, c.raw_text) for c in chunks]


def test_layers_interleave_left_to_right():
    chunks = tokenize("**a** and *b* and [[c]]")
    assert _shape(chunks) == [
        ("bold", "a"),
        ("text", " and "),
        ("italic", "b"),
        ("text", " and "),
        ("link", "c"),
    ]


def test_token_children_hold_inner_text():
    chunks = tokenize("**bold text**")
    assert len(chunks) == 1
    assert chunks[0].children == [TokenChunk(type="text", raw_text="bold text")]


def test_unmatched_delimiter_stays_plain():
    assert _shape(tokenize("*a")) == [("text", "*a")]
    assert _shape(tokenize("[[open")) == [("text", "[[open")]


def test_plain_text_is_single_chunk():
    assert _shape(tokenize("just words")) == [("text", "just words")]


def test_empty_text_has_no_chunks():
    assert tokenize("") == []


def test_link_nested_inside_bold():
    chunks = tokenize("**see [[Plan]]**")
    assert _shape(chunks) == [("bold", "see [[Plan]]")]
    assert _shape(chunks[0].children) == [("text", "see "), ("link", "Plan")]


def test_multiple_tokens_of_same_layer():
    chunks = tokenize("[[a]], [[b]]")
    assert _shape(chunks) == [("link", "a"), ("text", ", "), ("link", "b")]


def test_find_all_matches_collects_group():
    pattern = re.compile(r"\[\[([^\]]+)\]\]")
    assert find_all_matches(pattern, "[[a]] x [[b]]", 1) == ["a", "b"]
    assert find_all_matches(pattern, "[[a]] x [[b]]") == ["[[a]]", "[[b]]"]


def test_find_all_matches_rejects_missing_group():
    with pytest.raises(ValueError):
        find_all_matches(re.compile(r"\*\*[^*]+\*\*"), "**a**", 1)


def test_decorate_resolves_links_from_map():
    links = map_link_meta([LinkMeta(file_path="Plan", link_name="The Plan")])
    display = decorate_chunks(tokenize("read [[Plan]]"), links)
    assert display[0] == TextChunk(value="read ")
    link = display[1]
    assert isinstance(link, LinkChunk)
    assert link.file_path == "Plan"
    assert link.label == "The Plan"
    assert link.children == [TextChunk(value="Plan")]


def test_decorate_unresolved_link_is_not_an_error():
    display = decorate_chunks(tokenize("[[Missing]]"), {})
    assert len(display) == 1
    assert display[0].type == "link"
    assert display[0].file_path is None
    assert display[0].label is None


def test_decorate_keeps_bold_and_italic_shape():
    display = parse_display("**x** *y*")
    assert isinstance(display[0], BoldChunk)
    assert display[0].children == [TextChunk(value="x")]
    assert display[2].type == "italic"


def test_link_map_last_write_wins():
    link_map = map_link_meta(
        [
            LinkMeta(file_path="Plan", link_name="first"),
            LinkMeta(file_path="Plan", link_name="second"),
        ]
    )
    assert link_map["Plan"].link_name == "second"


def test_display_tree_serializes_with_type_tags():
    display = parse_display("**a [[b]]**", [LinkMeta(file_path="b", link_name="B")])
    dumped = [c.model_dump() for c in display]
    assert dumped == [
        {
            "type": "bold",
            "children": [
                {"type": "text", "value": "a "},
                {
                    "type": "link",
                    "children": [{"type": "text", "value": "b"}],
                    "file_path": "b",
                    "label": "B",
                },
            ],
        }
    ]


def test_normalize_link_text():
    from tagtodos.tokenizer import normalize_link_text

    assert normalize_link_text("Plan") == "Plan"
    assert normalize_link_text("Plan|the plan") == "Plan"
    assert normalize_link_text("Plan#Goals|g") == "Plan"
