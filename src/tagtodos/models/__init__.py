"""Pydantic models for tagtodos."""

from .todo import (
    BoldChunk,
    ChunkType,
    DisplayChunk,
    GroupBy,
    ItalicChunk,
    LinkChunk,
    LinkMeta,
    SortDirection,
    TagMeta,
    TextChunk,
    TodoGroup,
    TodoItem,
    TokenChunk,
)
from .vault import CrossReference, DocumentInfo, DocumentMetadata, TagOccurrence

__all__ = [
    # Todos
    "SortDirection",
    "GroupBy",
    "TagMeta",
    "LinkMeta",
    "ChunkType",
    "TokenChunk",
    "TextChunk",
    "BoldChunk",
    "ItalicChunk",
    "LinkChunk",
    "DisplayChunk",
    "TodoItem",
    "TodoGroup",
    # Vault
    "DocumentInfo",
    "TagOccurrence",
    "CrossReference",
    "DocumentMetadata",
]
