"""Pydantic models for todo items and their display trees."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class SortDirection(str, Enum):
    """Ordering of todos by document creation time."""

    NEW_TO_OLD = "new->old"
    OLD_TO_NEW = "old->new"


class GroupBy(str, Enum):
    """Grouping mode for presenting todos."""

    PAGE = "page"
    TAG = "tag"


class TagMeta(BaseModel):
    """A tag split into its main category and optional sub-category.

    ``#todo/work`` becomes ``TagMeta(main="todo", sub="work")``.
    """

    main: str = Field(description="Main category (text between '#' and the first '/')")
    sub: str | None = Field(default=None, description="Sub-category, if any")

    model_config = {"frozen": True}


class LinkMeta(BaseModel):
    """One cross-reference found on a source line."""

    file_path: str = Field(description="Link target as written in the line")
    link_name: str | None = Field(default=None, description="Human readable label")

    model_config = {"frozen": True}


ChunkType = Literal["text", "bold", "italic", "link"]


class TokenChunk(BaseModel):
    """Intermediate tokenizer node, before link resolution.

    Text chunks carry only ``raw_text``. Markup chunks carry the inner text of the
    matched token and the re-tokenized children of that inner text.
    """

    type: ChunkType
    raw_text: str
    children: list["TokenChunk"] = Field(default_factory=list)

    model_config = {"frozen": True}


class TextChunk(BaseModel):
    type: Literal["text"] = "text"
    value: str

    model_config = {"frozen": True}


class BoldChunk(BaseModel):
    type: Literal["bold"] = "bold"
    children: list["DisplayChunk"] = Field(default_factory=list)

    model_config = {"frozen": True}


class ItalicChunk(BaseModel):
    type: Literal["italic"] = "italic"
    children: list["DisplayChunk"] = Field(default_factory=list)

    model_config = {"frozen": True}


class LinkChunk(BaseModel):
    """Resolved link. ``file_path`` and ``label`` are None when unresolved."""

    type: Literal["link"] = "link"
    children: list["DisplayChunk"] = Field(default_factory=list)
    file_path: str | None = Field(default=None, description="Resolved link target")
    label: str | None = Field(default=None, description="Display label of the link")

    model_config = {"frozen": True}


DisplayChunk = Annotated[
    Union[TextChunk, BoldChunk, ItalicChunk, LinkChunk],
    Field(discriminator="type"),
]


class TodoItem(BaseModel):
    """One checkbox line found in a document, with nested child items.

    Identity is ``(file_path, line)``.
    """

    main_tag: str | None = Field(default=None, description="Owning tag main category")
    sub_tag: str | None = Field(default=None, description="Owning tag sub-category")
    checked: bool = Field(description="Whether the checkbox is ticked")
    display: list[DisplayChunk] = Field(default_factory=list, description="Parsed todo text")
    file_path: str = Field(description="Document path relative to the vault")
    file_name: str = Field(description="Document file name")
    file_label: str | None = Field(default=None, description="File name without .md")
    file_created_ts: float = Field(description="Document creation time (epoch seconds)")
    line: int = Field(description="Zero-based line number", ge=0)
    spaces_indented: int = Field(default=0, description="Leading whitespace before '- ['", ge=0)
    children: list["TodoItem"] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def key(self) -> tuple[str, int]:
        return (self.file_path, self.line)


class TodoGroup(BaseModel):
    """A named bucket of todos, keyed by document or by tag."""

    group_id: str = Field(description="Document path or '#main/sub' key")
    group_name: str | None = Field(default=None, description="Display name of the group")
    type: GroupBy = Field(description="Grouping mode that produced this group")
    todos: list[TodoItem] = Field(default_factory=list)


TokenChunk.model_rebuild()
BoldChunk.model_rebuild()
ItalicChunk.model_rebuild()
LinkChunk.model_rebuild()
TodoItem.model_rebuild()
