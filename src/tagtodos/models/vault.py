"""Pydantic models describing documents and their metadata index."""

from pydantic import BaseModel, Field


class DocumentInfo(BaseModel):
    """A markdown document in the vault."""

    path: str = Field(description="Path relative to the vault root (posix separators)")
    name: str = Field(description="File name including extension")
    created_ts: float = Field(description="Creation time (epoch seconds)")

    model_config = {"frozen": True}


class TagOccurrence(BaseModel):
    """An inline tag found in a document, e.g. ``#todo/work``."""

    tag: str = Field(description="Tag text including the leading '#'")
    start_line: int = Field(description="Zero-based line the tag appears on", ge=0)

    model_config = {"frozen": True}


class CrossReference(BaseModel):
    """A ``[[target|label]]`` link found in a document."""

    target: str = Field(description="Link target text as written")
    display_label: str | None = Field(default=None, description="Alias or target")
    start_line: int = Field(description="Zero-based line the link appears on", ge=0)

    model_config = {"frozen": True}


class DocumentMetadata(BaseModel):
    """Tag and link index of one document. ``None`` lists mean nothing was indexed."""

    tags: list[TagOccurrence] | None = None
    links: list[CrossReference] | None = None

    model_config = {"frozen": True}
