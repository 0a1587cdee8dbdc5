"""Tag token parsing."""

import re
from typing import Optional

from .models import DocumentMetadata, TagMeta, TagOccurrence

_TAG_RE = re.compile(r"^#([^/]+)/?(.*)$")


class MalformedTagError(ValueError):
    """Raised when a tag token does not have the ``#main[/sub]`` shape.

    This points at an inconsistent metadata index, so callers should let it abort
    the current run.
    """


def get_tag_meta(tag: str) -> TagMeta:
    """Split a ``#main`` or ``#main/sub`` token into a TagMeta.

    Raises:
        MalformedTagError: If the token does not start with '#' or has no main part
    """
    m = _TAG_RE.match(tag)
    if not m:
        raise MalformedTagError(f"Malformed tag (expected '#main[/sub]'): {tag!r}")
    return TagMeta(main=m.group(1), sub=m.group(2) or None)


def matching_tags(metadata: Optional[DocumentMetadata], main_tag: str) -> list[TagOccurrence]:
    """Tag occurrences in ``metadata`` whose main category equals ``main_tag``."""
    if metadata is None or not metadata.tags:
        return []
    return [t for t in metadata.tags if get_tag_meta(t.tag).main == main_tag]
