"""Document store interface and the markdown vault implementation.

The vault store lists ``*.md`` files under a root directory and builds a small
metadata index per document: inline tags and ``[[wikilinks]]``, each with the
zero-based line it starts on. Tags and links inside code fences or inline code
are ignored.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .models import CrossReference, DocumentInfo, DocumentMetadata, TagOccurrence

logger = logging.getLogger(__name__)

_CODE_FENCE = "```"
_INLINE_TAG_RE = re.compile(r"(^|[\s\(\[\{<\"':;.,!?])#([A-Za-z0-9_/-]+)")


class DocumentStore(ABC):
    """Access to documents, their content and their metadata index."""

    @abstractmethod
    def list_documents(self) -> list[DocumentInfo]:
        """All documents, in a stable order."""

    @abstractmethod
    def read(self, document: DocumentInfo) -> Optional[str]:
        """Full text of ``document``, or None if it has no content."""

    @abstractmethod
    def metadata(self, document: DocumentInfo) -> Optional[DocumentMetadata]:
        """Tag and link index of ``document``."""

    @abstractmethod
    def write(self, document: DocumentInfo, text: str) -> None:
        """Replace the full text of ``document``."""

    def find(self, path: str) -> Optional[DocumentInfo]:
        """Document whose path equals ``path``."""
        for document in self.list_documents():
            if document.path == path:
                return document
        return None


def _outside_inline_code_segments(line: str) -> list[tuple[int, int]]:
    segments: list[tuple[int, int]] = []
    in_code = False
    seg_start = 0
    for idx, ch in enumerate(line):
        if ch != "`":
            continue
        if in_code:
            seg_start = idx + 1
            in_code = False
        else:
            if seg_start < idx:
                segments.append((seg_start, idx))
            in_code = True
    if not in_code and seg_start < len(line):
        segments.append((seg_start, len(line)))
    return segments


def _parse_wikilinks(segment: str, line_no: int) -> list[CrossReference]:
    links: list[CrossReference] = []
    idx = 0
    while True:
        open_i = segment.find("[[", idx)
        if open_i == -1:
            break
        close_i = segment.find("]]", open_i + 2)
        if close_i == -1:
            break
        idx = close_i + 2

        inner = segment[open_i + 2 : close_i].strip()
        left, _, alias = inner.partition("|")
        target = left.split("#", 1)[0].strip()
        if not target:
            continue
        alias = alias.strip()
        links.append(
            CrossReference(
                target=target,
                display_label=alias or target,
                start_line=line_no,
            )
        )
    return links


def index_document(text: str) -> DocumentMetadata:
    """Index the inline tags and wikilinks of a markdown document."""
    tags: list[TagOccurrence] = []
    links: list[CrossReference] = []
    in_fence = False

    for line_no, line in enumerate(re.split(r"\r?\n", text)):
        if line.lstrip(" \t").startswith(_CODE_FENCE):
            in_fence = not in_fence
            continue
        if in_fence:
            continue

        for seg_start, seg_end in _outside_inline_code_segments(line):
            segment = line[seg_start:seg_end]
            links.extend(_parse_wikilinks(segment, line_no))
            for match in _INLINE_TAG_RE.finditer(segment):
                name = match.group(2).rstrip("/")
                if name:
                    tags.append(TagOccurrence(tag=f"#{name}", start_line=line_no))

    return DocumentMetadata(tags=tags, links=links)


def _is_excluded(rel_posix: str, exclude_globs: list[str]) -> bool:
    for pat in exclude_globs:
        if fnmatch.fnmatchcase(rel_posix, pat):
            return True
    return False


class VaultStore(DocumentStore):
    """DocumentStore over a directory of markdown files."""

    def __init__(self, vault_root: Path, exclude_globs: Optional[list[str]] = None):
        """Initialize the store.

        Args:
            vault_root: Root directory of the vault
            exclude_globs: fnmatch patterns (relative posix paths) to skip
        """
        self.root = vault_root
        self.exclude_globs = exclude_globs or []

    def _abs_path(self, document: DocumentInfo) -> Path:
        return self.root / document.path

    def list_documents(self) -> list[DocumentInfo]:
        documents: list[DocumentInfo] = []
        for p in self.root.rglob("*.md"):
            rel_posix = p.relative_to(self.root).as_posix()
            if _is_excluded(rel_posix, self.exclude_globs):
                logger.debug(f"Skipping excluded document: {rel_posix}")
                continue
            st = p.stat()
            created = getattr(st, "st_birthtime", None) or st.st_ctime
            documents.append(DocumentInfo(path=rel_posix, name=p.name, created_ts=float(created)))
        documents.sort(key=lambda d: d.path)
        return documents

    def read(self, document: DocumentInfo) -> Optional[str]:
        path = self._abs_path(document)
        if not path.exists():
            logger.warning(f"Document disappeared before it could be read: {document.path}")
            return None
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    def metadata(self, document: DocumentInfo) -> Optional[DocumentMetadata]:
        text = self.read(document)
        if text is None:
            return None
        return index_document(text)

    def write(self, document: DocumentInfo, text: str) -> None:
        # newline="" on both ends keeps \r\n line endings untouched
        with open(self._abs_path(document), "w", encoding="utf-8", newline="") as f:
            f.write(text)
