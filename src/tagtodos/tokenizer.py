"""Inline markup tokenizer and link decoration for todo text.

Todo text is tokenized in three fixed layers: bold (``**x**``), italic (``*x*``)
and link (``[[x]]``). Each layer only splits plain text leaves left by the layers
before it and recurses into the children of markup nodes, so ``**a**`` is never
re-read as italic at the top level while ``**a [[b]]**`` still yields a link
inside the bold node.
"""

import re
from typing import Iterable

from .models import (
    BoldChunk,
    ChunkType,
    DisplayChunk,
    ItalicChunk,
    LinkChunk,
    LinkMeta,
    TextChunk,
    TokenChunk,
)

# (chunk type, split pattern, token pattern with the inner text as group 1)
_LAYERS: tuple[tuple[ChunkType, re.Pattern, re.Pattern], ...] = (
    ("bold", re.compile(r"\*\*[^*]+\*\*"), re.compile(r"\*\*([^*]+)\*\*")),
    ("italic", re.compile(r"\*[^*]+\*"), re.compile(r"\*([^*]+)\*")),
    ("link", re.compile(r"\[\[[^\]]+\]\]"), re.compile(r"\[\[([^\]]+)\]\]")),
)


def find_all_matches(pattern: re.Pattern, text: str, group: int = 0) -> list[str]:
    """Collect ``group`` of every non-overlapping match of ``pattern`` in ``text``.

    Raises:
        ValueError: If ``pattern`` has no capture group with index ``group``
    """
    if group < 0 or group > pattern.groups:
        raise ValueError(
            f"find_all_matches(): pattern {pattern.pattern!r} has no capture group {group}"
        )
    return [m.group(group) for m in pattern.finditer(text)]


def _tokenize_layer(
    chunks: list[TokenChunk],
    chunk_type: ChunkType,
    split_re: re.Pattern,
    token_re: re.Pattern,
) -> list[TokenChunk]:
    result: list[TokenChunk] = []
    for chunk in chunks:
        if chunk.type != "text":
            result.append(
                TokenChunk(
                    type=chunk.type,
                    raw_text=chunk.raw_text,
                    children=_tokenize_layer(chunk.children, chunk_type, split_re, token_re),
                )
            )
            continue

        pieces = split_re.split(chunk.raw_text)
        tokens = find_all_matches(token_re, chunk.raw_text, 1)
        for i, piece in enumerate(pieces):
            if piece:
                result.append(TokenChunk(type="text", raw_text=piece))
            if i < len(tokens):
                token = tokens[i]
                result.append(
                    TokenChunk(
                        type=chunk_type,
                        raw_text=token,
                        children=[TokenChunk(type="text", raw_text=token)],
                    )
                )
    return result


def tokenize(text: str) -> list[TokenChunk]:
    """Turn todo text (tag already removed) into a tree of TokenChunks."""
    chunks = [TokenChunk(type="text", raw_text=text)]
    for chunk_type, split_re, token_re in _LAYERS:
        chunks = _tokenize_layer(chunks, chunk_type, split_re, token_re)
    return chunks


def normalize_link_text(text: str) -> str:
    """Reduce link text to its target: ``Plan#Goals|the plan`` -> ``Plan``."""
    return text.split("|", 1)[0].split("#", 1)[0].strip()


def map_link_meta(links: Iterable[LinkMeta]) -> dict[str, LinkMeta]:
    """Index links by normalized target text. Later duplicates replace earlier ones."""
    link_map: dict[str, LinkMeta] = {}
    for link in links:
        link_map[normalize_link_text(link.file_path)] = link
    return link_map


def decorate_chunks(chunks: list[TokenChunk], link_map: dict[str, LinkMeta]) -> list[DisplayChunk]:
    """Resolve a TokenChunk tree into DisplayChunks.

    Link chunks without an entry in ``link_map`` are kept, with no target or label.
    """
    decorated: list[DisplayChunk] = []
    for chunk in chunks:
        if chunk.type == "text":
            decorated.append(TextChunk(value=chunk.raw_text))
            continue

        children = decorate_chunks(chunk.children, link_map)
        if chunk.type == "link":
            meta = link_map.get(normalize_link_text(chunk.raw_text))
            decorated.append(
                LinkChunk(
                    children=children,
                    file_path=meta.file_path if meta else None,
                    label=meta.link_name if meta else None,
                )
            )
        elif chunk.type == "bold":
            decorated.append(BoldChunk(children=children))
        else:
            decorated.append(ItalicChunk(children=children))
    return decorated


def parse_display(text: str, links: Iterable[LinkMeta] = ()) -> list[DisplayChunk]:
    """Tokenize ``text`` and resolve its links against ``links``."""
    return decorate_chunks(tokenize(text), map_link_meta(links))
