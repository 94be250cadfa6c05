"""Heuristic chunker for stylesheets."""

from __future__ import annotations

import re

from codebase_indexer.chunkers.base import slice_chunk, whole_file_chunk
from codebase_indexer.chunkers.lexical import find_block_end
from codebase_indexer.index.models import Chunk

DEFAULT_STYLESHEET_EXTENSIONS = (".css", ".scss", ".sass", ".less")

_RULESET_MARKERS = ("@layer", ":root", ".dark", "@media")
_NAME_SPLIT_RE = re.compile(r"[\s{]")


class StylesheetChunker:
    """One chunk per layer, root, dark-mode or media-query ruleset."""

    name = "stylesheet"

    def __init__(self, extensions: tuple[str, ...] = DEFAULT_STYLESHEET_EXTENSIONS) -> None:
        self._extensions = tuple(extension.lower() for extension in extensions)

    def supports_path(self, path: str) -> bool:
        """Return True for configured stylesheet extensions."""
        return path.lower().endswith(self._extensions)

    def chunk(self, path: str, content: str) -> list[Chunk]:
        """Chunk marker rulesets, else return the whole file as one style chunk."""
        if not content.strip():
            return []
        lines = content.split("\n")
        chunks: list[Chunk] = []
        index = 0
        while index < len(lines):
            trimmed = lines[index].strip()
            if not trimmed.startswith(_RULESET_MARKERS):
                index += 1
                continue
            name = _NAME_SPLIT_RE.split(trimmed, maxsplit=1)[0]
            if "base" in trimmed:
                name = f"{name} base"
            end = find_block_end(lines, index)
            chunks.append(slice_chunk(path, "style", name, lines, index, end))
            index = end + 1

        if not chunks:
            return [whole_file_chunk(path, "style", content)]
        return chunks
