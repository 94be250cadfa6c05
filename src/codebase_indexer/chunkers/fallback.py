"""Fallback chunker for files without a dedicated strategy."""

from __future__ import annotations

from codebase_indexer.chunkers.base import whole_file_chunk
from codebase_indexer.index.models import Chunk


class WholeFileChunker:
    """Default chunker that treats any file as one unknown chunk."""

    name = "whole_file"

    def supports_path(self, path: str) -> bool:
        """Fallback supports any path."""
        _ = path
        return True

    def chunk(self, path: str, content: str) -> list[Chunk]:
        """Return the whole file as one unknown chunk."""
        if not content.strip():
            return []
        return [whole_file_chunk(path, "unknown", content)]
