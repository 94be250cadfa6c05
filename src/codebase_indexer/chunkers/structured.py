"""Whole-file chunker for structured data and configuration files."""

from __future__ import annotations

from codebase_indexer.chunkers.base import whole_file_chunk
from codebase_indexer.index.models import Chunk

DEFAULT_STRUCTURED_EXTENSIONS = (".json", ".jsonc", ".yaml", ".yml", ".toml")


class StructuredDataChunker:
    """Always exactly one config chunk per file."""

    name = "structured"

    def __init__(self, extensions: tuple[str, ...] = DEFAULT_STRUCTURED_EXTENSIONS) -> None:
        self._extensions = tuple(extension.lower() for extension in extensions)

    def supports_path(self, path: str) -> bool:
        """Return True for configured structured-data extensions."""
        return path.lower().endswith(self._extensions)

    def chunk(self, path: str, content: str) -> list[Chunk]:
        """Return the whole file as one config chunk."""
        if not content.strip():
            return []
        return [whole_file_chunk(path, "config", content)]
