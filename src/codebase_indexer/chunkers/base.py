"""Core chunker protocol and chunk construction helpers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from codebase_indexer.chunkers.lexical import (
    estimate_complexity,
    extract_dependencies,
    extract_exports,
    has_hook_calls,
    has_markup,
    has_style_attribute,
)
from codebase_indexer.index.hashing import hash_content
from codebase_indexer.index.models import Chunk, ChunkKind, ChunkMetadata
from codebase_indexer.index.search import tokenize


class ChunkContractError(ValueError):
    """Raised when chunker output violates the shared chunk contract."""


class Chunker(Protocol):
    """Protocol implemented by per-category chunking strategies."""

    name: str

    def supports_path(self, path: str) -> bool:
        """Return True when the chunker handles a file path."""

    def chunk(self, path: str, content: str) -> list[Chunk]:
        """Split one file into ordered chunks."""


def build_chunk_id(path: str, name: str, start_line: int) -> str:
    """Build the chunk identifier, unique within one file rebuild."""
    return f"{path}:{name}:{start_line}"


def make_chunk(
    path: str,
    kind: ChunkKind,
    name: str,
    content: str,
    start_line: int,
    end_line: int,
) -> Chunk:
    """Create a chunk with its derived search fields and metadata."""
    return Chunk(
        chunk_id=build_chunk_id(path, name, start_line),
        path=path,
        kind=kind,
        name=name,
        content=content,
        start_line=start_line,
        end_line=end_line,
        dependencies=extract_dependencies(content),
        exports=extract_exports(content),
        tokens=tuple(tokenize(content)),
        content_hash=hash_content(content),
        metadata=ChunkMetadata(
            has_markup=has_markup(content),
            has_hooks=has_hook_calls(content),
            has_style_attribute=has_style_attribute(content),
            complexity=estimate_complexity(content),
            line_count=end_line - start_line + 1,
        ),
    )


def slice_chunk(
    path: str,
    kind: ChunkKind,
    name: str,
    lines: Sequence[str],
    start_line: int,
    end_line: int,
) -> Chunk:
    """Create a chunk from an inclusive line range of a file."""
    return make_chunk(
        path,
        kind,
        name,
        "\n".join(lines[start_line : end_line + 1]),
        start_line,
        end_line,
    )


def whole_file_chunk(path: str, kind: ChunkKind, content: str) -> Chunk:
    """Create one chunk spanning the entire file, named after its basename."""
    last_line = max(0, len(content.split("\n")) - 1)
    return make_chunk(path, kind, file_basename(path), content, 0, last_line)


def file_basename(path: str) -> str:
    """Return the final path segment, or the path itself when it has none."""
    return path.replace("\\", "/").rsplit("/", 1)[-1] or path


def file_extension(path: str) -> str:
    """Return the lowercase suffix including the dot, or an empty string."""
    basename = file_basename(path)
    if "." not in basename:
        return ""
    return "." + basename.rsplit(".", 1)[-1].lower()


def validate_chunks(chunks: Sequence[Chunk], line_count: int) -> None:
    """Validate chunks against the shared invariants."""
    seen: set[str] = set()
    for chunk in chunks:
        if not chunk.name.strip():
            raise ChunkContractError(f"Chunk name must be non-empty in {chunk.path}.")
        if chunk.start_line < 0:
            raise ChunkContractError(f"Chunk {chunk.chunk_id} start_line must be >= 0.")
        if chunk.end_line < chunk.start_line:
            raise ChunkContractError(f"Chunk {chunk.chunk_id} end_line must be >= start_line.")
        if chunk.end_line > max(0, line_count - 1):
            raise ChunkContractError(f"Chunk {chunk.chunk_id} ends past the last line.")
        if chunk.chunk_id in seen:
            raise ChunkContractError(f"Duplicate chunk id {chunk.chunk_id}.")
        seen.add(chunk.chunk_id)
