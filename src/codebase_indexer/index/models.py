"""Typed models for indexing state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ChunkKind = Literal[
    "component",
    "function",
    "hook",
    "class",
    "interface",
    "type",
    "import",
    "constant",
    "export",
    "style",
    "query",
    "config",
    "unknown",
]
SymbolKind = Literal[
    "component",
    "function",
    "class",
    "interface",
    "type",
    "constant",
    "export",
    "style",
    "query",
    "config",
]
MatchType = Literal["exact", "semantic", "structural"]


@dataclass(slots=True, frozen=True)
class ProjectFile:
    """One entry of a caller-supplied project snapshot."""

    path: str
    content: str
    kind: Literal["file", "folder"] = "file"

    @property
    def indexable(self) -> bool:
        """Return True for files with non-empty content."""
        return self.kind == "file" and bool(self.content)


@dataclass(slots=True, frozen=True)
class ChunkMetadata:
    """Presence flags and size/complexity estimates for one chunk."""

    has_markup: bool
    has_hooks: bool
    has_style_attribute: bool
    complexity: int
    line_count: int


@dataclass(slots=True, frozen=True)
class Chunk:
    """Contiguous, named slice of one file's text."""

    chunk_id: str
    path: str
    kind: ChunkKind
    name: str
    content: str
    start_line: int
    end_line: int
    dependencies: tuple[str, ...]
    exports: tuple[str, ...]
    tokens: tuple[str, ...]
    content_hash: str
    metadata: ChunkMetadata
    vector: tuple[float, ...] = ()


@dataclass(slots=True, frozen=True)
class SymbolEntry:
    """Named declaration with its defining location and cross-file references."""

    name: str
    kind: SymbolKind
    path: str
    line: int
    exported: bool
    references: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        """Return the symbol table key."""
        return f"{self.path}:{self.name}"


@dataclass(slots=True, frozen=True)
class FileIndex:
    """Per-file index state."""

    path: str
    content_hash: str
    chunks: tuple[Chunk, ...]
    symbols: tuple[SymbolEntry, ...]
    last_indexed: str


@dataclass(slots=True, frozen=True)
class IndexDelta:
    """Deterministic change classification for one re-index."""

    added: tuple[str, ...]
    updated: tuple[str, ...]
    unchanged: tuple[str, ...]
    removed: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Ranked chunk hit."""

    chunk: Chunk
    score: float
    match_type: MatchType


@dataclass(slots=True, frozen=True)
class IndexSummary:
    """Outcome of one index_project call."""

    total_chunks: int
    total_symbols: int
    changed_files: int
    added_files: int
    updated_files: int
    removed_files: int
    merkle_root: str
    duration_ms: float
    index_version: int
    skipped: bool


@dataclass(slots=True, frozen=True)
class IndexStats:
    """Current index version snapshot."""

    version: int
    merkle_root: str
    total_chunks: int
    total_files: int


@dataclass(slots=True, frozen=True)
class Reference:
    """Textual occurrence of a name inside an indexed chunk."""

    path: str
    line: int
    context: str


@dataclass(slots=True, frozen=True)
class FileSize:
    """Summed chunk line count for one file."""

    path: str
    lines: int


@dataclass(slots=True, frozen=True)
class CodebaseOverview:
    """Aggregate structural statistics."""

    total_files: int
    total_chunks: int
    total_symbols: int
    component_count: int
    hook_count: int
    function_count: int
    average_complexity: float
    file_types: dict[str, int]
    largest_files: tuple[FileSize, ...]
