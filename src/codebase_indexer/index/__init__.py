"""Indexing and search package."""

from .delta import detect_index_delta, snapshot_hashes
from .hashing import EMPTY_ROOT, hash_content, merkle_root
from .models import (
    Chunk,
    ChunkMetadata,
    CodebaseOverview,
    FileIndex,
    FileSize,
    IndexDelta,
    IndexStats,
    IndexSummary,
    ProjectFile,
    Reference,
    SearchResult,
    SymbolEntry,
)
from .search import rank_chunks, tokenize
from .symbols import build_file_graph, build_symbol_table, symbols_for_chunks
from .vectors import TermWeightIndex, cosine_similarity

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "CodebaseOverview",
    "EMPTY_ROOT",
    "FileIndex",
    "FileSize",
    "IndexDelta",
    "IndexStats",
    "IndexSummary",
    "ProjectFile",
    "Reference",
    "SearchResult",
    "SymbolEntry",
    "TermWeightIndex",
    "build_file_graph",
    "build_symbol_table",
    "cosine_similarity",
    "detect_index_delta",
    "hash_content",
    "merkle_root",
    "rank_chunks",
    "snapshot_hashes",
    "symbols_for_chunks",
    "tokenize",
]
