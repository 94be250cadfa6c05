"""Per-category chunking strategies."""

from .base import (
    ChunkContractError,
    Chunker,
    build_chunk_id,
    file_basename,
    file_extension,
    make_chunk,
    validate_chunks,
    whole_file_chunk,
)
from .fallback import WholeFileChunker
from .lexical import find_block_end, strip_literals_and_comments
from .query import QueryChunker
from .registry import ChunkerRegistry
from .script import ScriptChunker, classify_function_name
from .structured import StructuredDataChunker
from .stylesheet import StylesheetChunker

__all__ = [
    "ChunkContractError",
    "Chunker",
    "ChunkerRegistry",
    "QueryChunker",
    "ScriptChunker",
    "StructuredDataChunker",
    "StylesheetChunker",
    "WholeFileChunker",
    "build_chunk_id",
    "classify_function_name",
    "file_basename",
    "file_extension",
    "find_block_end",
    "make_chunk",
    "strip_literals_and_comments",
    "validate_chunks",
    "whole_file_chunk",
]
