"""Runtime chunker registry construction."""

from __future__ import annotations

from codebase_indexer.chunkers.fallback import WholeFileChunker
from codebase_indexer.chunkers.query import QueryChunker
from codebase_indexer.chunkers.registry import ChunkerRegistry
from codebase_indexer.chunkers.script import ScriptChunker
from codebase_indexer.chunkers.structured import StructuredDataChunker
from codebase_indexer.chunkers.stylesheet import StylesheetChunker
from codebase_indexer.config import IndexerConfig


def build_chunker_registry(config: IndexerConfig) -> ChunkerRegistry:
    """Build chunker registry from effective config."""
    chunking = config.chunking
    registry = ChunkerRegistry()
    registry.register(ScriptChunker(chunking.script_extensions))
    registry.register(StylesheetChunker(chunking.stylesheet_extensions))
    registry.register(QueryChunker(chunking.query_extensions))
    registry.register(StructuredDataChunker(chunking.structured_extensions))
    registry.register(WholeFileChunker(), fallback=True)
    return registry
