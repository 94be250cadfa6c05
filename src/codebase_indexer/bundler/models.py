"""Typed models for assembled context packages."""

from __future__ import annotations

from dataclasses import dataclass

from codebase_indexer.index.models import SearchResult, SymbolEntry


@dataclass(slots=True, frozen=True)
class ContextPackage:
    """Budget-bounded context bundle rendered for a downstream consumer."""

    query: str
    results: tuple[SearchResult, ...]
    symbol_map: dict[str, SymbolEntry]
    file_graph: dict[str, tuple[str, ...]]
    total_tokens: int
    text: str
