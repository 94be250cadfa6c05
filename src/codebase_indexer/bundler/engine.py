"""Greedy, budget-bounded context assembly."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Protocol

from codebase_indexer.bundler.models import ContextPackage
from codebase_indexer.index.models import SearchResult, SymbolEntry
from codebase_indexer.index.symbols import lookup_symbols

CHARS_PER_TOKEN = 4
DEFAULT_CANDIDATE_POOL = 15


class SearchFn(Protocol):
    """Search callback signature used by the assembler."""

    def __call__(self, query: str, max_results: int) -> list[SearchResult]:
        """Return ranked hits."""


def estimate_tokens(text: str) -> int:
    """Approximate token cost of text at four characters per token."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def assemble_context(
    query: str,
    token_budget: int,
    search_fn: SearchFn,
    symbol_table: Mapping[str, SymbolEntry],
    file_graph: Mapping[str, tuple[str, ...]],
    *,
    candidate_pool: int = DEFAULT_CANDIDATE_POOL,
) -> ContextPackage:
    """Select ranked chunks that fit the budget and render them as one text block.

    Candidates are walked in rank order; one that does not fit the remaining
    budget is skipped and the walk continues with smaller candidates.
    """
    selected: list[SearchResult] = []
    total_tokens = 0
    if token_budget > 0:
        for result in search_fn(query=query, max_results=candidate_pool):
            cost = estimate_tokens(result.chunk.content)
            if total_tokens + cost > token_budget:
                continue
            selected.append(result)
            total_tokens += cost

    symbol_map = lookup_symbols(
        symbol_table,
        (f"{result.chunk.path}:{result.chunk.name}" for result in selected),
    )
    return ContextPackage(
        query=query,
        results=tuple(selected),
        symbol_map=symbol_map,
        file_graph=dict(file_graph),
        total_tokens=total_tokens,
        text=render_context(query, selected),
    )


def render_context(query: str, results: list[SearchResult]) -> str:
    """Render the header and one commented section per selected chunk."""
    lines = [
        f'// Query: "{query}"',
        f"// {len(results)} relevant code sections found",
        "",
    ]
    for result in results:
        chunk = result.chunk
        lines.append(
            f"// --- {chunk.path} ({chunk.kind}: {chunk.name}) [score: {result.score:.2f}] ---"
        )
        lines.append(chunk.content)
        lines.append("")
    return "\n".join(lines)
