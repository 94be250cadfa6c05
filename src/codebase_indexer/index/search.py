"""Additive ranking over indexed chunks."""

from __future__ import annotations

import re
from collections.abc import Sequence

from codebase_indexer.index.models import Chunk, MatchType, SearchResult
from codebase_indexer.index.vectors import TermWeightIndex, cosine_similarity

EXACT_NAME_WEIGHT = 0.5
VECTOR_WEIGHT = 0.3
OVERLAP_WEIGHT = 0.2
STRUCTURAL_BONUS = 0.1
NOISE_FLOOR = 0.05

_NON_WORD_PATTERN = re.compile(r"[^\w\s]")
_UI_QUERY_RE = re.compile(r"\b(?:ui|pages?|components?)\b")
_HOOK_QUERY_RE = re.compile(r"\bhooks?\b")
_SCHEMA_QUERY_RE = re.compile(r"\b(?:databases?|tables?|schemas?)\b")

STOP_WORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "all", "can", "had", "her",
        "was", "one", "our", "out", "has", "his", "how", "its", "let", "may", "new",
        "now", "old", "see", "way", "who", "did", "get", "him", "with", "this",
        "that", "from", "have", "been", "said", "each", "will", "there", "their",
        "what", "about", "which", "when", "make", "like", "just", "over", "such",
        "take", "than", "them", "very", "after", "would", "these", "other", "into",
        "could", "your", "return", "const", "function", "export", "default",
        "import", "true", "false", "null", "undefined", "string", "number",
        "boolean", "void", "class", "interface", "type",
    }
)  # fmt: skip


def tokenize(text: str) -> list[str]:
    """Tokenize into lowercase search terms without short tokens or stop words."""
    cleaned = _NON_WORD_PATTERN.sub(" ", text).lower()
    return [token for token in cleaned.split() if len(token) > 2 and token not in STOP_WORDS]


def rank_chunks(
    chunks: Sequence[Chunk],
    index: TermWeightIndex,
    query: str,
    max_results: int,
) -> list[SearchResult]:
    """Score every chunk additively and return the best hits above the noise floor.

    Ties keep the original chunk order.
    """
    if max_results < 1 or not query.strip():
        return []
    query_lower = query.lower()
    query_tokens = tokenize(query)
    query_vector = index.compute_tfidf(query_tokens)
    wants_ui = _UI_QUERY_RE.search(query_lower) is not None
    wants_hook = _HOOK_QUERY_RE.search(query_lower) is not None
    wants_schema = _SCHEMA_QUERY_RE.search(query_lower) is not None

    results: list[SearchResult] = []
    for chunk in chunks:
        score = 0.0
        match_type: MatchType = "semantic"

        name_lower = chunk.name.lower()
        if query_lower in name_lower or name_lower in query_lower:
            score += EXACT_NAME_WEIGHT
            match_type = "exact"

        if chunk.vector and query_vector:
            score += cosine_similarity(query_vector, chunk.vector) * VECTOR_WEIGHT

        if query_tokens:
            chunk_tokens = set(chunk.tokens)
            overlap = sum(1 for token in query_tokens if token in chunk_tokens)
            score += (overlap / len(query_tokens)) * OVERLAP_WEIGHT

        if chunk.kind == "component" and wants_ui:
            score += STRUCTURAL_BONUS
            match_type = "structural"
        if chunk.kind == "hook" and wants_hook:
            score += STRUCTURAL_BONUS
            match_type = "structural"
        if chunk.kind == "query" and wants_schema:
            score += STRUCTURAL_BONUS
            match_type = "structural"

        if score > NOISE_FLOOR:
            results.append(SearchResult(chunk=chunk, score=score, match_type=match_type))

    results.sort(key=lambda result: -result.score)
    return results[:max_results]
