from __future__ import annotations

from dataclasses import replace

from codebase_indexer.chunkers.base import make_chunk
from codebase_indexer.index.models import Chunk
from codebase_indexer.index.search import EXACT_NAME_WEIGHT, NOISE_FLOOR, rank_chunks
from codebase_indexer.index.vectors import TermWeightIndex


def _bind(chunks: list[Chunk]) -> tuple[list[Chunk], TermWeightIndex]:
    index = TermWeightIndex()
    index.build(chunks)
    return [replace(chunk, vector=index.compute_tfidf(chunk.tokens)) for chunk in chunks], index


def _corpus() -> tuple[list[Chunk], TermWeightIndex]:
    return _bind(
        [
            make_chunk(
                "src/useCounter.ts",
                "hook",
                "useCounter",
                "export function useCounter() { return increment(counter); }",
                0,
                0,
            ),
            make_chunk("src/Panel.tsx", "component", "Panel", "render panel layout", 0, 0),
            make_chunk("db/001.sql", "query", "accounts", "CREATE TABLE accounts (id int)", 0, 0),
        ]
    )


def test_blank_query_and_non_positive_limit_return_nothing() -> None:
    chunks, index = _corpus()
    assert rank_chunks(chunks, index, "   ", 10) == []
    assert rank_chunks(chunks, index, "panel", 0) == []


def test_exact_name_match_ranks_first() -> None:
    chunks, index = _corpus()
    results = rank_chunks(chunks, index, "useCounter", 10)

    assert results[0].chunk.name == "useCounter"
    assert results[0].match_type == "exact"
    assert results[0].score >= EXACT_NAME_WEIGHT


def test_structural_bonus_sets_match_type() -> None:
    chunks, index = _corpus()

    hook_results = rank_chunks(chunks, index, "which hooks exist", 10)
    assert [(result.chunk.name, result.match_type) for result in hook_results] == [
        ("useCounter", "structural")
    ]

    schema_results = rank_chunks(chunks, index, "database tables", 10)
    assert schema_results[0].chunk.name == "accounts"
    assert schema_results[0].match_type == "structural"


def test_unrelated_query_falls_below_noise_floor() -> None:
    chunks, index = _corpus()
    results = rank_chunks(chunks, index, "zzqqxx", 10)
    assert results == []
    assert NOISE_FLOOR == 0.05


def test_ties_keep_input_order_and_results_are_truncated() -> None:
    alpha = make_chunk("a.tsx", "component", "Alpha", "render shared panel", 0, 0)
    beta = make_chunk("b.tsx", "component", "Beta", "render shared panel", 0, 0)

    chunks, index = _bind([alpha, beta])
    assert [result.chunk.name for result in rank_chunks(chunks, index, "shared", 10)] == [
        "Alpha",
        "Beta",
    ]
    reversed_chunks, reversed_index = _bind([beta, alpha])
    assert [
        result.chunk.name for result in rank_chunks(reversed_chunks, reversed_index, "shared", 10)
    ] == ["Beta", "Alpha"]
    assert len(rank_chunks(chunks, index, "shared", 1)) == 1


def test_ranking_is_deterministic() -> None:
    chunks, index = _corpus()
    first = rank_chunks(chunks, index, "counter panel accounts", 10)
    second = rank_chunks(chunks, index, "counter panel accounts", 10)
    assert first == second
