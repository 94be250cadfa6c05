from __future__ import annotations

from codebase_indexer.bundler.engine import assemble_context, estimate_tokens
from codebase_indexer.chunkers.base import make_chunk
from codebase_indexer.index.models import SearchResult, SymbolEntry


def _result(path: str, name: str, content: str, score: float) -> SearchResult:
    return SearchResult(
        chunk=make_chunk(path, "function", name, content, 0, 0),
        score=score,
        match_type="semantic",
    )


def _search_fn(results: list[SearchResult], calls: list[int] | None = None):
    def search(query: str, max_results: int) -> list[SearchResult]:
        if calls is not None:
            calls.append(max_results)
        return results[:max_results]

    return search


def test_estimate_tokens_rounds_up_at_four_chars() -> None:
    assert estimate_tokens("") == 0
    assert estimate_tokens("abcd") == 1
    assert estimate_tokens("abcde") == 2


def test_oversized_candidates_are_skipped_and_smaller_ones_still_fit() -> None:
    results = [
        _result("a.ts", "first", "x" * 40, 0.9),
        _result("b.ts", "huge", "y" * 400, 0.8),
        _result("c.ts", "small", "z" * 20, 0.7),
    ]
    package = assemble_context("q", 20, _search_fn(results), {}, {})

    assert [result.chunk.name for result in package.results] == ["first", "small"]
    assert package.total_tokens == 15
    assert package.total_tokens <= 20


def test_non_positive_budget_selects_nothing() -> None:
    results = [_result("a.ts", "first", "x", 0.9)]
    package = assemble_context("anything", 0, _search_fn(results), {}, {})

    assert package.results == ()
    assert package.total_tokens == 0
    assert package.text == '// Query: "anything"\n// 0 relevant code sections found\n'


def test_rendered_text_and_symbol_map() -> None:
    results = [_result("src/a.ts", "run", "run()", 0.876)]
    symbol = SymbolEntry(name="run", kind="function", path="src/a.ts", line=0, exported=True)
    table = {"src/a.ts:run": symbol, "src/b.ts:other": symbol}
    graph = {"src/a.ts": ("./b",)}
    calls: list[int] = []

    package = assemble_context(
        "run", 100, _search_fn(results, calls), table, graph, candidate_pool=7
    )

    assert calls == [7]
    assert package.symbol_map == {"src/a.ts:run": symbol}
    assert package.file_graph == graph
    assert package.text == (
        '// Query: "run"\n'
        "// 1 relevant code sections found\n"
        "\n"
        "// --- src/a.ts (function: run) [score: 0.88] ---\n"
        "run()\n"
    )
