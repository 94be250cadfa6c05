from __future__ import annotations

from codebase_indexer.index.manager import CodebaseIndexer
from codebase_indexer.index.models import ProjectFile, Reference

USE_COUNTER = "\n".join(
    [
        "import { useState } from 'react';",
        "",
        "export function useCounter(initial: number) {",
        "  const [count, setCount] = useState(initial);",
        "  return { count, increment: () => setCount(count + 1) };",
        "}",
        "",
    ]
)
COUNTER_VIEW = "\n".join(
    [
        "import { useCounter } from './useCounter';",
        "",
        "export function CounterView() {",
        "  const { count } = useCounter(0);",
        '  return <span className="count">{count}</span>;',
        "}",
        "",
    ]
)
SAVE = "export function save(data: string) {\n  console.log(data);\n  return data.trim();\n}\n"


def _project() -> list[ProjectFile]:
    return [
        ProjectFile("src", "", kind="folder"),
        ProjectFile("src/useCounter.ts", USE_COUNTER),
        ProjectFile("src/CounterView.tsx", COUNTER_VIEW),
        ProjectFile("src/theme.css", ":root {\n  --bg: white;\n}\n"),
        ProjectFile("db/schema.sql", "CREATE TABLE counters (\n  id int\n);\n"),
        ProjectFile("package.json", '{\n  "name": "demo"\n}\n'),
    ]


def test_initial_index_summary_counts() -> None:
    indexer = CodebaseIndexer()
    summary = indexer.index_project(_project())

    assert summary.skipped is False
    assert summary.added_files == 5
    assert summary.changed_files == 5
    assert summary.removed_files == 0
    assert summary.total_chunks == 7
    assert summary.total_symbols == 5
    assert summary.index_version == 1
    assert summary.duration_ms >= 0

    stats = indexer.get_index_stats()
    assert stats.version == 1
    assert stats.total_files == 5
    assert stats.total_chunks == 7
    assert stats.merkle_root == summary.merkle_root


def test_hook_file_is_single_hook_chunk() -> None:
    indexer = CodebaseIndexer()
    indexer.index_project(_project())

    chunks = indexer.get_chunks_by_file("src/useCounter.ts")
    hooks = [chunk for chunk in chunks if chunk.kind == "hook"]
    assert [(chunk.name, chunk.start_line, chunk.end_line) for chunk in hooks] == [
        ("useCounter", 2, 5)
    ]
    assert all(len(chunk.vector) > 0 for chunk in chunks)


def test_import_appears_in_dependency_graph_and_symbol_references() -> None:
    indexer = CodebaseIndexer()
    indexer.index_project(_project())

    graph = indexer.get_file_graph()
    assert graph["src/CounterView.tsx"] == ("./useCounter",)
    assert graph["src/useCounter.ts"] == ("react",)
    assert graph["db/schema.sql"] == ()

    symbol = indexer.get_symbol_table()["src/useCounter.ts:useCounter"]
    assert symbol.kind == "function"
    assert symbol.exported is True
    assert symbol.references == ("src/CounterView.tsx",)


def test_console_log_is_one_warning_and_auto_fix_comments_it_out() -> None:
    indexer = CodebaseIndexer()
    indexer.index_project([*_project(), ProjectFile("src/save.ts", SAVE)])

    issues = [issue for issue in indexer.detect_issues() if issue.path == "src/save.ts"]
    assert [(issue.severity, issue.line) for issue in issues] == [("warning", 1)]

    result = indexer.auto_fix("src/save.ts", SAVE)
    assert result.fix_count == 1
    assert result.fixed.split("\n")[1] == "  // console.log(data);"


def test_exact_name_search_ranks_declaration_first() -> None:
    indexer = CodebaseIndexer()
    indexer.index_project(_project())

    results = indexer.search("useCounter")
    assert results[0].chunk.name == "useCounter"
    assert results[0].chunk.kind == "hook"
    assert results[0].match_type == "exact"
    assert results == sorted(results, key=lambda result: -result.score)


def test_noop_reindex_keeps_version_and_snapshot() -> None:
    indexer = CodebaseIndexer()
    first = indexer.index_project(_project())
    before = indexer.snapshot

    second = indexer.index_project(_project())

    assert second.skipped is True
    assert second.changed_files == 0
    assert second.index_version == first.index_version
    assert second.merkle_root == first.merkle_root
    assert indexer.snapshot is before


def test_find_references_reports_every_matching_line() -> None:
    indexer = CodebaseIndexer()
    indexer.index_project(_project())

    assert indexer.find_references("useCounter") == [
        Reference("src/useCounter.ts", 2, "export function useCounter(initial: number) {"),
        Reference("src/CounterView.tsx", 0, "import { useCounter } from './useCounter';"),
        Reference("src/CounterView.tsx", 3, "const { count } = useCounter(0);"),
    ]
    assert indexer.find_references("") == []


def test_codebase_overview() -> None:
    indexer = CodebaseIndexer()
    indexer.index_project(_project())

    overview = indexer.get_codebase_overview()
    assert overview.total_files == 5
    assert overview.total_chunks == 7
    assert overview.total_symbols == 5
    assert overview.component_count == 1
    assert overview.hook_count == 1
    assert overview.function_count == 0
    assert overview.average_complexity >= 1.0
    assert overview.file_types == {"ts": 1, "tsx": 1, "css": 1, "sql": 1, "json": 1}
    assert [(size.path, size.lines) for size in overview.largest_files[:3]] == [
        ("src/useCounter.ts", 5),
        ("src/CounterView.tsx", 5),
        ("package.json", 4),
    ]


def test_assemble_context_respects_budget() -> None:
    indexer = CodebaseIndexer()
    indexer.index_project(_project())

    package = indexer.assemble_context("counter hook")
    assert package.results
    assert package.total_tokens <= 8000
    assert package.text.startswith('// Query: "counter hook"\n')
    assert "src/useCounter.ts:useCounter" in package.symbol_map

    empty = indexer.assemble_context("counter hook", token_budget=0)
    assert empty.results == ()
    assert empty.total_tokens == 0


def test_queries_before_first_index_are_empty() -> None:
    indexer = CodebaseIndexer()

    assert indexer.search("anything") == []
    assert indexer.detect_issues() == []
    assert indexer.get_index_stats().version == 0
    assert indexer.get_codebase_overview().average_complexity == 0.0
