from __future__ import annotations

from codebase_indexer.chunkers.query import QueryChunker

MIGRATION = "\n".join(
    [
        "CREATE TABLE IF NOT EXISTS users (",
        "  id int",
        ");",
        "",
        "CREATE UNIQUE INDEX idx_users ON users (id);",
        "CREATE OR REPLACE VIEW active_users AS SELECT * FROM users;",
        "",
    ]
)


def test_statements_are_named_and_line_ranges_accumulate() -> None:
    chunks = QueryChunker().chunk("db/001.sql", MIGRATION)

    assert [(chunk.name, chunk.start_line, chunk.end_line) for chunk in chunks] == [
        ("users", 0, 2),
        ("idx_users", 4, 4),
        ("active_users", 5, 5),
    ]
    assert {chunk.kind for chunk in chunks} == {"query"}
    assert chunks[0].content.startswith("CREATE TABLE")
    assert not chunks[0].content.endswith(";")


def test_unnamed_statements_use_placeholder_with_distinct_ids() -> None:
    chunks = QueryChunker().chunk("db/seed.sql", "SELECT 1;\nSELECT 2;\n")

    assert [chunk.name for chunk in chunks] == ["statement", "statement"]
    assert [chunk.chunk_id for chunk in chunks] == [
        "db/seed.sql:statement:0",
        "db/seed.sql:statement:1",
    ]


def test_blank_statements_are_skipped() -> None:
    assert QueryChunker().chunk("db/empty.sql", ";\n\n;\n") == []
