from __future__ import annotations

import json
from pathlib import Path

from codebase_indexer.config import ConfigOverrides
from codebase_indexer.index.models import ProjectFile
from codebase_indexer.runtime import create_indexer


def test_project_config_drives_indexer_and_audit_log(tmp_path: Path) -> None:
    (tmp_path / "codebase_indexer.toml").write_text(
        "\n".join(
            [
                "[search]",
                "max_results = 2",
                "",
                "[audit]",
                "enabled = true",
                'path = "logs/audit.jsonl"',
            ]
        ),
        encoding="utf-8",
    )
    indexer = create_indexer(project_root=tmp_path)
    assert indexer.config.search.max_results == 2

    indexer.index_project([ProjectFile("src/a.ts", "export function alpha() {\n  return 1;\n}\n")])
    indexer.search("secret query alpha")

    audit_path = tmp_path / "logs" / "audit.jsonl"
    raw = audit_path.read_text(encoding="utf-8")
    assert "secret query" not in raw

    events = [json.loads(line) for line in raw.splitlines()]
    assert [event["operation"] for event in events] == ["index_project", "search"]
    assert events[0]["metadata"]["added_files"] == 1
    assert events[0]["metadata"]["degraded_files"] == []
    assert events[1]["index_version"] == 1
    assert events[1]["metadata"]["query_present"] is True
    assert events[1]["metadata"]["max_results"] == 2
    assert "query" not in events[1]["metadata"]


def test_audit_disabled_by_default_writes_nothing(tmp_path: Path) -> None:
    indexer = create_indexer(project_root=tmp_path)
    indexer.index_project([ProjectFile("a.md", "hello")])

    assert not (tmp_path / ".codebase_indexer").exists()


def test_overrides_take_precedence(tmp_path: Path) -> None:
    indexer = create_indexer(
        project_root=tmp_path,
        overrides=ConfigOverrides(
            token_budget=64, audit_enabled=True, audit_path=tmp_path / "a.jsonl"
        ),
    )
    indexer.index_project([ProjectFile("a.md", "hello")])

    assert indexer.config.context.token_budget == 64
    assert (tmp_path / "a.jsonl").exists()
