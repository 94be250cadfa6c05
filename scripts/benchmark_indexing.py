#!/usr/bin/env python3
"""Time indexing, refresh, search and context assembly over a generated project."""

from __future__ import annotations

import argparse
import json
import statistics
import time
from dataclasses import dataclass
from datetime import UTC, datetime

from codebase_indexer.index.manager import CodebaseIndexer
from codebase_indexer.index.models import ProjectFile

DEFAULT_SCENARIOS = ("small", "medium", "large")
SCENARIO_NAMES = frozenset(DEFAULT_SCENARIOS)
DEFAULT_QUERY = "user profile component hook"


@dataclass(frozen=True, slots=True)
class FixtureProfile:
    """Size profile for a generated in-memory project."""

    components: int
    hooks: int
    utilities: int
    stylesheets: int
    migrations: int


FIXTURE_PROFILES: dict[str, FixtureProfile] = {
    "small": FixtureProfile(components=10, hooks=5, utilities=5, stylesheets=1, migrations=1),
    "medium": FixtureProfile(components=60, hooks=20, utilities=30, stylesheets=4, migrations=6),
    "large": FixtureProfile(components=200, hooks=60, utilities=100, stylesheets=10, migrations=20),
}


@dataclass(slots=True)
class BenchmarkRun:
    """Timings of one pass over one scenario."""

    scenario: str
    run_index: int
    cold_index_seconds: float
    noop_index_seconds: float
    single_change_seconds: float
    search_seconds: float
    context_seconds: float
    total_chunks: int


def parse_scenarios(raw: str) -> list[str]:
    names = [item.strip().lower() for item in raw.split(",") if item.strip()]
    if not names:
        raise SystemExit("At least one scenario is required.")
    unknown = sorted({name for name in names if name not in SCENARIO_NAMES})
    if unknown:
        raise SystemExit(f"Unknown scenarios: {unknown}. Allowed: {sorted(SCENARIO_NAMES)}.")
    ordered_unique: list[str] = []
    for name in names:
        if name not in ordered_unique:
            ordered_unique.append(name)
    return ordered_unique


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--runs",
        type=int,
        default=3,
        help="Number of benchmark runs to execute per scenario. Default: 3.",
    )
    parser.add_argument(
        "--scenarios",
        default="small,medium,large",
        help="Comma-separated scenario list. Allowed: small,medium,large.",
    )
    parser.add_argument(
        "--query",
        default=DEFAULT_QUERY,
        help="Query used for the search and context assembly timings.",
    )
    return parser.parse_args()


def component_text(index: int) -> str:
    return "\n".join(
        [
            "import { useState } from 'react';",
            f"import {{ useProfile{index % 7} }} from '../hooks/useProfile{index % 7}';",
            "",
            f"export function UserCard{index}({{ userId }}: {{ userId: string }}) {{",
            f"  const profile = useProfile{index % 7}(userId);",
            "  const [open, setOpen] = useState(false);",
            "  if (!profile) {",
            "    return null;",
            "  }",
            "  return (",
            f'    <div className="card-{index}" onClick={{() => setOpen(!open)}}>',
            "      {profile.name}",
            "    </div>",
            "  );",
            "}",
            "",
        ]
    )


def hook_text(index: int) -> str:
    return "\n".join(
        [
            "import { useEffect, useState } from 'react';",
            "",
            f"export function useProfile{index}(userId: string) {{",
            "  const [profile, setProfile] = useState(null);",
            "  useEffect(() => {",
            "    fetch(`/api/users/${userId}`).then((r) => r.json()).then(setProfile);",
            "  }, [userId]);",
            "  return profile;",
            "}",
            "",
        ]
    )


def utility_text(index: int) -> str:
    return "\n".join(
        [
            f"export const LIMITS_{index} = {{",
            f"  pageSize: {10 + index},",
            "  retries: 3,",
            "};",
            "",
            f"export const formatName{index} = (first: string, last: string) => {{",
            "  return `${first} ${last}`.trim();",
            "};",
            "",
        ]
    )


def stylesheet_text(index: int) -> str:
    return "\n".join(
        [
            "@layer base {",
            f"  .card-{index} {{ padding: 1rem; }}",
            "}",
            "",
            "@media (min-width: 640px) {",
            f"  .card-{index} {{ padding: 2rem; }}",
            "}",
            "",
        ]
    )


def migration_text(index: int) -> str:
    return "\n".join(
        [
            f"CREATE TABLE IF NOT EXISTS profiles_{index} (",
            "  id uuid primary key,",
            "  name text not null",
            ");",
            "",
            f"CREATE INDEX profiles_{index}_name ON profiles_{index} (name);",
            "",
        ]
    )


def build_fixture_files(profile: FixtureProfile) -> list[ProjectFile]:
    files: list[ProjectFile] = []
    for index in range(profile.hooks):
        files.append(ProjectFile(f"src/hooks/useProfile{index}.ts", hook_text(index)))
    for index in range(profile.components):
        files.append(ProjectFile(f"src/components/UserCard{index}.tsx", component_text(index)))
    for index in range(profile.utilities):
        files.append(ProjectFile(f"src/lib/util{index}.ts", utility_text(index)))
    for index in range(profile.stylesheets):
        files.append(ProjectFile(f"src/styles/theme{index}.css", stylesheet_text(index)))
    for index in range(profile.migrations):
        files.append(ProjectFile(f"db/migrations/{index:04d}.sql", migration_text(index)))
    files.append(ProjectFile("package.json", '{\n  "name": "fixture"\n}\n'))
    return files


def run_one(scenario: str, run_index: int, query: str) -> BenchmarkRun:
    files = build_fixture_files(FIXTURE_PROFILES[scenario])
    indexer = CodebaseIndexer()

    started = time.perf_counter()
    summary = indexer.index_project(files)
    cold_index_seconds = time.perf_counter() - started

    started = time.perf_counter()
    indexer.index_project(files)
    noop_index_seconds = time.perf_counter() - started

    changed = list(files)
    first = changed[0]
    changed[0] = ProjectFile(first.path, first.content + f"\n// touched {run_index}\n")
    started = time.perf_counter()
    indexer.index_project(changed)
    single_change_seconds = time.perf_counter() - started

    started = time.perf_counter()
    indexer.search(query)
    search_seconds = time.perf_counter() - started

    started = time.perf_counter()
    indexer.assemble_context(query)
    context_seconds = time.perf_counter() - started

    print(
        f"[{scenario} run {run_index}] chunks={summary.total_chunks} "
        f"cold={cold_index_seconds:.4f}s change={single_change_seconds:.4f}s"
    )
    return BenchmarkRun(
        scenario=scenario,
        run_index=run_index,
        cold_index_seconds=cold_index_seconds,
        noop_index_seconds=noop_index_seconds,
        single_change_seconds=single_change_seconds,
        search_seconds=search_seconds,
        context_seconds=context_seconds,
        total_chunks=summary.total_chunks,
    )


def _summarize_metric(values: list[float]) -> dict[str, float]:
    return {
        "min_seconds": min(values),
        "max_seconds": max(values),
        "mean_seconds": statistics.fmean(values),
    }


def summarize_runs(runs: list[BenchmarkRun]) -> dict[str, object]:
    if not runs:
        return {"runs": 0}
    return {
        "runs": len(runs),
        "total_chunks": runs[-1].total_chunks,
        "cold_index": _summarize_metric([run.cold_index_seconds for run in runs]),
        "noop_index": _summarize_metric([run.noop_index_seconds for run in runs]),
        "single_change": _summarize_metric([run.single_change_seconds for run in runs]),
        "search": _summarize_metric([run.search_seconds for run in runs]),
        "assemble_context": _summarize_metric([run.context_seconds for run in runs]),
    }


def main() -> int:
    args = parse_args()
    if args.runs < 1:
        raise SystemExit("--runs must be >= 1")
    scenarios = parse_scenarios(args.scenarios)

    scenario_summaries: dict[str, dict[str, object]] = {}
    for scenario in scenarios:
        runs = [run_one(scenario, index, args.query) for index in range(1, args.runs + 1)]
        scenario_summaries[scenario] = summarize_runs(runs)

    summary = {
        "timestamp_utc": datetime.now(UTC).isoformat(),
        "protocol": {
            "scenarios": scenarios,
            "runs_per_scenario": args.runs,
            "query_length": len(args.query),
            "fixture_profiles": {
                name: {
                    "components": profile.components,
                    "hooks": profile.hooks,
                    "utilities": profile.utilities,
                    "stylesheets": profile.stylesheets,
                    "migrations": profile.migrations,
                }
                for name, profile in FIXTURE_PROFILES.items()
                if name in scenarios
            },
        },
        "scenarios": scenario_summaries,
    }
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
