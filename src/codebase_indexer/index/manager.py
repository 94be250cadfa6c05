"""In-memory project index and refresh orchestration."""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from codebase_indexer.bundler.engine import assemble_context as assemble_context_package
from codebase_indexer.bundler.models import ContextPackage
from codebase_indexer.chunkers.base import file_extension, validate_chunks, whole_file_chunk
from codebase_indexer.chunkers.registry import ChunkerRegistry
from codebase_indexer.chunkers.runtime import build_chunker_registry
from codebase_indexer.config import IndexerConfig, default_config
from codebase_indexer.diagnostics.autofix import auto_fix as apply_auto_fix
from codebase_indexer.diagnostics.issues import detect_issues as run_issue_checks
from codebase_indexer.diagnostics.models import AutoFixResult, Issue
from codebase_indexer.index.delta import detect_index_delta, snapshot_hashes
from codebase_indexer.index.hashing import merkle_root
from codebase_indexer.index.models import (
    Chunk,
    CodebaseOverview,
    FileIndex,
    FileSize,
    IndexStats,
    IndexSummary,
    ProjectFile,
    Reference,
    SearchResult,
    SymbolEntry,
)
from codebase_indexer.index.search import rank_chunks
from codebase_indexer.index.symbols import build_file_graph, build_symbol_table, symbols_for_chunks
from codebase_indexer.index.vectors import TermWeightIndex
from codebase_indexer.logging.audit import AuditEvent, AuditSink, sanitize_arguments, utc_timestamp

LARGEST_FILES_LIMIT = 5
UNINDEXED_ROOT = ""


@dataclass(slots=True, frozen=True)
class IndexSnapshot:
    """Consistent view of every global index structure for one version."""

    file_indices: dict[str, FileIndex] = field(default_factory=dict)
    chunks: tuple[Chunk, ...] = ()
    term_index: TermWeightIndex = field(default_factory=TermWeightIndex)
    symbol_table: dict[str, SymbolEntry] = field(default_factory=dict)
    file_graph: dict[str, tuple[str, ...]] = field(default_factory=dict)
    merkle_root: str = UNINDEXED_ROOT
    version: int = 0


class CodebaseIndexer:
    """Incrementally indexes a caller-supplied project snapshot and answers queries.

    Refreshes are serialized; each one publishes a new immutable snapshot, so
    read operations always see a single version without locking.
    """

    def __init__(
        self,
        registry: ChunkerRegistry | None = None,
        config: IndexerConfig | None = None,
        audit_logger: AuditSink | None = None,
    ) -> None:
        self._config = config or default_config()
        self._registry = registry or build_chunker_registry(self._config)
        self._audit_logger = audit_logger
        self._lock = threading.Lock()
        self._snapshot = IndexSnapshot()

    @property
    def config(self) -> IndexerConfig:
        """Return effective configuration."""
        return self._config

    @property
    def snapshot(self) -> IndexSnapshot:
        """Return the currently published snapshot."""
        return self._snapshot

    def index_project(self, files: Iterable[ProjectFile]) -> IndexSummary:
        """Reconcile the index with a complete project snapshot.

        Only added or changed files are re-chunked. An unchanged Merkle root is a
        no-op that keeps the version and snapshot; two different edit sets that
        happen to produce the same root are indistinguishable from no change.
        """
        started = time.perf_counter()
        files = list(files)
        with self._lock:
            previous = self._snapshot
            current_hashes = snapshot_hashes(files)
            root = merkle_root(list(current_hashes.values()))

            if root == previous.merkle_root:
                summary = IndexSummary(
                    total_chunks=len(previous.chunks),
                    total_symbols=len(previous.symbol_table),
                    changed_files=0,
                    added_files=0,
                    updated_files=0,
                    removed_files=0,
                    merkle_root=root,
                    duration_ms=(time.perf_counter() - started) * 1000,
                    index_version=previous.version,
                    skipped=True,
                )
                self._emit("index_project", previous.version, _summary_metadata(summary))
                return summary

            previous_hashes = {
                path: file_index.content_hash
                for path, file_index in previous.file_indices.items()
            }
            delta = detect_index_delta(previous_hashes, current_hashes)
            contents = _contents_by_path(files, current_hashes)
            refreshed = set(delta.added) | set(delta.updated)

            timestamp = utc_timestamp()
            degraded: list[str] = []
            file_indices: dict[str, FileIndex] = {}
            for path, content_hash in current_hashes.items():
                if path not in refreshed:
                    file_indices[path] = previous.file_indices[path]
                    continue
                chunks, was_degraded = self._chunk_file(path, contents[path])
                if was_degraded:
                    degraded.append(path)
                file_indices[path] = FileIndex(
                    path=path,
                    content_hash=content_hash,
                    chunks=chunks,
                    symbols=symbols_for_chunks(chunks),
                    last_indexed=timestamp,
                )

            all_chunks = [chunk for index in file_indices.values() for chunk in index.chunks]
            term_index = TermWeightIndex()
            term_index.build(all_chunks)
            bound_chunks = tuple(
                replace(chunk, vector=term_index.compute_tfidf(chunk.tokens))
                for chunk in all_chunks
            )
            snapshot = IndexSnapshot(
                file_indices=file_indices,
                chunks=bound_chunks,
                term_index=term_index,
                symbol_table=build_symbol_table(file_indices.values(), bound_chunks),
                file_graph=build_file_graph(file_indices.values()),
                merkle_root=root,
                version=previous.version + 1,
            )
            self._snapshot = snapshot

        summary = IndexSummary(
            total_chunks=len(snapshot.chunks),
            total_symbols=len(snapshot.symbol_table),
            changed_files=len(delta.added) + len(delta.updated),
            added_files=len(delta.added),
            updated_files=len(delta.updated),
            removed_files=len(delta.removed),
            merkle_root=root,
            duration_ms=(time.perf_counter() - started) * 1000,
            index_version=snapshot.version,
            skipped=False,
        )
        metadata = _summary_metadata(summary)
        metadata["degraded_files"] = degraded
        self._emit("index_project", snapshot.version, metadata)
        return summary

    def search(self, query: str, max_results: int | None = None) -> list[SearchResult]:
        """Rank current chunks against a free-text query."""
        snapshot = self._snapshot
        limit = self._config.search.max_results if max_results is None else max_results
        results = rank_chunks(snapshot.chunks, snapshot.term_index, query, limit)
        self._emit(
            "search",
            snapshot.version,
            {
                **sanitize_arguments({"query": query, "max_results": limit}),
                "result_count": len(results),
            },
        )
        return results

    def assemble_context(self, query: str, token_budget: int | None = None) -> ContextPackage:
        """Build a budget-bounded context package for a query."""
        snapshot = self._snapshot
        budget = self._config.context.token_budget if token_budget is None else token_budget

        def search_snapshot(query: str, max_results: int) -> list[SearchResult]:
            return rank_chunks(snapshot.chunks, snapshot.term_index, query, max_results)

        package = assemble_context_package(
            query,
            budget,
            search_snapshot,
            snapshot.symbol_table,
            snapshot.file_graph,
            candidate_pool=self._config.search.candidate_pool,
        )
        self._emit(
            "assemble_context",
            snapshot.version,
            {
                **sanitize_arguments({"query": query, "token_budget": budget}),
                "selected_count": len(package.results),
                "total_tokens": package.total_tokens,
            },
        )
        return package

    def find_references(self, name: str) -> list[Reference]:
        """Return every line of every chunk that textually contains name."""
        snapshot = self._snapshot
        references: list[Reference] = []
        if name:
            for chunk in snapshot.chunks:
                if name not in chunk.content:
                    continue
                for offset, line in enumerate(chunk.content.split("\n")):
                    if name in line:
                        references.append(
                            Reference(
                                path=chunk.path,
                                line=chunk.start_line + offset,
                                context=line.strip(),
                            )
                        )
        self._emit(
            "find_references",
            snapshot.version,
            {**sanitize_arguments({"name": name}), "reference_count": len(references)},
        )
        return references

    def get_codebase_overview(self) -> CodebaseOverview:
        """Aggregate counts, average complexity and the largest files."""
        snapshot = self._snapshot
        file_types: dict[str, int] = {}
        sizes: list[FileSize] = []
        kind_counts = {"component": 0, "hook": 0, "function": 0}
        total_complexity = 0
        for path, file_index in snapshot.file_indices.items():
            extension = file_extension(path).lstrip(".") or "unknown"
            file_types[extension] = file_types.get(extension, 0) + 1
            total_lines = 0
            for chunk in file_index.chunks:
                total_complexity += chunk.metadata.complexity
                total_lines += chunk.metadata.line_count
                if chunk.kind in kind_counts:
                    kind_counts[chunk.kind] += 1
            sizes.append(FileSize(path=path, lines=total_lines))
        sizes.sort(key=lambda size: -size.lines)
        chunk_count = len(snapshot.chunks)
        return CodebaseOverview(
            total_files=len(snapshot.file_indices),
            total_chunks=chunk_count,
            total_symbols=len(snapshot.symbol_table),
            component_count=kind_counts["component"],
            hook_count=kind_counts["hook"],
            function_count=kind_counts["function"],
            average_complexity=total_complexity / chunk_count if chunk_count else 0.0,
            file_types=file_types,
            largest_files=tuple(sizes[:LARGEST_FILES_LIMIT]),
        )

    def detect_issues(self) -> list[Issue]:
        """Run heuristic line checks across all current chunks."""
        snapshot = self._snapshot
        issues = run_issue_checks(snapshot.chunks)
        self._emit("detect_issues", snapshot.version, {"issue_count": len(issues)})
        return issues

    def auto_fix(self, path: str, content: str) -> AutoFixResult:
        """Apply the mechanical fixes to one file's text without touching the index."""
        result = apply_auto_fix(content)
        metadata = sanitize_arguments({"path": path, "content": content})
        metadata["fix_count"] = result.fix_count
        self._emit("auto_fix", self._snapshot.version, metadata)
        return result

    def get_chunks_by_file(self, path: str) -> list[Chunk]:
        """Return the vector-bound chunks of one file in chunk order."""
        return [chunk for chunk in self._snapshot.chunks if chunk.path == path]

    def get_symbol_table(self) -> dict[str, SymbolEntry]:
        """Return a copy of the global symbol table."""
        return dict(self._snapshot.symbol_table)

    def get_file_graph(self) -> dict[str, tuple[str, ...]]:
        """Return a copy of the file dependency graph."""
        return dict(self._snapshot.file_graph)

    def get_index_stats(self) -> IndexStats:
        """Return version, root and size counters."""
        snapshot = self._snapshot
        return IndexStats(
            version=snapshot.version,
            merkle_root=snapshot.merkle_root,
            total_chunks=len(snapshot.chunks),
            total_files=len(snapshot.file_indices),
        )

    def _chunk_file(self, path: str, content: str) -> tuple[tuple[Chunk, ...], bool]:
        try:
            chunks = self._registry.select(path).chunk(path, content)
            validate_chunks(chunks, len(content.split("\n")))
        except Exception:
            return (whole_file_chunk(path, "unknown", content),), True
        return tuple(chunks), False

    def _emit(self, operation: str, index_version: int, metadata: dict[str, object]) -> None:
        if self._audit_logger is None:
            return
        self._audit_logger.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                operation=operation,
                ok=True,
                index_version=index_version,
                metadata=metadata,
            )
        )


def _contents_by_path(files: Iterable[ProjectFile], hashes: dict[str, str]) -> dict[str, str]:
    contents: dict[str, str] = {}
    for file in files:
        if file.indexable and file.path in hashes:
            contents[file.path] = file.content
    return contents


def _summary_metadata(summary: IndexSummary) -> dict[str, object]:
    return {
        "total_chunks": summary.total_chunks,
        "total_symbols": summary.total_symbols,
        "changed_files": summary.changed_files,
        "added_files": summary.added_files,
        "updated_files": summary.updated_files,
        "removed_files": summary.removed_files,
        "skipped": summary.skipped,
        "duration_ms": int(summary.duration_ms),
    }
