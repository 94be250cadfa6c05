"""JSONL audit trail for indexer operations.

Events describe what an operation did (counts, versions, sizes) and never carry
source text or query strings; ``sanitize_arguments`` reduces free text to a
presence flag and a length before anything reaches disk.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

VERBATIM_KEYS = frozenset({"path"})
TEXT_KEYS = frozenset({"query", "name", "content"})


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """One indexer operation as written to the audit trail."""

    timestamp: str
    operation: str
    ok: bool
    index_version: int
    metadata: dict[str, object]


class AuditSink(Protocol):
    """Destination for audit events emitted by the indexer."""

    def append(self, event: AuditEvent) -> None:
        """Record one event."""


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _describe_text(key: str, value: str) -> dict[str, object]:
    return {f"{key}_present": bool(value), f"{key}_length": len(value)}


def _describe_value(key: str, value: object) -> dict[str, object]:
    if value is None or isinstance(value, (bool, int, float)):
        return {key: value}
    if isinstance(value, str):
        return _describe_text(key, value)
    if isinstance(value, (list, tuple)):
        return {f"{key}_type": "list", f"{key}_length": len(value)}
    if isinstance(value, dict):
        return {f"{key}_type": "dict", f"{key}_keys": sorted(str(item) for item in value)}
    return {f"{key}_type": type(value).__name__}


def sanitize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Reduce operation arguments to loggable shapes, sorted by argument name."""
    sanitized: dict[str, object] = {}
    for key in sorted(arguments):
        value = arguments[key]
        if key in VERBATIM_KEYS and isinstance(value, str):
            sanitized[key] = value
        elif key in TEXT_KEYS and isinstance(value, str):
            sanitized.update(_describe_text(key, value))
        else:
            sanitized.update(_describe_value(key, value))
    return sanitized


class JsonlAuditLogger:
    """Audit sink appending one JSON object per line to a file."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def append(self, event: AuditEvent) -> None:
        line = json.dumps(asdict(event), sort_keys=True)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(f"{line}\n")

    def read(self, since: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Return the newest ``limit`` events at or after ``since``, oldest first.

        Blank and malformed lines are skipped.
        """
        if limit < 1:
            return []
        entries = [
            record
            for record in self._records()
            if since is None or _timestamp_at_or_after(record, since)
        ]
        return entries[-limit:]

    def _records(self) -> Iterator[dict[str, object]]:
        if not self._path.exists():
            return
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(record, dict):
                    yield record


def _timestamp_at_or_after(record: dict[str, object], since: str) -> bool:
    timestamp = record.get("timestamp")
    return isinstance(timestamp, str) and timestamp >= since
