"""Indexer construction from effective configuration."""

from __future__ import annotations

from pathlib import Path

from codebase_indexer.chunkers.runtime import build_chunker_registry
from codebase_indexer.config import ConfigOverrides, load_effective_config
from codebase_indexer.index.manager import CodebaseIndexer
from codebase_indexer.logging.audit import JsonlAuditLogger


def create_indexer(
    project_root: Path | None = None, overrides: ConfigOverrides | None = None
) -> CodebaseIndexer:
    """Create an indexer with its chunker registry and optional audit logger.

    A relative audit path is resolved against project_root, or the working
    directory when no root is given.
    """
    config = load_effective_config(project_root, overrides)
    audit_logger: JsonlAuditLogger | None = None
    if config.audit.enabled:
        audit_path = config.audit.path
        if not audit_path.is_absolute():
            base = project_root.resolve() if project_root is not None else Path.cwd()
            audit_path = base / audit_path
        audit_logger = JsonlAuditLogger(audit_path)
    return CodebaseIndexer(
        registry=build_chunker_registry(config),
        config=config,
        audit_logger=audit_logger,
    )
