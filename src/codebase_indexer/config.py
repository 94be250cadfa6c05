"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from codebase_indexer.chunkers.query import DEFAULT_QUERY_EXTENSIONS
from codebase_indexer.chunkers.script import DEFAULT_SCRIPT_EXTENSIONS
from codebase_indexer.chunkers.structured import DEFAULT_STRUCTURED_EXTENSIONS
from codebase_indexer.chunkers.stylesheet import DEFAULT_STYLESHEET_EXTENSIONS

CONFIG_FILE_NAME = "codebase_indexer.toml"
MAX_RESULTS_CAP = 200
CANDIDATE_POOL_CAP = 200
TOKEN_BUDGET_CAP = 1_000_000

DEFAULT_MAX_RESULTS = 10
DEFAULT_CANDIDATE_POOL = 15
DEFAULT_TOKEN_BUDGET = 8000
DEFAULT_AUDIT_PATH = Path(".codebase_indexer") / "audit.jsonl"


@dataclass(slots=True, frozen=True)
class SearchConfig:
    """Search result limits."""

    max_results: int = DEFAULT_MAX_RESULTS
    candidate_pool: int = DEFAULT_CANDIDATE_POOL


@dataclass(slots=True, frozen=True)
class ContextConfig:
    """Context assembly defaults."""

    token_budget: int = DEFAULT_TOKEN_BUDGET


@dataclass(slots=True, frozen=True)
class ChunkingConfig:
    """File extensions routed to each chunking strategy."""

    script_extensions: tuple[str, ...] = DEFAULT_SCRIPT_EXTENSIONS
    stylesheet_extensions: tuple[str, ...] = DEFAULT_STYLESHEET_EXTENSIONS
    query_extensions: tuple[str, ...] = DEFAULT_QUERY_EXTENSIONS
    structured_extensions: tuple[str, ...] = DEFAULT_STRUCTURED_EXTENSIONS


@dataclass(slots=True, frozen=True)
class AuditConfig:
    """Audit log toggle and location."""

    enabled: bool = False
    path: Path = DEFAULT_AUDIT_PATH


@dataclass(slots=True, frozen=True)
class IndexerConfig:
    """Fully merged indexer configuration."""

    search: SearchConfig = SearchConfig()
    context: ContextConfig = ContextConfig()
    chunking: ChunkingConfig = ChunkingConfig()
    audit: AuditConfig = AuditConfig()

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "search": {
                "max_results": self.search.max_results,
                "candidate_pool": self.search.candidate_pool,
            },
            "context": {
                "token_budget": self.context.token_budget,
            },
            "chunking": {
                "script_extensions": list(self.chunking.script_extensions),
                "stylesheet_extensions": list(self.chunking.stylesheet_extensions),
                "query_extensions": list(self.chunking.query_extensions),
                "structured_extensions": list(self.chunking.structured_extensions),
            },
            "audit": {
                "enabled": self.audit.enabled,
                "path": self.audit.path.as_posix(),
            },
        }


@dataclass(slots=True, frozen=True)
class ConfigOverrides:
    """Optional programmatic overrides applied at highest precedence."""

    max_results: int | None = None
    candidate_pool: int | None = None
    token_budget: int | None = None
    audit_enabled: bool | None = None
    audit_path: Path | None = None


def default_config() -> IndexerConfig:
    """Build the default configuration."""
    return IndexerConfig()


def load_project_config_file(project_root: Path) -> dict[str, object]:
    """Load optional codebase_indexer.toml from a project root."""
    config_path = project_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _extensions(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.startswith("."):
            raise ValueError(
                f"Config field '{section}.{field}' must contain only '.ext' strings."
            )
        output.append(item.lower())
    return tuple(output)


def merge_config(
    base: IndexerConfig, project_payload: dict[str, object], overrides: ConfigOverrides
) -> IndexerConfig:
    """Merge defaults, project config file, then programmatic overrides."""
    search_payload = _get_table(project_payload, "search")
    context_payload = _get_table(project_payload, "context")
    chunking_payload = _get_table(project_payload, "chunking")
    audit_payload = _get_table(project_payload, "audit")

    search = SearchConfig(
        max_results=_optional_positive_int_with_cap(
            search_payload.get("max_results"),
            "search.max_results",
            base.search.max_results,
            MAX_RESULTS_CAP,
        ),
        candidate_pool=_optional_positive_int_with_cap(
            search_payload.get("candidate_pool"),
            "search.candidate_pool",
            base.search.candidate_pool,
            CANDIDATE_POOL_CAP,
        ),
    )
    context = ContextConfig(
        token_budget=_optional_positive_int_with_cap(
            context_payload.get("token_budget"),
            "context.token_budget",
            base.context.token_budget,
            TOKEN_BUDGET_CAP,
        )
    )

    chunking_fields: dict[str, tuple[str, ...]] = {}
    for field in (
        "script_extensions",
        "stylesheet_extensions",
        "query_extensions",
        "structured_extensions",
    ):
        if field in chunking_payload:
            chunking_fields[field] = _extensions(chunking_payload[field], "chunking", field)
        else:
            chunking_fields[field] = getattr(base.chunking, field)

    audit_enabled = base.audit.enabled
    if "enabled" in audit_payload:
        raw_enabled = audit_payload["enabled"]
        if not isinstance(raw_enabled, bool):
            raise ValueError("Config field 'audit.enabled' must be a boolean.")
        audit_enabled = raw_enabled
    audit_path = base.audit.path
    if "path" in audit_payload:
        raw_path = audit_payload["path"]
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError("Config field 'audit.path' must be a non-empty string.")
        audit_path = Path(raw_path)

    merged = IndexerConfig(
        search=search,
        context=context,
        chunking=ChunkingConfig(**chunking_fields),
        audit=AuditConfig(enabled=audit_enabled, path=audit_path),
    )
    return apply_overrides(merged, overrides)


def apply_overrides(config: IndexerConfig, overrides: ConfigOverrides) -> IndexerConfig:
    """Apply programmatic overrides at highest precedence."""
    search = SearchConfig(
        max_results=_optional_positive_int_with_cap(
            overrides.max_results,
            "overrides.max_results",
            config.search.max_results,
            MAX_RESULTS_CAP,
        ),
        candidate_pool=_optional_positive_int_with_cap(
            overrides.candidate_pool,
            "overrides.candidate_pool",
            config.search.candidate_pool,
            CANDIDATE_POOL_CAP,
        ),
    )
    context = ContextConfig(
        token_budget=_optional_positive_int_with_cap(
            overrides.token_budget,
            "overrides.token_budget",
            config.context.token_budget,
            TOKEN_BUDGET_CAP,
        )
    )
    audit = AuditConfig(
        enabled=(
            overrides.audit_enabled
            if overrides.audit_enabled is not None
            else config.audit.enabled
        ),
        path=overrides.audit_path or config.audit.path,
    )
    return IndexerConfig(
        search=search,
        context=context,
        chunking=config.chunking,
        audit=audit,
    )


def load_effective_config(
    project_root: Path | None = None, overrides: ConfigOverrides | None = None
) -> IndexerConfig:
    """Load effective config using merge order defaults -> project file -> overrides."""
    payload: dict[str, object] = {}
    if project_root is not None:
        payload = load_project_config_file(project_root.resolve())
    return merge_config(default_config(), payload, overrides or ConfigOverrides())


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value
