"""Typed models for diagnostics output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Severity = Literal["error", "warning", "info"]


@dataclass(slots=True, frozen=True)
class Issue:
    """One line-level finding with a suggested remedy."""

    severity: Severity
    path: str
    line: int
    message: str
    fix: str


@dataclass(slots=True, frozen=True)
class AutoFixResult:
    """Patched file text and the fix categories that were applied."""

    fixed: str
    fix_count: int
    fixes: tuple[str, ...]
