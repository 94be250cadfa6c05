"""Heuristic issue detection and auto-fix."""

from .autofix import auto_fix
from .issues import detect_issues, imported_names
from .models import AutoFixResult, Issue, Severity

__all__ = ["AutoFixResult", "Issue", "Severity", "auto_fix", "detect_issues", "imported_names"]
