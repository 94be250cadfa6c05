"""Best-effort regex patches for the mechanically fixable issues."""

from __future__ import annotations

import re

from codebase_indexer.diagnostics.models import AutoFixResult

_IMG_WITHOUT_ALT_RE = re.compile(r"<img\s+(?!.*alt=)([^>]+)>")
_CONSOLE_LOG_RE = re.compile(r"(\s*)console\.log\(([^)]*)\);?")


def auto_fix(content: str) -> AutoFixResult:
    """Add empty alt attributes to images and comment out console.log calls.

    Text-level rewrites only; a call whose arguments contain ')' is cut short.
    """
    fixed = content
    fixes: list[str] = []

    if _IMG_WITHOUT_ALT_RE.search(fixed) is not None:
        fixed = _IMG_WITHOUT_ALT_RE.sub(r'<img alt="" \1>', fixed)
        fixes.append("Added missing alt attributes to images")

    if "console.log(" in fixed:
        fixed = _CONSOLE_LOG_RE.sub(r"\1// console.log(\2);", fixed)
        fixes.append("Commented out console.log statements")

    return AutoFixResult(fixed=fixed, fix_count=len(fixes), fixes=tuple(fixes))
