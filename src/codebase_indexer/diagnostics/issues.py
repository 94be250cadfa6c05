"""Line-level heuristic issue detection over indexed chunks."""

from __future__ import annotations

import re
from collections.abc import Sequence

from codebase_indexer.diagnostics.models import Issue
from codebase_indexer.index.models import Chunk

MARKER_PREVIEW_CHARS = 60

_IMPORT_NAMES_RE = re.compile(
    r"import\s+(?:type\s+)?(?:(\w+)\s*,?\s*)?(?:\{([^}]*)\}|\*\s*as\s+(\w+))?"
)
_MARKERS = ("TODO", "FIXME", "HACK")


def detect_issues(chunks: Sequence[Chunk]) -> list[Issue]:
    """Run the line battery over every chunk, in chunk order then line order."""
    bodies_by_path: dict[str, list[str]] = {}
    for chunk in chunks:
        if chunk.kind != "import":
            bodies_by_path.setdefault(chunk.path, []).append(chunk.content)

    issues: list[Issue] = []
    for chunk in chunks:
        for offset, line in enumerate(chunk.content.split("\n")):
            line_number = chunk.start_line + offset
            issues.extend(_line_issues(chunk, line, line_number))
            if chunk.kind == "import" and "import" in line:
                bodies = bodies_by_path.get(chunk.path, [])
                for name in imported_names(line):
                    if any(name in body for body in bodies):
                        continue
                    issues.append(
                        Issue(
                            severity="warning",
                            path=chunk.path,
                            line=line_number,
                            message=f"Potentially unused import: {name}",
                            fix=f"Remove unused import '{name}'",
                        )
                    )
            if chunk.metadata.has_markup:
                issues.extend(_markup_issues(chunk, line, line_number))
    return issues


def imported_names(line: str) -> list[str]:
    """Return local names bound by an import line; an alias after 'as' wins."""
    match = _IMPORT_NAMES_RE.search(line)
    if match is None:
        return []
    default_name, braced, namespace = match.groups()
    names: list[str] = []
    if default_name and default_name != "from":
        names.append(default_name)
    if braced:
        for part in braced.split(","):
            item = part.strip()
            if item.startswith("type "):
                item = item[len("type ") :].strip()
            if " as " in item:
                item = item.rsplit(" as ", 1)[1].strip()
            if item:
                names.append(item)
    if namespace:
        names.append(namespace)
    return names


def _line_issues(chunk: Chunk, line: str, line_number: int) -> list[Issue]:
    found: list[Issue] = []
    if "console.log" in line and chunk.kind != "config":
        found.append(
            Issue(
                severity="warning",
                path=chunk.path,
                line=line_number,
                message="console.log statement found - remove for production",
                fix="Remove or replace with proper logging",
            )
        )
    if ": any" in line or "<any>" in line:
        found.append(
            Issue(
                severity="warning",
                path=chunk.path,
                line=line_number,
                message="TypeScript `any` type used - consider using a specific type",
                fix="Replace `any` with a specific type or `unknown`",
            )
        )
    if any(marker in line for marker in _MARKERS):
        found.append(
            Issue(
                severity="info",
                path=chunk.path,
                line=line_number,
                message=f"Code marker found: {line.strip()[:MARKER_PREVIEW_CHARS]}",
                fix="Address the TODO/FIXME item",
            )
        )
    return found


def _markup_issues(chunk: Chunk, line: str, line_number: int) -> list[Issue]:
    found: list[Issue] = []
    if "<img" in line and "alt=" not in line:
        found.append(
            Issue(
                severity="error",
                path=chunk.path,
                line=line_number,
                message="Image missing alt attribute (accessibility)",
                fix='Add alt="description" to the <img> tag',
            )
        )
    if "<div" in line and "onClick" in line:
        found.append(
            Issue(
                severity="warning",
                path=chunk.path,
                line=line_number,
                message="div with onClick - consider using <button> for accessibility",
                fix="Replace <div onClick> with <button onClick> for proper semantics",
            )
        )
    return found
