"""Heuristic chunker for TypeScript/JavaScript and their markup dialects."""

from __future__ import annotations

import re

from codebase_indexer.chunkers.base import slice_chunk, whole_file_chunk
from codebase_indexer.chunkers.lexical import find_block_end
from codebase_indexer.index.models import Chunk, ChunkKind

DEFAULT_SCRIPT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mts", ".cts", ".mjs", ".cjs")

_DECLARATION_TYPE_RE = re.compile(r"^(export\s+)?(interface|type)\s+(\w+)")
_FUNCTION_RE = re.compile(r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\b\s*\*?\s*(\w+)")
_ARROW_BINDING_RE = re.compile(r"^(?:export\s+)?(?:const|let)\s+(\w+)\s*[=:]\s*.*?\s*=>")
_FUNCTION_BINDING_RE = re.compile(
    r"^(?:export\s+)?(?:const|let)\s+(\w+)\s*=\s*(?:\(.*?\)\s*(?:=>|:)|(?:async\s+)?function\b)"
)
_LITERAL_CONST_RE = re.compile(r"^(?:export\s+)?const\s+(\w+)\s*[=:]\s*[\[{]")
_HOOK_NAME_RE = re.compile(r"^use(?:[A-Z0-9]|$)")


class ScriptChunker:
    """Split script sources into imports, type declarations, functions and constants."""

    name = "script"

    def __init__(self, extensions: tuple[str, ...] = DEFAULT_SCRIPT_EXTENSIONS) -> None:
        self._extensions = tuple(extension.lower() for extension in extensions)

    def supports_path(self, path: str) -> bool:
        """Return True for configured script extensions."""
        return path.lower().endswith(self._extensions)

    def chunk(self, path: str, content: str) -> list[Chunk]:
        """Extract imports, then interfaces/types, then functions and constants."""
        if not content.strip():
            return []
        lines = content.split("\n")
        chunks: list[Chunk] = []

        import_range = find_import_run(lines)
        if import_range is not None:
            start, end = import_range
            chunks.append(slice_chunk(path, "import", "imports", lines, start, end))

        index = 0
        while index < len(lines):
            match = _DECLARATION_TYPE_RE.match(lines[index])
            if match is None:
                index += 1
                continue
            end = find_block_end(lines, index)
            kind: ChunkKind = "interface" if match.group(2) == "interface" else "type"
            chunks.append(slice_chunk(path, kind, match.group(3), lines, index, end))
            index = end + 1

        index = import_range[1] + 1 if import_range is not None else 0
        while index < len(lines):
            trimmed = lines[index].strip()
            if _DECLARATION_TYPE_RE.match(trimmed):
                index = find_block_end(lines, index) + 1
                continue

            declared = _function_name(trimmed)
            if declared is not None:
                end = find_block_end(lines, index)
                kind = classify_function_name(declared)
                chunks.append(slice_chunk(path, kind, declared, lines, index, end))
                index = end + 1
                continue

            constant = _LITERAL_CONST_RE.match(trimmed)
            if constant is not None:
                end = find_block_end(lines, index)
                chunks.append(slice_chunk(path, "constant", constant.group(1), lines, index, end))
                index = end + 1
                continue
            index += 1

        if not chunks:
            return [whole_file_chunk(path, "unknown", content)]
        return chunks


def classify_function_name(name: str) -> ChunkKind:
    """Tag a function-like declaration; the hook rule is checked first and wins.

    The hook prefix is case-sensitive, so ``UseThing`` is a component.
    """
    if _HOOK_NAME_RE.match(name):
        return "hook"
    if name[:1].isalpha() and name[:1].isupper():
        return "component"
    return "function"


def find_import_run(lines: list[str]) -> tuple[int, int] | None:
    """Return the inclusive line range of the first contiguous run of imports.

    Blank lines inside the run are allowed; a multi-line brace import is
    consumed until its closing brace.
    """
    start: int | None = None
    end = 0
    open_statement = False
    for index, line in enumerate(lines):
        trimmed = line.strip()
        if open_statement:
            end = index
            if "}" in trimmed:
                open_statement = False
            continue
        if trimmed.startswith("import ") or trimmed.startswith("import{"):
            if start is None:
                start = index
            end = index
            open_statement = "{" in trimmed and "}" not in trimmed
            continue
        if start is None:
            continue
        if not trimmed:
            continue
        if trimmed.startswith("}") or "from '" in trimmed or 'from "' in trimmed:
            end = index
            continue
        break
    if start is None:
        return None
    return start, end


def _function_name(trimmed: str) -> str | None:
    for pattern in (_FUNCTION_RE, _ARROW_BINDING_RE, _FUNCTION_BINDING_RE):
        match = pattern.match(trimmed)
        if match is not None:
            return match.group(1)
    return None
