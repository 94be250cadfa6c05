"""Statement-level chunker for SQL files."""

from __future__ import annotations

import re

from codebase_indexer.chunkers.base import make_chunk
from codebase_indexer.index.models import Chunk

DEFAULT_QUERY_EXTENSIONS = (".sql",)
PLACEHOLDER_NAME = "statement"

_STATEMENT_SPLIT_RE = re.compile(r";[ \t\r\f\v]*\n")
_CREATE_NAME_RE = re.compile(
    r"CREATE\s+(?:OR\s+REPLACE\s+)?(?:UNIQUE\s+)?"
    r"(?:TABLE|INDEX|POLICY|VIEW|FUNCTION|TRIGGER|TYPE)\s+"
    r"(?:IF\s+NOT\s+EXISTS\s+)?[\"'`]?(\w+)[\"'`]?",
    re.IGNORECASE,
)


class QueryChunker:
    """One chunk per statement, split on a semicolon that ends a line."""

    name = "query"

    def __init__(self, extensions: tuple[str, ...] = DEFAULT_QUERY_EXTENSIONS) -> None:
        self._extensions = tuple(extension.lower() for extension in extensions)

    def supports_path(self, path: str) -> bool:
        """Return True for configured query-language extensions."""
        return path.lower().endswith(self._extensions)

    def chunk(self, path: str, content: str) -> list[Chunk]:
        """Split statements and accumulate line offsets in order."""
        chunks: list[Chunk] = []
        line_offset = 0
        for raw_statement, separator in _split_statements(content):
            statement = raw_statement.strip()
            if statement:
                leading = raw_statement[: len(raw_statement) - len(raw_statement.lstrip())]
                start_line = line_offset + leading.count("\n")
                end_line = start_line + statement.count("\n")
                match = _CREATE_NAME_RE.search(statement)
                name = match.group(1) if match is not None else PLACEHOLDER_NAME
                chunks.append(make_chunk(path, "query", name, statement, start_line, end_line))
            line_offset += raw_statement.count("\n") + separator.count("\n")
        return chunks


def _split_statements(content: str) -> list[tuple[str, str]]:
    """Return (statement, separator) pairs covering the whole content."""
    pieces: list[tuple[str, str]] = []
    cursor = 0
    for match in _STATEMENT_SPLIT_RE.finditer(content):
        pieces.append((content[cursor : match.start()], match.group(0)))
        cursor = match.end()
    pieces.append((content[cursor:], ""))
    return pieces
