"""Symbol table and file dependency graph derived from chunks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import replace

from codebase_indexer.index.models import Chunk, ChunkKind, FileIndex, SymbolEntry, SymbolKind

_NON_SYMBOL_KINDS = frozenset({"import", "unknown"})


def symbol_kind_for(kind: ChunkKind) -> SymbolKind | None:
    """Map a chunk kind to its symbol kind; hooks register as functions."""
    if kind in _NON_SYMBOL_KINDS:
        return None
    if kind == "hook":
        return "function"
    return kind  # type: ignore[return-value]


def symbols_for_chunks(chunks: Iterable[Chunk]) -> tuple[SymbolEntry, ...]:
    """Derive declaration entries for one file's chunks."""
    entries: list[SymbolEntry] = []
    for chunk in chunks:
        kind = symbol_kind_for(chunk.kind)
        if kind is None:
            continue
        entries.append(
            SymbolEntry(
                name=chunk.name,
                kind=kind,
                path=chunk.path,
                line=chunk.start_line,
                exported="export" in chunk.content,
            )
        )
    return tuple(entries)


def build_symbol_table(
    file_indices: Iterable[FileIndex],
    chunks: Sequence[Chunk],
) -> dict[str, SymbolEntry]:
    """Build the global symbol table with a full cross-reference scan.

    Every chunk is checked against every symbol from a different file, so the
    cost is chunks x symbols.
    """
    declared: dict[str, SymbolEntry] = {}
    for file_index in file_indices:
        for symbol in file_index.symbols:
            declared[symbol.key] = symbol

    references: dict[str, dict[str, None]] = {key: {} for key in declared}
    for chunk in chunks:
        for key, symbol in declared.items():
            if chunk.path == symbol.path:
                continue
            if symbol.name in chunk.content:
                references[key][chunk.path] = None

    return {
        key: replace(symbol, references=tuple(references[key]))
        for key, symbol in declared.items()
    }


def build_file_graph(file_indices: Iterable[FileIndex]) -> dict[str, tuple[str, ...]]:
    """Map each file to the modules imported by its import chunks."""
    graph: dict[str, tuple[str, ...]] = {}
    for file_index in file_indices:
        imports: list[str] = []
        for chunk in file_index.chunks:
            if chunk.kind == "import":
                imports.extend(chunk.dependencies)
        graph[file_index.path] = tuple(imports)
    return graph


def lookup_symbols(table: Mapping[str, SymbolEntry], keys: Iterable[str]) -> dict[str, SymbolEntry]:
    """Return the entries for keys present in the table, preserving key order."""
    found: dict[str, SymbolEntry] = {}
    for key in keys:
        symbol = table.get(key)
        if symbol is not None:
            found[key] = symbol
    return found
