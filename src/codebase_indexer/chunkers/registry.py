"""Path-routed chunker lookup."""

from __future__ import annotations

from dataclasses import dataclass, field

from codebase_indexer.chunkers.base import Chunker


@dataclass(slots=True)
class ChunkerRegistry:
    """Chunking strategies tried in registration order, then the fallback."""

    _chunkers: list[Chunker] = field(default_factory=list)
    _fallback: Chunker | None = None

    def register(self, chunker: Chunker, *, fallback: bool = False) -> None:
        """Add a strategy, or replace the fallback when fallback=True."""
        if fallback:
            self._fallback = chunker
        else:
            self._chunkers.append(chunker)

    def select(self, path: str) -> Chunker:
        """Return the first strategy whose supports_path accepts path.

        Every call asks each strategy again, since a strategy may match on more
        than the extension. Raises LookupError when nothing handles the path.
        """
        chosen = next(
            (chunker for chunker in self._chunkers if chunker.supports_path(path)),
            self._fallback,
        )
        if chosen is None:
            raise LookupError(f"No chunker supports path: {path}")
        return chosen

    def names(self) -> tuple[str, ...]:
        """Strategy names in selection order, fallback last."""
        fallback = () if self._fallback is None else (self._fallback.name,)
        return tuple(chunker.name for chunker in self._chunkers) + fallback
