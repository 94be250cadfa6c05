"""Bag-of-words TF-IDF vector space over chunk tokens."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from codebase_indexer.index.models import Chunk


class TermWeightIndex:
    """Inverse document frequency table with dense TF-IDF vectors.

    The vocabulary order is the first-seen order of terms while building, so
    every vector produced by one index is directly comparable with any other.
    """

    def __init__(self) -> None:
        self._idf: dict[str, float] = {}
        self._documents: dict[str, tuple[str, ...]] = {}

    @property
    def vocabulary_size(self) -> int:
        """Return the number of distinct indexed terms."""
        return len(self._idf)

    def build(self, chunks: Iterable[Chunk]) -> None:
        """Rebuild document frequencies and IDF weights from scratch."""
        doc_freq: dict[str, int] = {}
        documents: dict[str, tuple[str, ...]] = {}
        for chunk in chunks:
            for token in dict.fromkeys(chunk.tokens):
                doc_freq[token] = doc_freq.get(token, 0) + 1
            documents[chunk.chunk_id] = chunk.tokens
        total_docs = len(documents)
        self._idf = {
            term: math.log((total_docs + 1) / (freq + 1)) + 1.0
            for term, freq in doc_freq.items()
        }
        self._documents = documents

    def idf(self, term: str) -> float:
        """Return the IDF weight of a term, 0 when unknown."""
        return self._idf.get(term, 0.0)

    def tokens_for(self, chunk_id: str) -> tuple[str, ...]:
        """Return the raw tokens retained for one chunk id."""
        return self._documents.get(chunk_id, ())

    def compute_tfidf(self, tokens: Sequence[str]) -> tuple[float, ...]:
        """Project tokens onto the vocabulary with max-normalized term frequency."""
        counts = Counter(tokens)
        max_freq = max(counts.values(), default=0) or 1
        return tuple(
            (counts.get(term, 0) / max_freq) * weight for term, weight in self._idf.items()
        )


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return cosine similarity, or 0 for empty, zero-norm or mismatched vectors."""
    if len(a) != len(b) or not a:
        return 0.0
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for left, right in zip(a, b, strict=True):
        dot += left * right
        norm_a += left * left
        norm_b += right * right
    denominator = math.sqrt(norm_a) * math.sqrt(norm_b)
    if denominator == 0:
        return 0.0
    return dot / denominator
