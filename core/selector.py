"""Bounded top-K retainer for book pairs.

Holds at most K pairs in a min-heap keyed by score, so the weakest
retained pair is always at the root and is evicted on overflow.  The
full O(n²) list of pairs is never materialized.

Ordering is total: higher score first, then ascending (book_a, book_b).
Eviction follows the same order, so among equal lowest scores the pair
with the largest indices goes first and runs are reproducible.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterable
from dataclasses import dataclass

DEFAULT_TOP_PAIRS = 10


@dataclass(frozen=True)
class SimilarityPair:
    book_a: int
    book_b: int
    score: float

    @classmethod
    def of(cls, i: int, j: int, score: float) -> SimilarityPair:
        """Build a pair with indices stored as (lower, higher)."""
        return cls(i, j, score) if i <= j else cls(j, i, score)

    def rank_key(self) -> tuple[float, int, int]:
        return (-self.score, self.book_a, self.book_b)


class TopKSelector:
    def __init__(self, k: int = DEFAULT_TOP_PAIRS):
        if k < 1:
            raise ValueError(f"k must be a positive integer, got {k}")
        self.k = k
        # (score, -book_a, -book_b, seq, pair): the root is the pair ranked last.
        self._heap: list[tuple[float, int, int, int, SimilarityPair]] = []
        self._seq = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def offer(self, pair: SimilarityPair) -> None:
        """Insert unconditionally, then evict the lowest if over capacity."""
        heapq.heappush(self._heap, (pair.score, -pair.book_a, -pair.book_b, next(self._seq), pair))
        if len(self._heap) > self.k:
            heapq.heappop(self._heap)

    def offer_all(self, pairs: Iterable[SimilarityPair]) -> None:
        for pair in pairs:
            self.offer(pair)

    def pairs(self) -> list[SimilarityPair]:
        """Retained pairs, best first, without consuming the selector."""
        return sorted((entry[-1] for entry in self._heap), key=SimilarityPair.rank_key)

    def drain(self) -> list[SimilarityPair]:
        """Retained pairs, best first.  The selector is empty afterwards."""
        result = self.pairs()
        self._heap.clear()
        return result

    @classmethod
    def merge(
        cls,
        partials: Iterable[Iterable[SimilarityPair]],
        k: int = DEFAULT_TOP_PAIRS,
    ) -> TopKSelector:
        """Global top K across local top-K lists (one per worker)."""
        merged = cls(k)
        for pairs in partials:
            merged.offer_all(pairs)
        return merged
