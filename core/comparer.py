"""Book comparison pipeline: profile → score every pair → keep the top K.

The top-level `compare_texts()` runs the whole thing for a list of
(name, text) documents.  Pair indices refer to the order in which the
documents were submitted.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass

import numpy as np

from core.profiler import DEFAULT_TOP_WORDS, Book, Profile, make_book
from core.scorer import similarity, similarity_matrix
from core.selector import DEFAULT_TOP_PAIRS, SimilarityPair, TopKSelector
from core.text import STOP_WORDS, normalize_stop_words

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PairResult:
    book_a: str
    book_b: str
    score: float
    index_a: int
    index_b: int

    def to_dict(self) -> dict:
        return {
            "book_a": self.book_a,
            "book_b": self.book_b,
            "score": self.score,
        }


@dataclass
class Comparison:
    books: list[Book]
    pairs: list[PairResult]
    matrix: np.ndarray | None = None

    @property
    def total_pairs(self) -> int:
        n = len(self.books)
        return n * (n - 1) // 2

    def to_dict(self) -> dict:
        return {
            "books": [b.name for b in self.books],
            "total_pairs": self.total_pairs,
            "pairs": [p.to_dict() for p in self.pairs],
            "matrix": self.matrix.tolist() if self.matrix is not None else None,
        }


# ── Profiling ───────────────────────────────────────────────────────


def build_books(
    documents: Iterable[tuple[str, str]],
    top_words: int = DEFAULT_TOP_WORDS,
    stop_words: frozenset[str] = STOP_WORDS,
) -> list[Book]:
    """Profile every (name, text) document, preserving submission order."""
    return [make_book(name, text, top_words, stop_words) for name, text in documents]


# ── Pairwise scoring ────────────────────────────────────────────────


def _compare_rows(
    profiles: Sequence[Profile],
    rows: Sequence[int],
    top_pairs: int,
    keep_scores: bool,
) -> tuple[list[SimilarityPair], list[SimilarityPair]]:
    """Score pairs (i, j) for every i in `rows` and every j > i.

    Returns (local top K, all scored pairs if keep_scores else []).
    """
    selector = TopKSelector(top_pairs)
    scored: list[SimilarityPair] = []
    for i in rows:
        for j in range(i + 1, len(profiles)):
            pair = SimilarityPair.of(i, j, similarity(profiles[i], profiles[j]))
            selector.offer(pair)
            if keep_scores:
                scored.append(pair)
    return selector.drain(), scored


def _deal_rows(n: int, workers: int) -> list[list[int]]:
    # Worker w gets rows w, w + workers, w + 2*workers, ...
    return [list(range(w, n, workers)) for w in range(workers)]


def rank_pairs(
    books: Sequence[Book],
    top_pairs: int = DEFAULT_TOP_PAIRS,
    workers: int = 1,
    with_matrix: bool = False,
) -> Comparison:
    """Score all unordered book pairs and return the `top_pairs` best."""
    n = len(books)
    matrix = np.zeros((n, n), dtype=np.float64) if with_matrix else None
    if n < 2:
        logger.info("%d book(s) supplied, nothing to compare", n)
        return Comparison(books=list(books), pairs=[], matrix=matrix)

    profiles = [b.profile for b in books]
    cpus = os.cpu_count() or 1
    if workers > cpus:
        logger.warning("%d workers requested but only %d CPU(s) available", workers, cpus)
    workers = max(1, min(workers, n - 1, cpus))

    if workers == 1 and matrix is not None:
        # Every score is in the matrix; select from its upper triangle.
        matrix = similarity_matrix(profiles)
        upper = [SimilarityPair(i, j, float(matrix[i, j])) for i in range(n) for j in range(i + 1, n)]
        partials = [(upper, [])]
    elif workers == 1:
        partials = [_compare_rows(profiles, range(n), top_pairs, False)]
    else:
        logger.info("Comparing %d books across %d worker processes", n, workers)
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_compare_rows, profiles, rows, top_pairs, with_matrix)
                for rows in _deal_rows(n, workers)
            ]
            partials = [f.result() for f in futures]

    selector = TopKSelector.merge((local for local, _ in partials), top_pairs)
    if matrix is not None:
        for _, scored in partials:
            for p in scored:
                matrix[p.book_a, p.book_b] = matrix[p.book_b, p.book_a] = p.score

    results = [
        PairResult(
            book_a=books[p.book_a].name,
            book_b=books[p.book_b].name,
            score=p.score,
            index_a=p.book_a,
            index_b=p.book_b,
        )
        for p in selector.drain()
    ]
    logger.info("Scored %d pairs, kept %d", n * (n - 1) // 2, len(results))
    return Comparison(books=list(books), pairs=results, matrix=matrix)


# ── Top-level orchestrator ──────────────────────────────────────────


def compare_texts(
    documents: Iterable[tuple[str, str]],
    config: dict,
    with_matrix: bool = False,
) -> Comparison:
    """Run the full pipeline for (name, text) documents + a config dict."""
    stop_words = normalize_stop_words(config.get("stop_words", STOP_WORDS))
    books = build_books(
        documents,
        top_words=config.get("top_words", DEFAULT_TOP_WORDS),
        stop_words=stop_words,
    )
    return rank_pairs(
        books,
        top_pairs=config.get("top_pairs", DEFAULT_TOP_PAIRS),
        workers=config.get("workers", 1),
        with_matrix=with_matrix,
    )
