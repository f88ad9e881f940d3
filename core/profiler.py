"""Frequency profiler: turns a book's text into its top-N word profile.

A profile is the book's lexical fingerprint: the `top_words` most frequent
counted words, each with its share of all counted words in the book.
Frequencies are relative to every counted word, not just the ones kept,
so a truncated profile sums to less than 1.0.
"""

from __future__ import annotations

import heapq
import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from core.text import STOP_WORDS, iter_tokens

logger = logging.getLogger(__name__)

DEFAULT_TOP_WORDS = 100


@dataclass(frozen=True)
class WordFrequency:
    word: str
    frequency: float

    def to_dict(self) -> dict:
        return {"word": self.word, "frequency": self.frequency}


Profile = tuple[WordFrequency, ...]


@dataclass(frozen=True)
class Book:
    name: str
    profile: Profile
    total_words: int = 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "total_words": self.total_words,
            "profile": [wf.to_dict() for wf in self.profile],
        }


# ── Counting ────────────────────────────────────────────────────────


def count_words(tokens: Iterable[str]) -> tuple[Counter[str], int]:
    """Count normalized tokens.  Returns (counts, total counted tokens)."""
    counts: Counter[str] = Counter(tokens)
    return counts, sum(counts.values())


def relative_frequencies(counts: Counter[str], total: int) -> list[WordFrequency]:
    """Every distinct word with count / total, in first-seen order."""
    if total == 0:
        return []
    return [WordFrequency(word, count / total) for word, count in counts.items()]


# ── Profile building ───────────────────────────────────────────────


def select_top(entries: list[WordFrequency], top_words: int) -> Profile:
    """Partial sort: the `top_words` highest frequencies, descending.

    heapq.nlargest is stable, so equal frequencies keep first-seen order.
    """
    return tuple(heapq.nlargest(top_words, entries, key=lambda wf: wf.frequency))


def build_profile(
    text: str,
    top_words: int = DEFAULT_TOP_WORDS,
    stop_words: frozenset[str] = STOP_WORDS,
) -> Profile:
    return make_book("", text, top_words, stop_words).profile


def make_book(
    name: str,
    text: str,
    top_words: int = DEFAULT_TOP_WORDS,
    stop_words: frozenset[str] = STOP_WORDS,
) -> Book:
    """Profile one book, keeping its identifier and counted-word total."""
    counts, total = count_words(iter_tokens(text, stop_words))
    profile = select_top(relative_frequencies(counts, total), top_words)
    logger.debug(
        "Profiled %s: %d counted words, %d distinct, kept %d",
        name, total, len(counts), len(profile),
    )
    return Book(name=name, profile=profile, total_words=total)
