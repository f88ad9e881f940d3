"""Shared text normalization for the profiler and the CLI.

Stop-words and book text must go through the same normalizer, otherwise
a configured stop-word like "the" would never match the token "THE".
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

STOP_WORDS = frozenset({"A", "AND", "AN", "OF", "IN", "THE"})

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
# C-locale isspace; NBSP and other Unicode spaces stay inside a word.
_WHITESPACE = re.compile(r"[ \t\n\v\f\r]+")


def normalize_word(word: str) -> str:
    """Strip everything but ASCII letters and digits, then uppercase."""
    return _NON_ALNUM.sub("", word).upper()


def normalize_stop_words(words: Iterable[str]) -> frozenset[str]:
    """Normalize configured stop-words; entries that normalize to "" are dropped."""
    return frozenset(w for w in map(normalize_word, words) if w)


def iter_tokens(text: str, stop_words: frozenset[str] = STOP_WORDS) -> Iterator[str]:
    """Whitespace split → normalize → drop empty tokens and stop-words."""
    for word in _WHITESPACE.split(text):
        token = normalize_word(word)
        if token and token not in stop_words:
            yield token


def tokenize(text: str, stop_words: frozenset[str] = STOP_WORDS) -> list[str]:
    return list(iter_tokens(text, stop_words))
