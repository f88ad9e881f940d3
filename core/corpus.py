"""Corpus loading: find the book files in a directory and read them.

Book names are file names, and files are returned sorted by name so
pair indices are stable between runs.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BOOKS_DIR = "books"
DEFAULT_EXTENSION = ".txt"


class CorpusError(Exception):
    """The books directory can't be listed or a book can't be read."""


def list_books(books_dir: str | Path, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """Book files directly inside `books_dir`.

    A bare ".txt" (nothing before the extension) is not a book.
    """
    root = Path(books_dir)
    if not root.is_dir():
        raise CorpusError(f"Could not open directory: {books_dir}")
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise CorpusError(f"Could not open directory: {books_dir} ({e})") from e

    return [
        p
        for p in entries
        if p.is_file() and len(p.name) > len(extension) and p.name.endswith(extension)
    ]


def read_book(path: str | Path) -> str:
    # Undecodable bytes become U+FFFD, which normalization strips anyway.
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise CorpusError(f"Could not read book: {path} ({e})") from e


def load_corpus(
    books_dir: str | Path = DEFAULT_BOOKS_DIR,
    extension: str = DEFAULT_EXTENSION,
) -> list[tuple[str, str]]:
    """Returns [(file name, text), ...] for every book in the directory."""
    paths = list_books(books_dir, extension)
    logger.info("Found %d book(s) in %s", len(paths), books_dir)
    return [(p.name, read_book(p)) for p in paths]
