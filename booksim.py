"""booksim CLI: find the most lexically similar books in a directory.

Three commands: compare, profile, validate.
Uses typer for argument parsing and rich for formatted terminal output.
"""

from __future__ import annotations

import json
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from core.comparer import compare_texts
from core.config import ConfigError, load_config
from core.corpus import DEFAULT_BOOKS_DIR, CorpusError, load_corpus, read_book
from core.profiler import make_book
from core.text import normalize_stop_words
from core.validator import validate_config

app = typer.Typer(help="booksim: rank book pairs by shared word frequencies.")
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config_or_exit(config_path: str | None, overrides: dict) -> dict:
    try:
        return load_config(config_path, overrides)
    except ConfigError as e:
        console.print("[red]Error: invalid configuration[/red]")
        for err in e.errors:
            console.print(f"  [red]✗[/red] {err}", soft_wrap=True)
        raise typer.Exit(code=1)


# ── compare ─────────────────────────────────────────────────────────


@app.command()
def compare(
    books_dir: str = typer.Argument(DEFAULT_BOOKS_DIR, help="Directory of .txt books"),
    config_path: str | None = typer.Option(None, "--config", help="Path to config JSON"),
    top_words: int | None = typer.Option(None, "--top-words", help="Words kept per book profile"),
    top_pairs: int | None = typer.Option(None, "--top-pairs", help="Number of pairs to report"),
    stop_word: list[str] | None = typer.Option(
        None, "--stop-word", help="Stop-word (repeatable; replaces the default list)"
    ),
    workers: int | None = typer.Option(None, "--workers", help="Worker processes for scoring"),
    matrix: bool = typer.Option(False, "--matrix", help="Also print the similarity matrix"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of tables"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Print the most similar pairs of books in BOOKS_DIR."""
    _setup_logging(verbose)
    config = _load_config_or_exit(
        config_path,
        {
            "top_words": top_words,
            "top_pairs": top_pairs,
            "stop_words": stop_word or None,
            "workers": workers,
        },
    )

    try:
        documents = load_corpus(books_dir, config["extension"])
    except CorpusError as e:
        console.print(f"[red]Error: {e}[/red]", soft_wrap=True)
        raise typer.Exit(code=1)

    result = compare_texts(documents, config, with_matrix=matrix)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.pairs:
        console.print(
            f"[yellow]No pairs to compare: {len(result.books)} book(s) found in {books_dir}[/yellow]",
            soft_wrap=True,
        )
        return

    table = Table(title=f"Top {config['top_pairs']} similar pairs of text books")
    table.add_column("#", style="dim", width=3)
    table.add_column("Book A", style="cyan")
    table.add_column("Book B", style="cyan")
    table.add_column("Similarity", justify="right", style="green")
    for i, p in enumerate(result.pairs, 1):
        table.add_row(str(i), p.book_a, p.book_b, f"{p.score:.6f}")
    console.print(table)
    console.print(
        f"\n{len(result.pairs)} of {result.total_pairs} pairs shown "
        f"({len(result.books)} books, top {config['top_words']} words each)"
    )

    if result.matrix is not None:
        mtable = Table(title="Similarity Matrix")
        mtable.add_column("", style="cyan")
        for i in range(len(result.books)):
            mtable.add_column(str(i), justify="right")
        for i, book in enumerate(result.books):
            mtable.add_row(
                f"{i} {book.name}", *(f"{v:.3f}" for v in result.matrix[i])
            )
        console.print(mtable)


# ── profile ─────────────────────────────────────────────────────────


@app.command()
def profile(
    book_file: str = typer.Argument(..., help="Path to a book"),
    config_path: str | None = typer.Option(None, "--config", help="Path to config JSON"),
    top_words: int | None = typer.Option(None, "--top-words", help="Words to show"),
    stop_word: list[str] | None = typer.Option(
        None, "--stop-word", help="Stop-word (repeatable; replaces the default list)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Show a single book's top-word frequency profile."""
    _setup_logging(verbose)
    config = _load_config_or_exit(
        config_path, {"top_words": top_words, "stop_words": stop_word or None}
    )

    try:
        text = read_book(book_file)
    except CorpusError as e:
        console.print(f"[red]Error: {e}[/red]", soft_wrap=True)
        raise typer.Exit(code=1)

    book = make_book(
        book_file,
        text,
        top_words=config["top_words"],
        stop_words=normalize_stop_words(config["stop_words"]),
    )

    if as_json:
        typer.echo(json.dumps(book.to_dict(), indent=2))
        return

    if not book.profile:
        console.print(f"[yellow]{book_file} has no counted words[/yellow]", soft_wrap=True)
        return

    table = Table(title=f"{book.name}: {book.total_words} counted words")
    table.add_column("#", style="dim", width=4)
    table.add_column("Word", style="cyan")
    table.add_column("Frequency", justify="right", style="green")
    for i, wf in enumerate(book.profile, 1):
        table.add_row(str(i), wf.word, f"{wf.frequency:.6f}")
    console.print(table)


# ── validate ────────────────────────────────────────────────────────


@app.command()
def validate(config_path: str = typer.Argument(..., help="Path to config JSON")):
    """Check a config file for syntactic and semantic errors."""
    passed, errors = validate_config(config_path)

    if passed:
        console.print(
            Panel("[bold green]✓ Validation passed[/bold green]", border_style="green")
        )
    else:
        console.print(
            Panel("[bold red]✗ Validation failed[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {err}", soft_wrap=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
