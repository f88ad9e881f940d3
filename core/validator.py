"""Two-level config validation: syntactic and semantic.

Syntactic = structure and types.
Semantic  = values that are well-typed but can't do what the user meant.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.text import normalize_word

KNOWN_KEYS = {"top_words", "top_pairs", "stop_words", "extension", "workers"}


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


# ── Syntactic Validation ────────────────────────────────────────────

def validate_syntactic(config: dict) -> list[str]:
    """Check field types.  Returns list of error strings."""
    errors: list[str] = []

    if not isinstance(config, dict):
        return ["Config must be a JSON object."]

    unknown = sorted(set(config) - KNOWN_KEYS)
    if unknown:
        errors.append(f"Unknown config keys: {unknown}. Known keys: {sorted(KNOWN_KEYS)}.")

    for key in ("top_words", "top_pairs", "workers"):
        if key in config and not _is_positive_int(config[key]):
            errors.append(f"'{key}' must be a positive integer, got {config[key]!r}.")

    stop_words = config.get("stop_words")
    if "stop_words" in config and (
        not isinstance(stop_words, list) or not all(isinstance(w, str) for w in stop_words)
    ):
        errors.append("'stop_words' must be a list of strings.")

    ext = config.get("extension")
    if "extension" in config and (not isinstance(ext, str) or not ext):
        errors.append("'extension' must be a non-empty string.")

    return errors


# ── Semantic Validation ─────────────────────────────────────────────

def validate_semantic(config: dict) -> list[str]:
    """Check values that pass type checks but would be silently ignored."""
    errors: list[str] = []

    empty = [w for w in config.get("stop_words") or [] if not normalize_word(w)]
    if empty:
        errors.append(
            f"Stop-words {empty} contain no letters or digits. Words are compared "
            "after stripping punctuation, so these can never match a token."
        )

    return errors


# ── Top-level validate ──────────────────────────────────────────────

def validate_config(config_path: str) -> tuple[bool, list[str]]:
    """Run syntactic + semantic validation on a config file.

    Returns (passed, errors).
    """
    path = Path(config_path)
    try:
        config = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        return False, [f"Invalid JSON: {e}"]
    except FileNotFoundError:
        return False, [f"Config file not found: {config_path}"]
    except (OSError, UnicodeDecodeError) as e:
        return False, [f"Could not read config file: {config_path} ({e})"]

    syn_errors = validate_syntactic(config)
    if syn_errors:
        return False, syn_errors

    sem_errors = validate_semantic(config)
    if sem_errors:
        return False, sem_errors

    return True, []
