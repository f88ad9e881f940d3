"""Run configuration: defaults ← JSON file ← command-line overrides."""

from __future__ import annotations

import json
from pathlib import Path

from core.corpus import DEFAULT_EXTENSION
from core.profiler import DEFAULT_TOP_WORDS
from core.selector import DEFAULT_TOP_PAIRS
from core.text import STOP_WORDS
from core.validator import validate_semantic, validate_syntactic

DEFAULT_CONFIG: dict = {
    "top_words": DEFAULT_TOP_WORDS,
    "top_pairs": DEFAULT_TOP_PAIRS,
    "stop_words": sorted(STOP_WORDS),
    "extension": DEFAULT_EXTENSION,
    "workers": 1,
}


class ConfigError(Exception):
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def load_config(path: str | None = None, overrides: dict | None = None) -> dict:
    """Merge defaults, an optional JSON file and non-None overrides, then validate."""
    config = dict(DEFAULT_CONFIG)

    if path is not None:
        try:
            file_config = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError([f"Invalid JSON: {e}"]) from e
        except FileNotFoundError as e:
            raise ConfigError([f"Config file not found: {path}"]) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError([f"Could not read config file: {path} ({e})"]) from e
        errors = validate_syntactic(file_config)
        if errors:
            raise ConfigError(errors)
        config.update(file_config)

    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value

    errors = validate_syntactic(config) or validate_semantic(config)
    if errors:
        raise ConfigError(errors)
    return config
