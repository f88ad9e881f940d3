from __future__ import annotations

import json

import pytest

from core.config import DEFAULT_CONFIG, ConfigError, load_config
from core.validator import validate_config, validate_semantic, validate_syntactic


def _write(tmp_path, data) -> str:
    path = tmp_path / "config.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return str(path)


def test_defaults():
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config["top_words"] == 100
    assert config["top_pairs"] == 10
    assert set(config["stop_words"]) == {"A", "AND", "AN", "OF", "IN", "THE"}


def test_file_and_overrides_merge(tmp_path):
    path = _write(tmp_path, {"top_words": 50, "top_pairs": 3})
    config = load_config(path, {"top_pairs": 5, "workers": None})
    assert config["top_words"] == 50
    assert config["top_pairs"] == 5
    assert config["workers"] == 1


def test_invalid_override_rejected():
    with pytest.raises(ConfigError) as exc:
        load_config(None, {"top_words": 0})
    assert "'top_words' must be a positive integer" in exc.value.errors[0]


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "missing.json"))


@pytest.mark.parametrize(
    "config, fragment",
    [
        ({"top_words": -1}, "top_words"),
        ({"top_pairs": "10"}, "top_pairs"),
        ({"workers": True}, "workers"),
        ({"stop_words": "the"}, "stop_words"),
        ({"stop_words": ["the", 3]}, "stop_words"),
        ({"extension": ""}, "extension"),
        ({"topwords": 5}, "Unknown config keys"),
    ],
)
def test_syntactic_errors(config, fragment):
    errors = validate_syntactic(config)
    assert any(fragment in e for e in errors)


def test_syntactic_rejects_non_object():
    assert validate_syntactic([1, 2]) == ["Config must be a JSON object."]


def test_semantic_flags_stop_words_without_letters():
    errors = validate_semantic({"stop_words": ["the", "--"]})
    assert len(errors) == 1
    assert "'--'" in errors[0]


def test_many_workers_are_not_a_config_error():
    assert load_config(None, {"workers": 10_000})["workers"] == 10_000


@pytest.mark.parametrize("key", ["stop_words", "extension", "top_words"])
def test_explicit_null_rejected(key):
    errors = validate_syntactic({key: None})
    assert len(errors) == 1
    assert key in errors[0]


def test_semantic_tolerates_missing_stop_words():
    assert validate_semantic({}) == []


def test_null_in_file_raises_config_error(tmp_path):
    with pytest.raises(ConfigError, match="stop_words"):
        load_config(_write(tmp_path, {"stop_words": None}))


def test_unreadable_config_path(tmp_path):
    with pytest.raises(ConfigError, match="Could not read config file"):
        load_config(str(tmp_path))

    passed, errors = validate_config(str(tmp_path))
    assert not passed
    assert errors[0].startswith("Could not read config file")


def test_non_utf8_config(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"extension": ".t\xe9xt"}')
    passed, errors = validate_config(str(path))
    assert not passed
    assert errors[0].startswith("Could not read config file")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_validate_config_file(tmp_path):
    assert validate_config(_write(tmp_path, {"top_words": 20})) == (True, [])

    passed, errors = validate_config(_write(tmp_path, "{not json"))
    assert not passed
    assert errors[0].startswith("Invalid JSON")

    passed, errors = validate_config(str(tmp_path / "nope.json"))
    assert not passed
    assert "not found" in errors[0]
