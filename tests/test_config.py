from __future__ import annotations

import json
from pathlib import Path

import pytest

from translator_app.config import (
    config_path,
    default_config,
    history_path,
    load_api_key,
    load_config,
    save_config,
)


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / "absent.json")

    assert config == default_config()
    assert config.languages.source == "auto"
    assert config.languages.target == "es"
    assert config.debounce_ms == 800
    assert config.history_limit == 50
    assert config.gateway.timeout is None


def test_corrupt_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{oops", encoding="utf-8")
    assert load_config(path) == default_config()


def test_invalid_fields_fall_back(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.json",
        {
            "languages": {"source": "xx", "target": "auto"},
            "gateway": {"voice": 7, "timeout_seconds": -3},
            "debounce_ms": "fast",
            "history_limit": 500,
        },
    )

    config = load_config(path)

    assert config.languages.source == "auto"
    assert config.languages.target == "es"
    assert config.gateway.voice == "Kore"
    assert config.gateway.timeout_seconds == 0.0
    assert config.debounce_ms == 800
    assert config.history_limit == 50


def test_valid_fields_are_kept(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "config.json",
        {
            "languages": {"source": "en", "target": "ja"},
            "gateway": {"translation_model": "gemini-custom", "timeout_seconds": 12},
            "debounce_ms": 300,
            "history_limit": 0,
        },
    )

    config = load_config(path)

    assert config.languages.source == "en"
    assert config.languages.target == "ja"
    assert config.gateway.translation_model == "gemini-custom"
    assert config.gateway.timeout == 12.0
    assert config.debounce_ms == 300
    assert config.history_limit == 1


def test_save_then_load(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    config = default_config()

    save_config(config, path)

    assert load_config(path) == config
    assert "api_key" not in path.read_text(encoding="utf-8")


def test_paths_follow_xdg_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert config_path() == tmp_path / "gemini-translator" / "config.json"
    assert history_path() == tmp_path / "gemini-translator" / "translation_history.json"


def test_api_key_prefers_gemini_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    assert load_api_key() is None

    monkeypatch.setenv("API_KEY", "fallback")
    assert load_api_key() == "fallback"

    monkeypatch.setenv("GEMINI_API_KEY", " primary ")
    assert load_api_key() == "primary"
    assert default_config().gateway_settings().api_key == "primary"
