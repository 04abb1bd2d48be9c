from __future__ import annotations

from pathlib import Path

import pytest


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    # Pytest uses exit code 5 when no tests are collected; treat it as success.
    if exitstatus == 5:
        session.exitstatus = 0


def pytest_ignore_collect(collection_path: Path, config: pytest.Config) -> bool:
    del config
    ignored_parts = {".venv", "__pycache__", "build", "dist"}
    return any(part in collection_path.parts for part in ignored_parts)


@pytest.fixture(autouse=True)
def _isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("TRANSLATOR_LOGGING", "0")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
