from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Final

from translate_core.gemini import (
    DEFAULT_SPEECH_MODEL,
    DEFAULT_TRANSLATION_MODEL,
    DEFAULT_VOICE,
    GEMINI_BASE_URL,
    GatewaySettings,
)
from translate_core.languages import find_language, is_valid_target
from translate_core.models import AUTO_DETECT_CODE, HISTORY_LIMIT

CONFIG_DIR_NAME: Final[str] = "gemini-translator"
CONFIG_FILE_NAME: Final[str] = "config.json"
HISTORY_FILE_NAME: Final[str] = "translation_history.json"
DEFAULT_SOURCE_LANG: Final[str] = AUTO_DETECT_CODE
DEFAULT_TARGET_LANG: Final[str] = "es"
DEFAULT_DEBOUNCE_MS: Final[int] = 800
DEFAULT_TIMEOUT_SECONDS: Final[float] = 0.0
API_KEY_ENV_VARS: Final[tuple[str, ...]] = ("GEMINI_API_KEY", "API_KEY")


@dataclass(frozen=True, slots=True)
class LanguageConfig:
    source: str
    target: str


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    base_url: str
    translation_model: str
    speech_model: str
    voice: str
    timeout_seconds: float

    @property
    def timeout(self) -> float | None:
        if self.timeout_seconds <= 0:
            return None
        return self.timeout_seconds


@dataclass(frozen=True, slots=True)
class AppConfig:
    languages: LanguageConfig
    gateway: GatewayConfig
    debounce_ms: int
    history_limit: int

    def gateway_settings(self, api_key: str | None = None) -> GatewaySettings:
        key = api_key if api_key is not None else load_api_key()
        return GatewaySettings(
            api_key=key or "",
            base_url=self.gateway.base_url,
            translation_model=self.gateway.translation_model,
            speech_model=self.gateway.speech_model,
            voice=self.gateway.voice,
        )


def config_dir() -> Path:
    xdg_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_home) if xdg_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME


def config_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


def history_path() -> Path:
    return config_dir() / HISTORY_FILE_NAME


def load_api_key() -> str | None:
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


def load_config(path: Path | None = None) -> AppConfig:
    target = path if path is not None else config_path()
    if not target.exists():
        return default_config()
    try:
        raw_data = target.read_text(encoding="utf-8")
        payload: object = json.loads(raw_data)
    except (OSError, json.JSONDecodeError):
        return default_config()
    return _parse_config(payload)


def save_config(config: AppConfig, path: Path | None = None) -> None:
    target = path if path is not None else config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = _config_to_dict(config)
    data = json.dumps(payload, ensure_ascii=True, indent=2)
    target.write_text(data, encoding="utf-8")


def default_config() -> AppConfig:
    return AppConfig(
        languages=LanguageConfig(
            source=DEFAULT_SOURCE_LANG,
            target=DEFAULT_TARGET_LANG,
        ),
        gateway=GatewayConfig(
            base_url=GEMINI_BASE_URL,
            translation_model=DEFAULT_TRANSLATION_MODEL,
            speech_model=DEFAULT_SPEECH_MODEL,
            voice=DEFAULT_VOICE,
            timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
        ),
        debounce_ms=DEFAULT_DEBOUNCE_MS,
        history_limit=HISTORY_LIMIT,
    )


def _parse_config(payload: object) -> AppConfig:
    payload_dict = _get_dict(payload)
    if payload_dict is None:
        return default_config()
    language_data = _get_dict(payload_dict.get("languages")) or {}
    gateway_data = _get_dict(payload_dict.get("gateway")) or {}

    source = _get_str(language_data.get("source"), DEFAULT_SOURCE_LANG)
    if find_language(source) is None:
        source = DEFAULT_SOURCE_LANG
    target = _get_str(language_data.get("target"), DEFAULT_TARGET_LANG)
    if not is_valid_target(target):
        target = DEFAULT_TARGET_LANG

    gateway = GatewayConfig(
        base_url=_get_str(gateway_data.get("base_url"), GEMINI_BASE_URL),
        translation_model=_get_str(
            gateway_data.get("translation_model"), DEFAULT_TRANSLATION_MODEL
        ),
        speech_model=_get_str(gateway_data.get("speech_model"), DEFAULT_SPEECH_MODEL),
        voice=_get_str(gateway_data.get("voice"), DEFAULT_VOICE),
        timeout_seconds=max(
            _get_float(gateway_data.get("timeout_seconds"), DEFAULT_TIMEOUT_SECONDS),
            0.0,
        ),
    )
    debounce_ms = max(_get_int(payload_dict.get("debounce_ms"), DEFAULT_DEBOUNCE_MS), 0)
    history_limit = _get_int(payload_dict.get("history_limit"), HISTORY_LIMIT)
    history_limit = min(max(history_limit, 1), HISTORY_LIMIT)
    return AppConfig(
        languages=LanguageConfig(source=source, target=target),
        gateway=gateway,
        debounce_ms=debounce_ms,
        history_limit=history_limit,
    )


def _config_to_dict(config: AppConfig) -> dict[str, object]:
    return {
        "languages": {
            "source": config.languages.source,
            "target": config.languages.target,
        },
        "gateway": {
            "base_url": config.gateway.base_url,
            "translation_model": config.gateway.translation_model,
            "speech_model": config.gateway.speech_model,
            "voice": config.gateway.voice,
            "timeout_seconds": config.gateway.timeout_seconds,
        },
        "debounce_ms": config.debounce_ms,
        "history_limit": config.history_limit,
    }


def _get_dict(value: object | None) -> dict[str, object] | None:
    if isinstance(value, dict):
        output: dict[str, object] = {}
        for raw_key, raw_item in value.items():
            if isinstance(raw_key, str):
                output[raw_key] = raw_item
        return output
    return None


def _get_str(value: object | None, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default


def _get_int(value: object | None, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    return default


def _get_float(value: object | None, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default
