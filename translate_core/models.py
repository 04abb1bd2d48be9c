from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

AUTO_DETECT_CODE: Final[str] = "auto"
HISTORY_LIMIT: Final[int] = 50


@dataclass(frozen=True, slots=True)
class Language:
    code: str
    name: str
    native_name: str

    @property
    def is_auto(self) -> bool:
        return self.code == AUTO_DETECT_CODE


@dataclass(frozen=True, slots=True)
class TranslationResult:
    translated_text: str
    detected_language: str | None = None
    pronunciation: str | None = None
    alternatives: tuple[str, ...] = ()

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> "TranslationResult":
        alternatives = payload.get("alternatives")
        return cls(
            translated_text=_get_str(payload.get("translatedText")) or "",
            detected_language=_get_str(payload.get("detectedLanguage")),
            pronunciation=_get_str(payload.get("pronunciation")),
            alternatives=tuple(
                item for item in _as_list(alternatives) if isinstance(item, str)
            ),
        )


@dataclass(frozen=True, slots=True)
class HistoryItem:
    id: str
    source_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    timestamp: int

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "sourceText": self.source_text,
            "translatedText": self.translated_text,
            "sourceLang": self.source_lang,
            "targetLang": self.target_lang,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "HistoryItem | None":
        item_id = _get_str(payload.get("id"))
        source_text = _get_str(payload.get("sourceText"))
        translated_text = _get_str(payload.get("translatedText"))
        source_lang = _get_str(payload.get("sourceLang"))
        target_lang = _get_str(payload.get("targetLang"))
        timestamp = payload.get("timestamp")
        if (
            item_id is None
            or source_text is None
            or translated_text is None
            or source_lang is None
            or target_lang is None
        ):
            return None
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return None
        return cls(
            id=item_id,
            source_text=source_text,
            translated_text=translated_text,
            source_lang=source_lang,
            target_lang=target_lang,
            timestamp=int(timestamp),
        )


def _get_str(value: object | None) -> str | None:
    if isinstance(value, str):
        return value
    return None


def _as_list(value: object | None) -> list[object]:
    if isinstance(value, list):
        return value
    return []
