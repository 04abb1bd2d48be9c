from __future__ import annotations

from collections.abc import Sequence
import time
import uuid

from translate_core.models import HISTORY_LIMIT, HistoryItem, TranslationResult


def new_history_item(
    source_text: str,
    result: TranslationResult,
    source_lang: str,
    target_lang: str,
    *,
    timestamp_ms: int | None = None,
) -> HistoryItem:
    """Project a finished translation into a history entry.

    The detected language, when the gateway reported one, replaces the
    requested source language so auto-detected entries keep a concrete code.
    """
    return HistoryItem(
        id=uuid.uuid4().hex[:9],
        source_text=source_text,
        translated_text=result.translated_text,
        source_lang=result.detected_language or source_lang,
        target_lang=target_lang,
        timestamp=timestamp_ms if timestamp_ms is not None else _now_ms(),
    )


def record_history(
    items: Sequence[HistoryItem],
    item: HistoryItem,
    limit: int = HISTORY_LIMIT,
) -> tuple[HistoryItem, ...]:
    kept = [entry for entry in items if entry.source_text != item.source_text]
    return tuple([item, *kept][: max(limit, 0)])


def _now_ms() -> int:
    return int(time.time() * 1000)
