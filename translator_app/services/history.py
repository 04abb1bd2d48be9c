from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import json
import logging
from pathlib import Path

from translate_core.models import HISTORY_LIMIT, HistoryItem

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HistoryStore:
    """One JSON file holding the whole history list, newest first."""

    path: Path
    max_entries: int = HISTORY_LIMIT

    def load(self) -> tuple[HistoryItem, ...]:
        try:
            raw_data = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return ()
        except OSError:
            logger.warning("failed to read history from %s", self.path, exc_info=True)
            return ()
        try:
            payload: object = json.loads(raw_data)
        except json.JSONDecodeError:
            logger.warning("history file %s is corrupt, starting empty", self.path)
            return ()
        if not isinstance(payload, list):
            return ()
        items: list[HistoryItem] = []
        seen: set[str] = set()
        for entry in payload:
            if not isinstance(entry, dict):
                continue
            item = HistoryItem.from_dict(entry)
            if item is None or item.source_text in seen:
                continue
            seen.add(item.source_text)
            items.append(item)
            if len(items) >= self.max_entries:
                break
        return tuple(items)

    def save(self, items: Sequence[HistoryItem]) -> None:
        payload = [item.to_dict() for item in items[: self.max_entries]]
        data = json.dumps(payload, ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(data, encoding="utf-8")
        except OSError:
            logger.warning("failed to write history to %s", self.path, exc_info=True)
