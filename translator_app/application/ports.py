from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future
from typing import Protocol

from translate_core.audio import AudioBuffer
from translate_core.models import HistoryItem, TranslationResult


class TranslatorPort(Protocol):
    def translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> Future[TranslationResult]: ...


class SpeechPort(Protocol):
    def synthesize(self, text: str, language_name: str) -> Future[bytes | None]: ...


class AudioPlayerPort(Protocol):
    def play(self, buffer: AudioBuffer) -> Future[None]: ...


class HistoryPort(Protocol):
    def load(self) -> tuple[HistoryItem, ...]: ...

    def save(self, items: Sequence[HistoryItem]) -> None: ...


class SchedulerPort(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int: ...

    def cancel(self, handle: int) -> None: ...

    def idle_add(self, callback: Callable[[], None]) -> None: ...


class ClipboardPort(Protocol):
    def copy_text(self, text: str) -> None: ...
