from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass

from translate_core.models import TranslationResult


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    text: str
    source_lang: str
    target_lang: str


@dataclass(slots=True)
class TranslationSession:
    start_translation: Callable[[TranslationRequest], Future[TranslationResult]]
    on_start: Callable[[TranslationRequest], None]
    on_complete: Callable[[TranslationRequest, TranslationResult], None]
    on_error: Callable[[TranslationRequest, BaseException], None]

    def run(self, request: TranslationRequest) -> Future[TranslationResult] | None:
        self.on_start(request)
        try:
            future = self.start_translation(request)
        except Exception as exc:
            self.on_error(request, exc)
            return None

        def handle_done(done: Future[TranslationResult]) -> None:
            self._handle_done(request, done)

        future.add_done_callback(handle_done)
        return future

    def _handle_done(
        self, request: TranslationRequest, future: Future[TranslationResult]
    ) -> None:
        if future.cancelled():
            return
        try:
            result = future.result()
        except Exception as exc:
            self.on_error(request, exc)
            return
        self.on_complete(request, result)
