from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from translate_core.languages import find_language, is_valid_target
from translate_core.models import AUTO_DETECT_CODE, HistoryItem, TranslationResult
from translator_app.notifications.models import Notification


@dataclass(frozen=True, slots=True)
class TranslationViewState:
    source_text: str
    target_text: str
    source_lang: str
    target_lang: str
    detected_lang: str | None
    translating: bool
    speaking: bool
    error: Notification | None
    history: tuple[HistoryItem, ...]

    @classmethod
    def initial(
        cls,
        source_lang: str = AUTO_DETECT_CODE,
        target_lang: str = "es",
        history: Sequence[HistoryItem] = (),
    ) -> "TranslationViewState":
        return cls(
            source_text="",
            target_text="",
            source_lang=source_lang,
            target_lang=target_lang,
            detected_lang=None,
            translating=False,
            speaking=False,
            error=None,
            history=tuple(history),
        )

    @property
    def can_swap(self) -> bool:
        return is_valid_target(self.source_lang)

    @property
    def show_detected(self) -> bool:
        return self.detected_lang is not None and self.source_lang == AUTO_DETECT_CODE

    @property
    def speech_lang(self) -> str:
        return self.detected_lang or self.source_lang


@dataclass(slots=True)
class TranslationPresenter:
    _state: TranslationViewState = field(default_factory=TranslationViewState.initial)

    @property
    def state(self) -> TranslationViewState:
        return self._state

    def set_source_text(self, text: str) -> TranslationViewState:
        return self._update(source_text=text)

    def set_source_lang(self, code: str) -> TranslationViewState:
        if find_language(code) is None:
            return self._state
        return self._update(source_lang=code)

    def set_target_lang(self, code: str) -> TranslationViewState:
        if not is_valid_target(code):
            return self._state
        return self._update(target_lang=code)

    def clear_translation(self) -> TranslationViewState:
        return self._update(target_text="", detected_lang=None)

    def begin(self) -> TranslationViewState:
        return self._update(translating=True, error=None)

    def apply_result(
        self, result: TranslationResult, history: Sequence[HistoryItem]
    ) -> TranslationViewState:
        detected = result.detected_language or self._state.detected_lang
        return self._update(
            target_text=result.translated_text,
            detected_lang=detected,
            translating=False,
            history=tuple(history),
        )

    def mark_error(self, notification: Notification) -> TranslationViewState:
        return self._update(translating=False, error=notification)

    def dismiss_error(self) -> TranslationViewState:
        error = self._state.error
        if error is None or not error.dismissible:
            return self._state
        return self._update(error=None)

    def swap(self) -> TranslationViewState:
        state = self._state
        if not state.can_swap:
            return state
        return self._update(
            source_lang=state.target_lang,
            target_lang=state.source_lang,
            source_text=state.target_text,
            target_text=state.source_text,
        )

    def restore(self, item: HistoryItem) -> TranslationViewState:
        # Detected languages may be stored as names rather than catalog codes.
        source = item.source_lang if find_language(item.source_lang) else None
        target = item.target_lang if is_valid_target(item.target_lang) else None
        return self._update(
            source_text=item.source_text,
            source_lang=source or AUTO_DETECT_CODE,
            target_lang=target or self._state.target_lang,
        )

    def clear_all(self) -> TranslationViewState:
        error = self._state.error
        if error is not None and not error.dismissible:
            return self._update(source_text="", target_text="", detected_lang=None)
        return self._update(
            source_text="", target_text="", detected_lang=None, error=None
        )

    def set_speaking(self, speaking: bool) -> TranslationViewState:
        return self._update(speaking=speaking)

    def set_history(self, history: Sequence[HistoryItem]) -> TranslationViewState:
        return self._update(history=tuple(history))

    def _update(self, **changes: object) -> TranslationViewState:
        self._state = replace(self._state, **changes)
        return self._state
