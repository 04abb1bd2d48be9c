from __future__ import annotations

from concurrent.futures import Future
from typing import Protocol

from translate_core.languages import language_name
from translate_core.models import HistoryItem, TranslationResult
from translator_app.application.history import new_history_item, record_history
from translator_app.application.ports import (
    AudioPlayerPort,
    ClipboardPort,
    HistoryPort,
    SchedulerPort,
    SpeechPort,
    TranslatorPort,
)
from translator_app.application.speech_session import SpeechSession
from translator_app.application.translation_session import (
    TranslationRequest,
    TranslationSession,
)
from translator_app.application.view_state import (
    TranslationPresenter,
    TranslationViewState,
)
from translator_app.config import AppConfig
from translator_app.notifications import messages as notify_messages
from translator_app.notifications.models import Notification
from translator_app import telemetry


class TranslationViewProtocol(Protocol):
    def apply_state(self, state: TranslationViewState) -> None: ...

    def show_banner(self, notification: Notification) -> None: ...


class TranslationController:
    def __init__(
        self,
        *,
        config: AppConfig,
        translator: TranslatorPort,
        speech: SpeechPort,
        player: AudioPlayerPort,
        history: HistoryPort,
        scheduler: SchedulerPort,
        clipboard: ClipboardPort | None = None,
    ) -> None:
        self._config = config
        self._translator = translator
        self._speech = speech
        self._player = player
        self._history = history
        self._scheduler = scheduler
        self._clipboard = clipboard
        self._view: TranslationViewProtocol | None = None
        self._debounce_handle: int | None = None
        self._presenter = TranslationPresenter(
            TranslationViewState.initial(
                source_lang=config.languages.source,
                target_lang=config.languages.target,
                history=history.load()[: config.history_limit],
            )
        )

    @property
    def state(self) -> TranslationViewState:
        return self._presenter.state

    @property
    def is_debouncing(self) -> bool:
        return self._debounce_handle is not None

    def bind_view(self, view: TranslationViewProtocol) -> None:
        self._view = view
        view.apply_state(self._presenter.state)

    def set_source_text(self, text: str) -> None:
        if text == self.state.source_text:
            return
        self._apply_view_state(self._presenter.set_source_text(text))
        self._input_changed()

    def set_source_lang(self, code: str) -> None:
        if code == self.state.source_lang:
            return
        previous = self.state
        state = self._presenter.set_source_lang(code)
        if state is previous:
            return
        self._apply_view_state(state)
        self._input_changed()

    def set_target_lang(self, code: str) -> None:
        if code == self.state.target_lang:
            return
        previous = self.state
        state = self._presenter.set_target_lang(code)
        if state is previous:
            return
        self._apply_view_state(state)
        self._input_changed()

    def swap_languages(self) -> None:
        previous = self.state
        state = self._presenter.swap()
        if state is previous:
            return
        telemetry.log_event(
            "translation.swap", source=state.source_lang, target=state.target_lang
        )
        self._apply_view_state(state)
        self._input_changed()

    def restore_history(self, item: HistoryItem) -> None:
        telemetry.log_event("history.restore", **telemetry.text_meta(item.source_text))
        self._apply_view_state(self._presenter.restore(item))
        self._input_changed()

    def clear_all(self) -> None:
        self._cancel_debounce()
        self._apply_view_state(self._presenter.clear_all())

    def clear_history(self) -> None:
        self._apply_view_state(self._presenter.set_history(()))
        self._history.save(())
        telemetry.log_event("history.clear")
        self._notify(notify_messages.history_cleared())

    def dismiss_error(self) -> None:
        self._apply_view_state(self._presenter.dismiss_error())

    def copy_translation(self) -> None:
        text = self.state.target_text
        if not text or self._clipboard is None:
            return
        self._clipboard.copy_text(text)
        self._notify(notify_messages.copy_success())

    def speak_source(self) -> None:
        state = self.state
        self.speak(state.source_text, state.speech_lang)

    def speak_target(self) -> None:
        state = self.state
        self.speak(state.target_text, state.target_lang)

    def speak(self, text: str, lang_code: str) -> None:
        if not text or self.state.speaking:
            return
        self._apply_view_state(self._presenter.set_speaking(True))
        telemetry.log_event("speech.start", lang=lang_code, **telemetry.text_meta(text))
        session = SpeechSession(
            synthesize=self._speech.synthesize,
            play=self._player.play,
            on_finished=self._on_speech_finished,
        )
        session.run(text, language_name(lang_code))

    def close(self) -> None:
        self._cancel_debounce()

    def _input_changed(self) -> None:
        self._cancel_debounce()
        if not self.state.source_text:
            self._apply_view_state(self._presenter.clear_translation())
            return
        self._debounce_handle = self._scheduler.call_later(
            self._config.debounce_ms, self._on_debounce_elapsed
        )

    def _cancel_debounce(self) -> None:
        if self._debounce_handle is None:
            return
        self._scheduler.cancel(self._debounce_handle)
        self._debounce_handle = None

    def _on_debounce_elapsed(self) -> None:
        self._debounce_handle = None
        state = self.state
        if not state.source_text.strip():
            self._apply_view_state(self._presenter.clear_translation())
            return
        request = TranslationRequest(
            text=state.source_text,
            source_lang=state.source_lang,
            target_lang=state.target_lang,
        )
        self._build_session().run(request)

    def _build_session(self) -> TranslationSession:
        def on_start(request: TranslationRequest) -> None:
            telemetry.log_event(
                "translation.start",
                source=request.source_lang,
                target=request.target_lang,
                **telemetry.text_meta(request.text),
            )
            self._apply_view_state(self._presenter.begin())

        def on_complete(request: TranslationRequest, result: TranslationResult) -> None:
            self._scheduler.idle_add(
                lambda: self._apply_translation_result(request, result)
            )

        def on_error(request: TranslationRequest, exc: BaseException) -> None:
            self._scheduler.idle_add(
                lambda: self._apply_translation_error(request, exc)
            )

        def start_translation(
            request: TranslationRequest,
        ) -> Future[TranslationResult]:
            return self._translator.translate(
                request.text, request.source_lang, request.target_lang
            )

        return TranslationSession(
            start_translation=start_translation,
            on_start=on_start,
            on_complete=on_complete,
            on_error=on_error,
        )

    def _apply_translation_result(
        self, request: TranslationRequest, result: TranslationResult
    ) -> None:
        history = self.state.history
        if request.text.strip():
            item = new_history_item(
                request.text, result, request.source_lang, request.target_lang
            )
            history = record_history(history, item, self._config.history_limit)
            self._history.save(history)
        telemetry.log_event(
            "translation.complete",
            detected=result.detected_language,
            history_size=len(history),
            **telemetry.text_meta(result.translated_text),
        )
        self._apply_view_state(self._presenter.apply_result(result, history))

    def _apply_translation_error(
        self, request: TranslationRequest, exc: BaseException
    ) -> None:
        telemetry.log_error(
            "translation.error",
            exc,
            source=request.source_lang,
            target=request.target_lang,
        )
        self._apply_view_state(
            self._presenter.mark_error(notify_messages.translation_error(exc))
        )

    def _on_speech_finished(self, exc: BaseException | None) -> None:
        if exc is not None:
            telemetry.log_error("speech.error", exc)
        self._scheduler.idle_add(self._finish_speaking)

    def _finish_speaking(self) -> None:
        self._apply_view_state(self._presenter.set_speaking(False))

    def _apply_view_state(self, state: TranslationViewState) -> None:
        if self._view is not None:
            self._view.apply_state(state)

    def _notify(self, notification: Notification) -> None:
        if self._view is None:
            return
        self._view.show_banner(notification)

