from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future
from dataclasses import replace

from translate_core.audio import AudioBuffer
from translate_core.errors import FetchError, MissingApiKeyError
from translate_core.models import HistoryItem, TranslationResult
from translator_app.application.view_state import TranslationViewState
from translator_app.config import AppConfig, default_config
from translator_app.controllers.translation_controller import TranslationController
from translator_app.notifications.models import Notification


class FakeScheduler:
    def __init__(self) -> None:
        self.timers: dict[int, tuple[int, Callable[[], None]]] = {}
        self._next_handle = 0

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next_handle += 1
        self.timers[self._next_handle] = (delay_ms, callback)
        return self._next_handle

    def cancel(self, handle: int) -> None:
        self.timers.pop(handle, None)

    def idle_add(self, callback: Callable[[], None]) -> None:
        callback()

    def fire_all(self) -> None:
        pending = list(self.timers.items())
        self.timers.clear()
        for _handle, (_delay, callback) in pending:
            callback()


class FakeTranslator:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self.pending: list[Future[TranslationResult]] = []
        self.result: TranslationResult | None = TranslationResult("Hola", "en")
        self.error: BaseException | None = None

    def translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> Future[TranslationResult]:
        self.calls.append((text, source_lang, target_lang))
        future: Future[TranslationResult] = Future()
        if self.error is not None:
            future.set_exception(self.error)
        elif self.result is not None:
            future.set_result(self.result)
        else:
            self.pending.append(future)
        return future


class FakeSpeech:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.pending: list[Future[bytes | None]] = []

    def synthesize(self, text: str, language_name: str) -> Future[bytes | None]:
        self.calls.append((text, language_name))
        future: Future[bytes | None] = Future()
        self.pending.append(future)
        return future


class FakePlayer:
    def __init__(self) -> None:
        self.buffers: list[AudioBuffer] = []

    def play(self, buffer: AudioBuffer) -> Future[None]:
        self.buffers.append(buffer)
        future: Future[None] = Future()
        future.set_result(None)
        return future


class FakeHistory:
    def __init__(self, items: Sequence[HistoryItem] = ()) -> None:
        self.items = tuple(items)
        self.saves: list[tuple[HistoryItem, ...]] = []

    def load(self) -> tuple[HistoryItem, ...]:
        return self.items

    def save(self, items: Sequence[HistoryItem]) -> None:
        self.saves.append(tuple(items))


class FakeClipboard:
    def __init__(self) -> None:
        self.texts: list[str] = []

    def copy_text(self, text: str) -> None:
        self.texts.append(text)


class FakeView:
    def __init__(self) -> None:
        self.states: list[TranslationViewState] = []
        self.banners: list[Notification] = []

    def apply_state(self, state: TranslationViewState) -> None:
        self.states.append(state)

    def show_banner(self, notification: Notification) -> None:
        self.banners.append(notification)


class Harness:
    def __init__(
        self,
        config: AppConfig | None = None,
        history: Sequence[HistoryItem] = (),
    ) -> None:
        self.scheduler = FakeScheduler()
        self.translator = FakeTranslator()
        self.speech = FakeSpeech()
        self.player = FakePlayer()
        self.history = FakeHistory(history)
        self.clipboard = FakeClipboard()
        self.view = FakeView()
        self.controller = TranslationController(
            config=config or default_config(),
            translator=self.translator,
            speech=self.speech,
            player=self.player,
            history=self.history,
            scheduler=self.scheduler,
            clipboard=self.clipboard,
        )
        self.controller.bind_view(self.view)


def _item(text: str) -> HistoryItem:
    return HistoryItem(
        id=f"id-{text}",
        source_text=text,
        translated_text=f"{text}!",
        source_lang="fr",
        target_lang="de",
        timestamp=1,
    )


def test_initial_state_defaults() -> None:
    harness = Harness()
    state = harness.controller.state

    assert state.source_lang == "auto"
    assert state.target_lang == "es"
    assert state.source_text == ""
    assert state.translating is False
    assert harness.view.states[-1] == state


def test_debounce_sends_only_last_value() -> None:
    harness = Harness()

    for text in ("H", "He", "Hel", "Hello"):
        harness.controller.set_source_text(text)

    assert harness.translator.calls == []
    assert len(harness.scheduler.timers) == 1
    delay, _callback = next(iter(harness.scheduler.timers.values()))
    assert delay == 800

    harness.scheduler.fire_all()

    assert harness.translator.calls == [("Hello", "auto", "es")]


def test_hello_translates_to_hola_with_detection_and_history() -> None:
    harness = Harness()

    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    state = harness.controller.state
    assert state.target_text == "Hola"
    assert state.detected_lang == "en"
    assert state.show_detected is True
    assert state.translating is False
    assert len(state.history) == 1
    entry = state.history[0]
    assert entry.source_text == "Hello"
    assert entry.translated_text == "Hola"
    assert entry.source_lang == "en"
    assert entry.target_lang == "es"
    assert harness.history.saves[-1] == state.history


def test_translating_flag_is_set_while_request_is_in_flight() -> None:
    harness = Harness()
    harness.translator.result = None

    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    assert harness.controller.state.translating is True
    harness.translator.pending[0].set_result(TranslationResult("Hola"))
    assert harness.controller.state.translating is False
    assert harness.controller.state.target_text == "Hola"


def test_clearing_source_cancels_and_clears_target() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.controller.set_source_text("Hello again")
    harness.controller.set_source_text("")

    assert harness.scheduler.timers == {}
    assert len(harness.translator.calls) == 1
    state = harness.controller.state
    assert state.target_text == ""
    assert state.detected_lang is None


def test_whitespace_source_never_reaches_gateway() -> None:
    harness = Harness()

    harness.controller.set_source_text("   ")
    harness.scheduler.fire_all()

    assert harness.translator.calls == []
    assert harness.controller.state.target_text == ""
    assert harness.history.saves == []


def test_language_change_retranslates() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.controller.set_target_lang("fr")
    harness.scheduler.fire_all()

    assert harness.translator.calls[-1] == ("Hello", "auto", "fr")


def test_invalid_target_is_ignored() -> None:
    harness = Harness()

    harness.controller.set_target_lang("auto")

    assert harness.controller.state.target_lang == "es"
    assert harness.scheduler.timers == {}


def test_error_keeps_previous_translation() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.translator.error = FetchError("Service unavailable")
    harness.controller.set_source_text("Hello world")
    harness.scheduler.fire_all()

    state = harness.controller.state
    assert state.target_text == "Hola"
    assert state.translating is False
    assert state.error is not None
    assert state.error.message == "Service unavailable"
    assert state.error.dismissible is True
    assert len(state.history) == 1

    harness.controller.dismiss_error()
    assert harness.controller.state.error is None


def test_error_without_message_uses_fallback_text() -> None:
    harness = Harness()
    harness.translator.error = RuntimeError()

    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    error = harness.controller.state.error
    assert error is not None
    assert error.message == "Translation failed. Please try again."


def test_missing_api_key_is_not_dismissible() -> None:
    harness = Harness()
    harness.translator.error = MissingApiKeyError()

    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()
    harness.controller.dismiss_error()

    error = harness.controller.state.error
    assert error is not None
    assert error.dismissible is False
    assert "GEMINI_API_KEY" in error.message


def test_next_request_clears_previous_error() -> None:
    harness = Harness()
    harness.translator.error = FetchError("offline")
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.translator.error = None
    harness.controller.set_source_text("Hello!")
    harness.scheduler.fire_all()

    assert harness.controller.state.error is None


def test_swap_is_noop_while_detecting() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()
    states_before = len(harness.view.states)

    harness.controller.swap_languages()

    assert len(harness.view.states) == states_before
    assert harness.controller.state.source_lang == "auto"
    assert harness.scheduler.timers == {}


def test_swap_exchanges_languages_and_texts() -> None:
    harness = Harness()
    harness.controller.set_source_lang("en")
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.controller.swap_languages()

    state = harness.controller.state
    assert (state.source_lang, state.target_lang) == ("es", "en")
    assert (state.source_text, state.target_text) == ("Hola", "Hello")
    harness.scheduler.fire_all()
    assert harness.translator.calls[-1] == ("Hola", "es", "en")


def test_restored_language_name_never_becomes_target() -> None:
    entry = HistoryItem(
        id="x",
        source_text="Bonjour",
        translated_text="Hello",
        source_lang="French",
        target_lang="en",
        timestamp=1,
    )
    harness = Harness(history=(entry,))

    harness.controller.restore_history(entry)
    harness.controller.swap_languages()

    state = harness.controller.state
    assert state.source_lang == "auto"
    assert state.target_lang == "en"
    assert state.can_swap is False
    harness.scheduler.fire_all()
    assert harness.translator.calls == [("Bonjour", "auto", "en")]


def test_unknown_source_language_is_ignored() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.controller.set_source_lang("French")

    assert harness.controller.state.source_lang == "auto"
    assert harness.scheduler.timers == {}


def test_restore_history_populates_inputs_and_retranslates() -> None:
    harness = Harness(history=(_item("Bonjour"),))

    harness.controller.restore_history(harness.controller.state.history[0])

    state = harness.controller.state
    assert state.source_text == "Bonjour"
    assert state.source_lang == "fr"
    assert state.target_lang == "de"
    harness.scheduler.fire_all()
    assert harness.translator.calls == [("Bonjour", "fr", "de")]


def test_history_is_deduplicated_newest_first() -> None:
    harness = Harness(history=(_item("Hello"), _item("World")))

    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    texts = [entry.source_text for entry in harness.controller.state.history]
    assert texts == ["Hello", "World"]
    assert harness.controller.state.history[0].translated_text == "Hola"


def test_history_limit_comes_from_config() -> None:
    config = replace(default_config(), history_limit=2)
    harness = Harness(config=config, history=(_item("a"), _item("b"), _item("c")))

    assert len(harness.controller.state.history) == 2
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()
    assert [e.source_text for e in harness.controller.state.history] == ["Hello", "a"]


def test_clear_history_persists_empty_list() -> None:
    harness = Harness(history=(_item("a"),))

    harness.controller.clear_history()

    assert harness.controller.state.history == ()
    assert harness.history.saves[-1] == ()
    assert harness.view.banners[-1].message == "History cleared."


def test_clear_all_resets_text_and_pending_timer() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    assert harness.controller.is_debouncing is True

    harness.controller.clear_all()

    assert harness.controller.is_debouncing is False
    assert harness.controller.state.source_text == ""
    assert harness.translator.calls == []


def test_copy_translation_uses_clipboard() -> None:
    harness = Harness()
    harness.controller.copy_translation()
    assert harness.clipboard.texts == []

    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()
    harness.controller.copy_translation()

    assert harness.clipboard.texts == ["Hola"]
    assert harness.view.banners[-1].message == "Copied to clipboard."


def test_speak_guard_and_flag_reset() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.controller.speak_target()
    harness.controller.speak_target()

    assert harness.controller.state.speaking is True
    assert harness.speech.calls == [("Hola", "Spanish")]

    harness.speech.pending[0].set_result(b"\x00\x00\x00\x40")

    assert harness.controller.state.speaking is False
    assert harness.player.buffers[0].channel(0).tolist() == [0.0, 0.5]


def test_speak_source_uses_detected_language() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")
    harness.scheduler.fire_all()

    harness.controller.speak_source()

    assert harness.speech.calls == [("Hello", "English")]


def test_speak_source_without_detection_uses_catalog_name() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")

    harness.controller.speak_source()

    assert harness.speech.calls == [("Hello", "Detect Language")]


def test_speak_ignores_empty_text() -> None:
    harness = Harness()
    harness.controller.speak_target()
    assert harness.speech.calls == []
    assert harness.controller.state.speaking is False


def test_speech_failure_only_resets_flag() -> None:
    harness = Harness()

    harness.controller.speak("Hola", "es")
    harness.speech.pending[0].set_result(None)

    state = harness.controller.state
    assert state.speaking is False
    assert state.error is None
    assert harness.player.buffers == []


def test_close_cancels_pending_debounce() -> None:
    harness = Harness()
    harness.controller.set_source_text("Hello")

    harness.controller.close()

    assert harness.scheduler.timers == {}
