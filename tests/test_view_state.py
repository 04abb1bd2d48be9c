from __future__ import annotations

from dataclasses import replace

from translate_core.models import HistoryItem, TranslationResult
from translator_app.application.view_state import (
    TranslationPresenter,
    TranslationViewState,
)
from translator_app.notifications import messages


def _presenter(**changes: object) -> TranslationPresenter:
    presenter = TranslationPresenter()
    for name, value in changes.items():
        getattr(presenter, f"set_{name}")(value)
    return presenter


def test_detected_badge_only_for_auto_source() -> None:
    presenter = _presenter(source_text="Hello")
    presenter.apply_result(TranslationResult("Hola", "en"), ())
    assert presenter.state.show_detected is True

    presenter.set_source_lang("en")
    assert presenter.state.show_detected is False


def test_apply_result_keeps_previous_detection_when_missing() -> None:
    presenter = _presenter(source_text="Hello")
    presenter.apply_result(TranslationResult("Hola", "en"), ())

    state = presenter.apply_result(TranslationResult("Hola!"), ())

    assert state.detected_lang == "en"
    assert state.target_text == "Hola!"


def test_swap_returns_same_state_for_sentinel() -> None:
    presenter = _presenter(source_text="Hello")
    before = presenter.state
    assert presenter.swap() is before


def test_swap_twice_restores_original() -> None:
    presenter = _presenter(source_lang="en", source_text="Hello")
    presenter.apply_result(TranslationResult("Hola"), ())
    original = presenter.state

    presenter.swap()
    restored = presenter.swap()

    assert restored == original


def test_begin_clears_error_and_marks_translating() -> None:
    presenter = TranslationPresenter()
    presenter.mark_error(messages.translation_error())

    state = presenter.begin()

    assert state.translating is True
    assert state.error is None


def test_clear_all_keeps_blocking_error() -> None:
    presenter = _presenter(source_text="Hello")
    presenter.mark_error(messages.configuration_error("API Key is missing"))

    state = presenter.clear_all()

    assert state.source_text == ""
    assert state.error is not None
    assert presenter.dismiss_error().error is not None


def test_restore_ignores_invalid_target() -> None:
    item = HistoryItem(
        id="1",
        source_text="Hallo",
        translated_text="Hello",
        source_lang="de",
        target_lang="auto",
        timestamp=0,
    )
    state = TranslationPresenter(TranslationViewState.initial()).restore(item)

    assert state.source_text == "Hallo"
    assert state.source_lang == "de"
    assert state.target_lang == "es"


def test_swap_requires_catalog_source() -> None:
    presenter = TranslationPresenter(
        replace(TranslationViewState.initial(), source_lang="French")
    )
    before = presenter.state

    assert before.can_swap is False
    assert presenter.swap() is before
    assert presenter.state.target_lang == "es"


def test_restore_maps_non_catalog_source_to_detection() -> None:
    item = HistoryItem(
        id="2",
        source_text="Bonjour",
        translated_text="Hello",
        source_lang="French",
        target_lang="en",
        timestamp=0,
    )
    state = TranslationPresenter().restore(item)

    assert state.source_lang == "auto"
    assert state.target_lang == "en"
    assert state.can_swap is False


def test_set_source_lang_rejects_unknown_code() -> None:
    presenter = TranslationPresenter()
    before = presenter.state
    assert presenter.set_source_lang("French") is before
    assert presenter.set_source_lang("fr").source_lang == "fr"


def test_speech_language_prefers_detection() -> None:
    state = TranslationViewState.initial()
    assert state.speech_lang == "auto"
    presenter = TranslationPresenter(state)
    presenter.apply_result(TranslationResult("Hola", "en"), ())
    assert presenter.state.speech_lang == "en"
