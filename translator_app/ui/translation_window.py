from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
import importlib

from translate_core.models import HistoryItem
from translator_app.application.view_state import TranslationViewState
from translator_app.notifications.banner import BannerHost
from translator_app.notifications.models import Notification
from translator_app.ui.language_picker import LanguagePickerWidget
from translator_app.ui.theme import apply_theme

gi = importlib.import_module("gi")
require_version = getattr(gi, "require_version", None)
if callable(require_version):
    require_version("Gdk", "4.0")
    require_version("Gtk", "4.0")
Gdk = importlib.import_module("gi.repository.Gdk")
Gtk = importlib.import_module("gi.repository.Gtk")

APP_TITLE = "Gemini Translator"
SOURCE_PLACEHOLDER = "Type or paste text to translate..."


class TranslationWindow:
    def __init__(
        self,
        *,
        app: object,
        state: TranslationViewState,
        on_source_text: Callable[[str], None],
        on_source_lang: Callable[[str], None],
        on_target_lang: Callable[[str], None],
        on_swap: Callable[[], None],
        on_speak_source: Callable[[], None],
        on_speak_target: Callable[[], None],
        on_copy: Callable[[], None],
        on_clear: Callable[[], None],
        on_dismiss_error: Callable[[], None],
        on_history_select: Callable[[HistoryItem], None],
        on_clear_history: Callable[[], None],
        on_close: Callable[[], None],
    ) -> None:
        self._on_source_text = on_source_text
        self._on_history_select = on_history_select
        self._on_close_cb = on_close
        self._syncing_source = False

        window = Gtk.ApplicationWindow(application=app)
        window.set_title(APP_TITLE)
        window.set_default_size(960, 720)
        window.connect("close-request", self._handle_close_request)
        controller = Gtk.EventControllerKey()
        controller.connect("key-pressed", self._handle_key_pressed)
        window.add_controller(controller)

        root = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        root.set_margin_top(16)
        root.set_margin_bottom(16)
        root.set_margin_start(16)
        root.set_margin_end(16)

        self._error_banner = BannerHost(on_dismiss=on_dismiss_error)
        self._flash_banner = BannerHost()

        self._source_picker = LanguagePickerWidget(
            selected_code=state.source_lang, on_change=on_source_lang
        )
        self._target_picker = LanguagePickerWidget(
            selected_code=state.target_lang, on_change=on_target_lang, exclude_auto=True
        )
        self._detected_label = Gtk.Label(label="")
        self._detected_label.add_css_class("detected")
        self._detected_label.set_visible(False)

        self._swap_button = Gtk.Button(label="⇄")
        self._swap_button.set_tooltip_text("Swap Languages")
        self._swap_button.connect("clicked", lambda _button: on_swap())

        self._source_buffer = Gtk.TextBuffer()
        self._source_buffer.connect("changed", self._handle_source_changed)
        source_view = Gtk.TextView(buffer=self._source_buffer)
        source_view.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
        source_view.set_vexpand(True)
        source_view.set_tooltip_text(SOURCE_PLACEHOLDER)
        source_scroller = Gtk.ScrolledWindow()
        source_scroller.set_min_content_height(240)
        source_scroller.set_child(source_view)

        self._clear_button = Gtk.Button(label="Clear")
        self._clear_button.connect("clicked", lambda _button: on_clear())
        self._speak_source_button = Gtk.Button(label="Listen")
        self._speak_source_button.connect("clicked", lambda _button: on_speak_source())

        self._target_label = Gtk.Label(label="")
        self._target_label.set_xalign(0.0)
        self._target_label.set_yalign(0.0)
        self._target_label.set_wrap(True)
        self._target_label.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
        self._target_label.set_selectable(True)
        self._target_label.set_vexpand(True)
        self._target_label.add_css_class("target-text")
        target_scroller = Gtk.ScrolledWindow()
        target_scroller.set_min_content_height(240)
        target_scroller.set_child(self._target_label)

        self._copy_button = Gtk.Button(label="Copy")
        self._copy_button.connect("clicked", lambda _button: on_copy())
        self._speak_target_button = Gtk.Button(label="Listen")
        self._speak_target_button.connect("clicked", lambda _button: on_speak_target())

        source_header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        source_header.append(self._source_picker.widget)
        source_header.append(self._detected_label)
        source_actions = _actions_row(self._clear_button, self._speak_source_button)
        source_panel = _panel(source_header, source_scroller, source_actions)

        target_header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        target_header.append(self._target_picker.widget)
        target_header.append(self._swap_button)
        target_actions = _actions_row(self._copy_button, self._speak_target_button)
        target_panel = _panel(target_header, target_scroller, target_actions)
        target_panel.add_css_class("panel-target")

        panels = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=16)
        panels.set_homogeneous(True)
        panels.append(source_panel)
        panels.append(target_panel)

        self._history_title = Gtk.Label(label="Recent Translations")
        self._history_title.set_xalign(0.0)
        self._history_title.set_hexpand(True)
        self._history_title.add_css_class("history-title")
        clear_history = Gtk.Button(label="Clear History")
        clear_history.add_css_class("flat")
        clear_history.connect("clicked", lambda _button: on_clear_history())
        history_header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        history_header.append(self._history_title)
        history_header.append(clear_history)

        self._history_list = Gtk.ListBox()
        self._history_list.set_selection_mode(Gtk.SelectionMode.NONE)
        self._history_list.set_activate_on_single_click(True)
        self._history_list.connect("row-activated", self._handle_history_activated)
        history_scroller = Gtk.ScrolledWindow()
        history_scroller.set_min_content_height(180)
        history_scroller.set_vexpand(True)
        history_scroller.set_child(self._history_list)

        self._history_section = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=8)
        self._history_section.append(Gtk.Separator(orientation=Gtk.Orientation.HORIZONTAL))
        self._history_section.append(history_header)
        self._history_section.append(history_scroller)

        root.append(self._flash_banner.widget)
        root.append(panels)
        root.append(self._error_banner.widget)
        root.append(self._history_section)
        window.set_child(root)
        apply_theme()

        self._window = window
        self._history_items: tuple[HistoryItem, ...] = ()
        self._rendered_state: TranslationViewState | None = None
        self.apply_state(state)

    @property
    def window(self) -> object:
        return self._window

    def present(self) -> None:
        self._window.present()

    def apply_state(self, state: TranslationViewState) -> None:
        if state == self._rendered_state:
            return
        self._sync_source_text(state.source_text)
        self._source_picker.set_selected(state.source_lang)
        self._target_picker.set_selected(state.target_lang)
        self._detected_label.set_visible(state.show_detected)
        self._detected_label.set_text(
            f"DETECTED: {state.detected_lang.upper()}" if state.detected_lang else ""
        )
        self._swap_button.set_sensitive(state.can_swap)
        self._clear_button.set_visible(bool(state.source_text))
        self._speak_source_button.set_sensitive(
            bool(state.source_text) and not state.speaking
        )
        self._render_target(state)
        if state.error is None:
            self._error_banner.clear()
        else:
            self._error_banner.show_sticky(state.error)
        if self._rendered_state is None or state.history != self._history_items:
            self._render_history(state.history)
        self._rendered_state = state

    def show_banner(self, notification: Notification) -> None:
        self._flash_banner.flash(notification)

    def _render_target(self, state: TranslationViewState) -> None:
        label = self._target_label
        label.remove_css_class("placeholder")
        if state.translating and not state.target_text:
            label.set_text("Translating...")
            label.add_css_class("placeholder")
        elif state.target_text:
            label.set_text(state.target_text)
        else:
            label.set_text("Translation")
            label.add_css_class("placeholder")
        label.set_opacity(0.6 if state.translating else 1.0)
        has_target = bool(state.target_text)
        self._copy_button.set_visible(has_target)
        self._speak_target_button.set_visible(has_target)
        self._speak_target_button.set_sensitive(not state.speaking)

    def _render_history(self, items: tuple[HistoryItem, ...]) -> None:
        child = self._history_list.get_first_child()
        while child is not None:
            next_child = child.get_next_sibling()
            self._history_list.remove(child)
            child = next_child
        for item in items:
            self._history_list.append(_history_row(item))
        self._history_items = items
        self._history_section.set_visible(bool(items))

    def _sync_source_text(self, text: str) -> None:
        start, end = self._source_buffer.get_bounds()
        if self._source_buffer.get_text(start, end, False) == text:
            return
        self._syncing_source = True
        try:
            self._source_buffer.set_text(text)
        finally:
            self._syncing_source = False

    def _handle_source_changed(self, buffer: object) -> None:
        if self._syncing_source:
            return
        start, end = buffer.get_bounds()  # type: ignore[attr-defined]
        self._on_source_text(buffer.get_text(start, end, False))  # type: ignore[attr-defined]

    def _handle_history_activated(self, _list_box: object, row: object) -> None:
        index = row.get_index()  # type: ignore[attr-defined]
        if 0 <= index < len(self._history_items):
            self._on_history_select(self._history_items[index])

    def _handle_close_request(self, _window: object) -> bool:
        self._on_close_cb()
        return False

    def _handle_key_pressed(
        self, _controller: object, keyval: int, _keycode: int, _state: int
    ) -> bool:
        if keyval == Gdk.KEY_Escape:
            self._error_banner.clear()
            self._flash_banner.clear()
            return True
        return False


def _panel(*children: object) -> object:
    box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=8)
    box.add_css_class("panel")
    for child in children:
        box.append(child)
    return box


def _actions_row(*buttons: object) -> object:
    row = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
    row.set_halign(Gtk.Align.END)
    for button in buttons:
        row.append(button)
    return row


def _history_row(item: HistoryItem) -> object:
    row = Gtk.ListBoxRow()
    container = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
    container.set_margin_top(6)
    container.set_margin_bottom(6)

    header = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=6)
    source_badge = Gtk.Label(label=item.source_lang.upper())
    source_badge.add_css_class("history-badge")
    target_badge = Gtk.Label(label=item.target_lang.upper())
    target_badge.add_css_class("history-badge")
    date = Gtk.Label(label=_format_date(item.timestamp))
    date.add_css_class("history-date")
    date.set_hexpand(True)
    date.set_xalign(1.0)
    header.append(source_badge)
    header.append(Gtk.Label(label="→"))
    header.append(target_badge)
    header.append(date)

    original = Gtk.Label(label=f'"{item.source_text}"')
    original.set_xalign(0.0)
    original.set_lines(1)
    original.set_single_line_mode(True)
    original.add_css_class("history-source")

    translation = Gtk.Label(label=item.translated_text)
    translation.set_xalign(0.0)
    translation.set_wrap(True)
    translation.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
    translation.set_lines(2)
    translation.add_css_class("history-translation")

    container.append(header)
    container.append(original)
    container.append(translation)
    row.set_child(container)
    return row


def _format_date(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%x")
