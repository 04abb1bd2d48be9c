from __future__ import annotations

from collections.abc import Callable
import importlib

from translator_app.application.language_picker import (
    SEARCH_PLACEHOLDER,
    LanguagePicker,
    display_label,
)
from translate_core.models import Language

gi = importlib.import_module("gi")
require_version = getattr(gi, "require_version", None)
if callable(require_version):
    require_version("Gtk", "4.0")
    require_version("Pango", "1.0")
Gtk = importlib.import_module("gi.repository.Gtk")
Pango = importlib.import_module("gi.repository.Pango")


class LanguagePickerWidget:
    """MenuButton with a searchable popover list bound to ``LanguagePicker``.

    The popover autohides on a press outside its bounds; that close is fed
    back into the model as an outside click.
    """

    def __init__(
        self,
        *,
        selected_code: str,
        on_change: Callable[[str], None],
        exclude_auto: bool = False,
    ) -> None:
        self._model = LanguagePicker(
            selected_code=selected_code,
            on_change=on_change,
            exclude_auto=exclude_auto,
        )
        self._row_codes: list[str] = []

        self._button_label = Gtk.Label(label=self._model.label)
        self._button_label.set_xalign(0.0)
        self._button_label.set_ellipsize(Pango.EllipsizeMode.END)

        button = Gtk.MenuButton()
        button.set_child(self._button_label)
        button.set_size_request(192, -1)

        search = Gtk.SearchEntry()
        search.set_placeholder_text(SEARCH_PLACEHOLDER)
        search.connect("search-changed", self._handle_search_changed)

        list_box = Gtk.ListBox()
        list_box.set_selection_mode(Gtk.SelectionMode.NONE)
        list_box.set_activate_on_single_click(True)
        list_box.connect("row-activated", self._handle_row_activated)

        self._empty_label = Gtk.Label(label="")
        self._empty_label.add_css_class("picker-empty")
        self._empty_label.set_wrap(True)
        self._empty_label.set_visible(False)

        scroller = Gtk.ScrolledWindow()
        scroller.set_min_content_height(64)
        scroller.set_max_content_height(256)
        scroller.set_propagate_natural_height(True)
        scroller.set_child(list_box)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=6)
        content.set_margin_top(6)
        content.set_margin_bottom(6)
        content.set_margin_start(6)
        content.set_margin_end(6)
        content.append(search)
        content.append(scroller)
        content.append(self._empty_label)

        popover = Gtk.Popover()
        popover.set_autohide(True)
        popover.set_child(content)
        popover.connect("show", self._handle_popover_show)
        popover.connect("closed", self._handle_popover_closed)
        button.set_popover(popover)

        self._button = button
        self._popover = popover
        self._search = search
        self._list_box = list_box
        self._render_rows()

    @property
    def widget(self) -> object:
        return self._button

    @property
    def model(self) -> LanguagePicker:
        return self._model

    def set_selected(self, code: str) -> None:
        if code == self._model.selected_code:
            return
        self._model.set_selected(code)
        self._button_label.set_text(self._model.label)
        self._render_rows()

    def _handle_popover_show(self, _popover: object) -> None:
        self._model.set_open(True)
        self._search.grab_focus()

    def _handle_popover_closed(self, _popover: object) -> None:
        if self._model.is_open:
            self._model.handle_outside_click()

    def _handle_search_changed(self, entry: object) -> None:
        text = entry.get_text()  # type: ignore[attr-defined]
        if text == self._model.query:
            return
        self._model.update_query(text)
        self._render_rows()

    def _handle_row_activated(self, _list_box: object, row: object) -> None:
        index = row.get_index()  # type: ignore[attr-defined]
        if index < 0 or index >= len(self._row_codes):
            return
        code = self._row_codes[index]
        self._model.select(code)
        self._popover.popdown()
        self._search.set_text("")
        self._render_rows()

    def _render_rows(self) -> None:
        child = self._list_box.get_first_child()
        while child is not None:
            next_child = child.get_next_sibling()
            self._list_box.remove(child)
            child = next_child
        self._row_codes = []
        for language in self._model.visible_languages:
            self._list_box.append(self._build_row(language))
            self._row_codes.append(language.code)
        self._empty_label.set_text(self._model.empty_message)
        self._empty_label.set_visible(self._model.is_empty)

    def _build_row(self, language: Language) -> object:
        row = Gtk.ListBoxRow()
        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=8)
        label = Gtk.Label(label=display_label(language))
        label.set_xalign(0.0)
        label.set_hexpand(True)
        box.append(label)
        if self._model.is_selected(language):
            label.add_css_class("picker-row-selected")
            box.append(Gtk.Label(label="✓"))
        row.set_child(box)
        return row
