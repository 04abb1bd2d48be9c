from __future__ import annotations

from collections.abc import Callable
import importlib

from translator_app.notifications.models import Notification, NotificationLevel

gi = importlib.import_module("gi")
require_version = getattr(gi, "require_version", None)
if callable(require_version):
    require_version("GLib", "2.0")
    require_version("Gtk", "4.0")
GLib = importlib.import_module("gi.repository.GLib")
Gtk = importlib.import_module("gi.repository.Gtk")

_SPACING = 8

_LEVEL_CLASSES: dict[NotificationLevel, str] = {
    NotificationLevel.SUCCESS: "banner-success",
    NotificationLevel.INFO: "banner-info",
    NotificationLevel.WARNING: "banner-warning",
    NotificationLevel.ERROR: "banner-error",
}


class BannerHost:
    """Inline message strip. Sticky messages stay until cleared."""

    def __init__(self, on_dismiss: Callable[[], None] | None = None) -> None:
        self._on_dismiss = on_dismiss
        self._label = Gtk.Label(label="")
        self._label.set_xalign(0.0)
        self._label.set_wrap(True)
        self._label.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
        self._label.set_hexpand(True)

        self._close_button = Gtk.Button(label="×")
        self._close_button.add_css_class("flat")
        self._close_button.connect("clicked", self._handle_close_clicked)

        box = Gtk.Box(orientation=Gtk.Orientation.HORIZONTAL, spacing=_SPACING)
        box.add_css_class("banner")
        box.append(self._label)
        box.append(self._close_button)
        self._box = box

        revealer = Gtk.Revealer()
        revealer.set_reveal_child(False)
        revealer.set_transition_duration(0)
        revealer.set_child(box)
        self._revealer = revealer
        self._shown: Notification | None = None
        self._hide_source_id: int | None = None

    @property
    def widget(self) -> object:
        return self._revealer

    @property
    def shown(self) -> Notification | None:
        return self._shown

    def show_sticky(self, notification: Notification) -> None:
        if notification == self._shown:
            return
        self._cancel_auto_hide()
        self._render(notification)

    def flash(self, notification: Notification) -> None:
        self._cancel_auto_hide()
        self._render(notification)
        self._hide_source_id = GLib.timeout_add(
            notification.duration.value, self._auto_hide
        )

    def clear(self) -> None:
        self._cancel_auto_hide()
        self._shown = None
        self._revealer.set_reveal_child(False)

    def _render(self, notification: Notification) -> None:
        for css_class in _LEVEL_CLASSES.values():
            self._box.remove_css_class(css_class)
        self._box.add_css_class(_LEVEL_CLASSES[notification.level])
        self._label.set_text(notification.message)
        self._close_button.set_visible(notification.dismissible)
        self._revealer.set_reveal_child(True)
        self._shown = notification

    def _auto_hide(self) -> bool:
        self._hide_source_id = None
        self.clear()
        return False

    def _cancel_auto_hide(self) -> None:
        if self._hide_source_id is None:
            return
        GLib.source_remove(self._hide_source_id)
        self._hide_source_id = None

    def _handle_close_clicked(self, _button: object) -> None:
        self.clear()
        if self._on_dismiss is not None:
            self._on_dismiss()
