from __future__ import annotations

import importlib
import logging

from translator_app.adapters.clipboard_writer import ClipboardWriter
from translator_app.adapters.scheduler import GLibScheduler
from translator_app.config import load_config
from translator_app.controllers.translation_controller import TranslationController
from translator_app.services.container import AppServices
from translator_app.ui.translation_window import TranslationWindow
from translator_app import telemetry

gi = importlib.import_module("gi")
require_version = getattr(gi, "require_version", None)
if callable(require_version):
    require_version("GLib", "2.0")
    require_version("Gtk", "4.0")
GLib = importlib.import_module("gi.repository.GLib")
Gtk = importlib.import_module("gi.repository.Gtk")


APP_ID = "com.gemini.translator"
logger = logging.getLogger(__name__)


class TranslatorApp(Gtk.Application):
    def __init__(self) -> None:
        super().__init__(application_id=APP_ID)
        self._config = load_config()
        self._services = AppServices.create(self._config)
        self._controller: TranslationController | None = None
        self._window: TranslationWindow | None = None
        self.connect("startup", self._on_startup)
        self.connect("activate", self._on_activate)
        self.connect("shutdown", self._on_shutdown)

    def _on_startup(self, _app: object) -> None:
        GLib.set_application_name("Gemini Translator")
        GLib.set_prgname("gemini-translator")
        self._services.start()
        if not self._services.gateway.settings.api_key:
            logger.warning("no API key configured; translations will fail")
        self._controller = TranslationController(
            config=self._config,
            translator=self._services.gateway,
            speech=self._services.gateway,
            player=self._services.player,
            history=self._services.history,
            scheduler=GLibScheduler(),
            clipboard=ClipboardWriter(),
        )
        telemetry.log_event(
            "app.startup",
            history_size=len(self._controller.state.history),
            debounce_ms=self._config.debounce_ms,
        )

    def _on_activate(self, _app: object) -> None:
        if self._window is not None:
            self._window.present()
            return
        controller = self._controller
        if controller is None:
            logger.error("activate before startup finished")
            return
        self._window = TranslationWindow(
            app=self,
            state=controller.state,
            on_source_text=controller.set_source_text,
            on_source_lang=controller.set_source_lang,
            on_target_lang=controller.set_target_lang,
            on_swap=controller.swap_languages,
            on_speak_source=controller.speak_source,
            on_speak_target=controller.speak_target,
            on_copy=controller.copy_translation,
            on_clear=controller.clear_all,
            on_dismiss_error=controller.dismiss_error,
            on_history_select=controller.restore_history,
            on_clear_history=controller.clear_history,
            on_close=controller.close,
        )
        controller.bind_view(self._window)
        self._window.present()

    def _on_shutdown(self, _app: object) -> None:
        if self._controller is not None:
            self._controller.close()
        self._services.player.stop()
        self._services.stop()
        telemetry.log_event("app.shutdown")
