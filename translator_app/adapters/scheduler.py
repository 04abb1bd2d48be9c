from __future__ import annotations

from collections.abc import Callable
import importlib

gi = importlib.import_module("gi")
require_version = getattr(gi, "require_version", None)
if callable(require_version):
    require_version("GLib", "2.0")
GLib = importlib.import_module("gi.repository.GLib")


class GLibScheduler:
    """Timers and idle callbacks on the GTK main loop."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        def fire() -> bool:
            callback()
            return False

        return GLib.timeout_add(delay_ms, fire)

    def cancel(self, handle: int) -> None:
        GLib.source_remove(handle)

    def idle_add(self, callback: Callable[[], None]) -> None:
        def run() -> bool:
            callback()
            return False

        GLib.idle_add(run)
