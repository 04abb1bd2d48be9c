from __future__ import annotations

import importlib
import logging
import os
import shutil
import subprocess
import threading

gi = importlib.import_module("gi")
require_version = getattr(gi, "require_version", None)
if callable(require_version):
    require_version("Gdk", "4.0")
    require_version("GLib", "2.0")
Gdk = importlib.import_module("gi.repository.Gdk")
GLib = importlib.import_module("gi.repository.GLib")

logger = logging.getLogger(__name__)


class ClipboardWriter:
    def copy_text(self, text: str) -> None:
        if not text:
            return
        display = Gdk.Display.get_default()
        if display is not None:
            clipboard = display.get_clipboard()
            provider = Gdk.ContentProvider.new_for_bytes(
                "text/plain;charset=utf-8", GLib.Bytes.new(text.encode("utf-8"))
            )
            clipboard.set_content(provider)
            return
        command = _external_command()
        if command is None:
            logger.warning("no clipboard available for copy")
            return
        threading.Thread(target=_pipe_text, args=(command, text), daemon=True).start()


def _external_command() -> list[str] | None:
    if os.environ.get("XDG_SESSION_TYPE", "").casefold() == "wayland":
        cmd = shutil.which("wl-copy")
        return [cmd, "--type", "text/plain"] if cmd else None
    candidates = (
        ("xclip", ["-selection", "clipboard"]),
        ("xsel", ["--clipboard", "--input"]),
    )
    for name, args in candidates:
        cmd = shutil.which(name)
        if cmd is not None:
            return [cmd, *args]
    return None


def _pipe_text(command: list[str], text: str) -> None:
    try:
        subprocess.run(
            command,
            input=text,
            text=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        logger.warning("clipboard command %s failed", command[0], exc_info=True)
