from __future__ import annotations

import importlib

gi = importlib.import_module("gi")
require_version = getattr(gi, "require_version", None)
if callable(require_version):
    require_version("Gdk", "4.0")
    require_version("Gtk", "4.0")
Gdk = importlib.import_module("gi.repository.Gdk")
Gtk = importlib.import_module("gi.repository.Gtk")

_applied = False

_CSS = b"""
window { background-color: #f8fafc; color: #1e293b; }
textview, textview text {
  background-color: #ffffff;
  color: #1e293b;
  font-size: 1.25em;
}
.panel {
  border: 1px solid #e2e8f0;
  border-radius: 16px;
  padding: 12px;
  background-color: #ffffff;
}
.panel-target { background-color: #f1f5f9; }
.target-text { font-size: 1.25em; color: #1e293b; }
.placeholder { color: #cbd5e1; }
.detected {
  font-size: 0.8em;
  font-weight: 600;
  color: #94a3b8;
}
.picker-row-selected { font-weight: 600; color: #4338ca; }
.picker-empty { color: #94a3b8; font-style: italic; padding: 16px; }
.history-title { font-weight: 600; font-size: 1.1em; }
.history-badge {
  font-size: 0.75em;
  font-weight: 700;
  color: #4f46e5;
  background-color: #eef2ff;
  border-radius: 4px;
  padding: 0 6px;
}
.history-date { font-size: 0.75em; color: #94a3b8; }
.history-source { font-style: italic; color: #64748b; }
.history-translation { font-weight: 500; }
.banner {
  padding: 6px 10px;
  border-radius: 10px;
  margin-bottom: 6px;
}
.banner-success { background-color: #dcfce7; color: #166534; }
.banner-info { background-color: #e0e7ff; color: #3730a3; }
.banner-warning { background-color: #fef3c7; color: #92400e; }
.banner-error { background-color: #fef2f2; color: #dc2626; }
"""


def apply_theme() -> None:
    global _applied
    if _applied:
        return
    display = Gdk.Display.get_default()
    if display is None:
        return
    provider = Gtk.CssProvider()
    provider.load_from_data(_CSS)
    Gtk.StyleContext.add_provider_for_display(
        display,
        provider,
        Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION,
    )
    _applied = True
