from __future__ import annotations

from translate_core.errors import ConfigurationError
from translator_app.notifications.models import Notification, NotificationLevel

TRANSLATION_FAILED_TEXT = "Translation failed. Please try again."


def translation_error(exc: BaseException | None = None) -> Notification:
    if isinstance(exc, ConfigurationError):
        return configuration_error(str(exc))
    text = str(exc).strip() if exc is not None else ""
    return Notification(text or TRANSLATION_FAILED_TEXT, NotificationLevel.ERROR)


def configuration_error(message: str) -> Notification:
    text = message.strip().rstrip(".") or "Translator is not configured"
    return Notification(
        f"{text}. Set GEMINI_API_KEY and restart.",
        NotificationLevel.ERROR,
        dismissible=False,
    )


def copy_success() -> Notification:
    return Notification("Copied to clipboard.", NotificationLevel.SUCCESS)


def history_cleared() -> Notification:
    return Notification("History cleared.", NotificationLevel.INFO)
