from __future__ import annotations

import atexit
from datetime import datetime, timezone
import hashlib
import json
import logging
import logging.handlers
import os
from pathlib import Path
import queue
import threading
from typing import Final

_EVENT_LOGGER_NAME: Final[str] = "gemini_translator.events"
_MODULE_LOGGER_NAMES: Final[tuple[str, ...]] = ("translate_core", "translator_app")
_LOG_DIR_ENV: Final[str] = "TRANSLATOR_LOG_DIR"
_LOG_ENABLED_ENV: Final[str] = "TRANSLATOR_LOGGING"
_LOG_LEVEL_ENV: Final[str] = "TRANSLATOR_LOG_LEVEL"
_EVENT_MARKER: Final[str] = "telemetry_event"

_lock = threading.Lock()
_event_logger: logging.Logger | None = None
_listener: logging.handlers.QueueListener | None = None
_file_handler: logging.Handler | None = None
_queue_handler: logging.Handler | None = None


class _JsonLineFormatter(logging.Formatter):
    """Events are already JSON; plain module records get wrapped into one."""

    def format(self, record: logging.LogRecord) -> str:
        if getattr(record, _EVENT_MARKER, False):
            return record.getMessage()
        payload = _base_payload("log")
        payload["level"] = record.levelname
        payload["logger"] = record.name
        payload["message"] = record.getMessage()
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return _dumps(payload)


def log_path() -> Path:
    override = os.environ.get(_LOG_DIR_ENV, "").strip()
    if override:
        return Path(override) / "translator.log"
    return Path.home() / ".gemini-translator" / "logs" / "translator.log"


def setup(*, reset: bool) -> None:
    global _event_logger, _listener, _file_handler, _queue_handler
    if not _is_enabled():
        return
    with _lock:
        if _event_logger is not None:
            return
        path = log_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            return
        file_handler = logging.FileHandler(
            path, mode="w" if reset else "a", encoding="utf-8"
        )
        file_handler.setFormatter(_JsonLineFormatter())
        file_handler.setLevel(_configured_level())
        record_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        queue_handler = logging.handlers.QueueHandler(record_queue)

        event_logger = logging.getLogger(_EVENT_LOGGER_NAME)
        event_logger.setLevel(logging.INFO)
        event_logger.propagate = False
        event_logger.addHandler(queue_handler)
        for name in _MODULE_LOGGER_NAMES:
            module_logger = logging.getLogger(name)
            module_logger.setLevel(_configured_level())
            module_logger.addHandler(queue_handler)

        listener = logging.handlers.QueueListener(
            record_queue,
            file_handler,
            respect_handler_level=True,
        )
        listener.start()
        _event_logger = event_logger
        _listener = listener
        _file_handler = file_handler
        _queue_handler = queue_handler
    atexit.register(shutdown)


def shutdown() -> None:
    global _event_logger, _listener, _file_handler, _queue_handler
    with _lock:
        if _listener is not None:
            _listener.stop()
            _listener = None
        if _file_handler is not None:
            _file_handler.close()
            _file_handler = None
        if _queue_handler is not None:
            for name in (_EVENT_LOGGER_NAME, *_MODULE_LOGGER_NAMES):
                logging.getLogger(name).removeHandler(_queue_handler)
            _queue_handler = None
        _event_logger = None


def log_event(event: str, **fields: object) -> None:
    _emit(logging.INFO, event, None, fields)


def log_error(event: str, exc: BaseException | None = None, **fields: object) -> None:
    _emit(logging.ERROR, event, exc, fields)


def text_meta(value: str | None) -> dict[str, object]:
    if not value:
        return {"text_len": 0, "text_hash": ""}
    data = value.encode("utf-8", errors="ignore")
    digest = hashlib.sha256(data).hexdigest()
    return {"text_len": len(value), "text_hash": digest}


def _emit(
    level: int,
    event: str,
    exc: BaseException | None,
    fields: dict[str, object],
) -> None:
    if _event_logger is None:
        setup(reset=False)
    logger = _event_logger
    if logger is None or not logger.isEnabledFor(level):
        return
    payload = _base_payload(event)
    if exc is not None:
        payload["error_type"] = exc.__class__.__name__
        payload["error"] = str(exc)
    if fields:
        payload.update(_sanitize_fields(fields))
    logger.log(level, _dumps(payload), extra={_EVENT_MARKER: True})


def _configured_level() -> int:
    name = os.environ.get(_LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.INFO


def _is_enabled() -> bool:
    return os.environ.get(_LOG_ENABLED_ENV, "1").strip() != "0"


def _base_payload(event: str) -> dict[str, object]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "event": event,
        "pid": os.getpid(),
        "thread": threading.get_ident(),
    }


def _sanitize_fields(fields: dict[str, object]) -> dict[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in fields.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        else:
            sanitized[key] = str(value)
    return sanitized


def _dumps(payload: dict[str, object]) -> str:
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"))
