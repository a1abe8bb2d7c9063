"""JSON-lines logging for drawing turns, plus uncaught-exception capture.

Every record emitted under the ``autodraw`` logger tree is written as one JSON
object. Anything passed through ``extra=`` (``event``, ``turn_id``, counts) is
carried into the object as-is, so a whole turn can be followed by filtering on
its ``turn_id``.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, MutableMapping

from .config import LoggingSettings, data_dir


ROOT_LOGGER = "autodraw"
LOG_FILE = "autodraw.log"

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def log_dir(base: Path | None = None) -> Path:
    path = (base or data_dir()) / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class TurnLogAdapter(logging.LoggerAdapter):
    """Stamps every record with the turn id; ``event`` names the step."""

    def __init__(self, logger: logging.Logger, turn_id: str) -> None:
        super().__init__(logger, {"turn_id": turn_id})

    @property
    def turn_id(self) -> str:
        return self.extra["turn_id"]

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**kwargs.get("extra", {}), **self.extra}
        return msg, kwargs

    def event(self, event: str, msg: str, *args: Any, level: int = logging.INFO, **fields: Any) -> None:
        self.log(level, msg, *args, extra={"event": event, **fields})


def configure_logging(
    settings: LoggingSettings | None = None,
    console: bool = False,
    base_dir: Path | None = None,
) -> logging.Logger:
    """Attach the rotating JSON file handler once; later calls are no-ops."""
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger

    settings = settings or LoggingSettings()
    logger.setLevel(logging.INFO)
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(log_dir(base_dir) / LOG_FILE),
        when="midnight",
        backupCount=max(1, settings.keep_log_files),
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(stream_handler)

    logger.info(
        "logging configured",
        extra={"event": "logging_configured", "keep_log_files": settings.keep_log_files},
    )
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def turn_logger(turn_id: str) -> TurnLogAdapter:
    return TurnLogAdapter(get_logger("turn"), turn_id)


def _log_crash(event: str, exc_info: tuple) -> None:
    crash_id = uuid.uuid4().hex
    get_logger().critical(
        "%s crash_id=%s",
        event.replace("_", " "),
        crash_id,
        exc_info=exc_info,
        extra={"event": event, "crash_id": crash_id},
    )


def install_crash_hooks() -> None:
    """Log uncaught exceptions before the interpreter's default reporting runs."""
    previous_hook = sys.excepthook
    previous_thread_hook = threading.excepthook

    def _uncaught(exc_type, exc_value, exc_tb) -> None:
        _log_crash("uncaught_exception", (exc_type, exc_value, exc_tb))
        previous_hook(exc_type, exc_value, exc_tb)

    def _thread_uncaught(args: threading.ExceptHookArgs) -> None:
        _log_crash("thread_exception", (args.exc_type, args.exc_value, args.exc_traceback))
        previous_thread_hook(args)

    sys.excepthook = _uncaught
    threading.excepthook = _thread_uncaught
