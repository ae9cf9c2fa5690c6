"""
Logging setup.

Plain text lines by default, JSON lines when ``json_format`` is set.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord carries; anything else came in through ``extra=``
_RESERVED = frozenset((
    "name", "msg", "args", "levelname", "levelno",
    "pathname", "filename", "module", "exc_info",
    "exc_text", "stack_info", "lineno", "funcName",
    "created", "msecs", "relativeCreated", "thread",
    "threadName", "processName", "process", "message",
    "taskName", "color_message",
))

_configured = False


class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    One object per line with timestamp, level, logger and message, plus any
    ``extra`` fields passed to the logging call.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED:
                log_data[key] = self._serialize_value(value)
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False, default=str)

    def _serialize_value(self, value: Any) -> Any:
        if isinstance(value, (str, int, float, bool, type(None))):
            return value
        if isinstance(value, (list, tuple)):
            return [self._serialize_value(v) for v in value]
        if isinstance(value, dict):
            return {k: self._serialize_value(v) for k, v in value.items()}
        return str(value)


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Configure the root logger with a single stdout handler.

    Calling it again only updates the level and formatter.

    Args:
        level: Log level name.
        json_format: Emit JSON lines instead of plain text.
    """
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper())

    if json_format:
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _configured = True
    else:
        for handler in root.handlers:
            handler.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
