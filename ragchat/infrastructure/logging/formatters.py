"""Logging formatters for console, file and log-aggregation output.

Available Formatters:
- SimpleFormatter: ``[LEVEL] logger: message``
- DetailedFormatter: timestamped console output for development
- StructuredFormatter: ``key=value`` pairs, readable and grep-friendly
- JSONFormatter: one JSON object per line for production aggregation

Records may carry context through ``extra`` (batch numbers, chunk counts, tool
arguments); the structured and JSON formatters append it to the line.
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Type

# Attributes of a bare LogRecord plus those the Formatter adds itself.
RESERVED_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
}

MAX_EXTRA_VALUE_LENGTH = 200


def extract_extra(record: logging.LogRecord) -> Dict[str, Any]:
    """Return the ``extra`` context attached to a record."""
    return {key: value for key, value in vars(record).items() if key not in RESERVED_RECORD_ATTRS}


def _shorten(value: str) -> str:
    if len(value) <= MAX_EXTRA_VALUE_LENGTH:
        return value
    return value[:MAX_EXTRA_VALUE_LENGTH] + "..."


class SimpleFormatter(logging.Formatter):
    """Format: [LEVEL] logger_name: message"""

    def __init__(self):
        super().__init__(fmt="[%(levelname)s] %(name)s: %(message)s")


class DetailedFormatter(logging.Formatter):
    """Format: YYYY-MM-DD HH:MM:SS [LEVEL] logger_name: message"""

    def __init__(self):
        super().__init__(fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


class StructuredFormatter(logging.Formatter):
    """``ts=... level=... logger=... msg="..." key=value`` on a single line.

    String context values are quoted and shortened, so chunk text logged as
    context does not flood the output.
    """

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        parts = [
            f"ts={timestamp}",
            f"level={record.levelname}",
            f"logger={record.name}",
            f"msg={json.dumps(record.getMessage())}",
        ]

        for key, value in extract_extra(record).items():
            if isinstance(value, (bool, int, float)) or value is None:
                parts.append(f"{key}={value}")
            else:
                parts.append(f"{key}={json.dumps(_shorten(str(value)))}")

        if record.exc_info:
            parts.append(f"exception={json.dumps(self.formatException(record.exc_info))}")

        return " ".join(parts)


class JSONFormatter(logging.Formatter):
    """One JSON object per record for machine consumption."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }

        context = {}
        for key, value in extract_extra(record).items():
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = str(value)
            context[key] = value
        if context:
            payload["context"] = context

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": "".join(traceback.format_exception(*record.exc_info)),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


FORMATTERS: Dict[str, Type[logging.Formatter]] = {
    "simple": SimpleFormatter,
    "detailed": DetailedFormatter,
    "structured": StructuredFormatter,
    "json": JSONFormatter,
}


def get_formatter(format_type: str) -> logging.Formatter:
    """Get the formatter registered under ``format_type``.

    Raises:
        ValueError: If format_type is not recognized
    """
    formatter_class = FORMATTERS.get(format_type.lower())
    if formatter_class is None:
        raise ValueError(f"Unknown format type: {format_type}. Available: {', '.join(FORMATTERS)}")
    return formatter_class()
