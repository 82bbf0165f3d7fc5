"""
Structured logging configuration using python-json-logger.

Production logs are JSON lines. Request failures carry ``method``, ``path``,
``status`` and ``error_code`` fields so rejected calls can be filtered
without parsing the message text.
"""

import logging
import sys
from typing import Any, Optional

from pythonjsonlogger import jsonlogger

from clubhub.core.config import settings

REQUEST_FIELDS = ("method", "path", "status", "error_code")

_HANDLER_NAME = "clubhub"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping service identity and request context."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["service"] = settings.PROJECT_NAME
        log_record["version"] = settings.VERSION
        log_record["level"] = record.levelname
        for field in REQUEST_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value


class RequestContextFormatter(logging.Formatter):
    """Plain development format with a ``[METHOD path -> status]`` suffix."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        method = getattr(record, "method", None)
        if method:
            line += f" [{method} {getattr(record, 'path', '')} -> {getattr(record, 'status', '')}]"
        return line


def setup_logging() -> None:
    """
    Configure application-wide logging.
    Uses JSON format in production, simpler format in development.

    Safe to call more than once; the handler is installed a single time.
    """
    log_level = logging.DEBUG if settings.DEBUG else logging.INFO
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    if any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)

    if settings.DEBUG:
        formatter: logging.Formatter = RequestContextFormatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
    logging.getLogger("python_multipart").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, typically ``get_logger(__name__)``."""
    return logging.getLogger(name)


def log_request_error(
    logger: logging.Logger,
    method: str,
    path: str,
    status_code: int,
    error_code: str,
    message: str,
    exc_info: Optional[BaseException] = None,
) -> None:
    """
    Record a failed request with its context as structured fields.

    Server faults (5xx) log at ERROR, client errors at INFO.
    """
    level = logging.ERROR if status_code >= 500 else logging.INFO
    logger.log(
        level,
        f"{error_code}: {message}",
        exc_info=exc_info,
        extra={"method": method, "path": path, "status": status_code, "error_code": error_code},
    )
