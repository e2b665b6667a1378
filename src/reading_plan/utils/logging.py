"""Logging configuration for the Reading Plan service."""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

from reading_plan.config import Settings, get_settings

# Set per request by RequestContextMiddleware; copied into worker threads by asyncio.to_thread
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_logger: Optional[logging.Logger] = None

# Fields passed through ``extra=`` that end up in JSON log lines
PLAN_LOG_FIELDS = (
    "days",
    "units",
    "target_average",
    "threshold",
    "tolerance",
    "groups",
    "diff",
    "iterations",
    "path",
    "method",
    "status_code",
    "duration_ms",
    "error_type",
    "context",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with the request id and any plan fields set on the record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        for field in PLAN_LOG_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


class StandardFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = request_id_var.get() or "N/A"
        return super().format(record)


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the ``reading_plan`` logger.

    Without arguments the first configuration is reused. Passing ``settings``
    always reconfigures, so an app built around explicit settings logs with
    that settings' level and format.
    """
    global _logger

    if _logger is not None and settings is None:
        return _logger

    settings = settings or get_settings()

    logger = logging.getLogger("reading_plan")
    logger.setLevel(settings.log_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(JSONFormatter() if settings.is_production else StandardFormatter())
    logger.addHandler(console_handler)
    logger.propagate = False

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database.echo else logging.WARNING
    )

    _logger = logger
    logger.info(
        f"Logging configured: level={settings.log_level}, "
        f"format={'JSON' if settings.is_production else 'Standard'}"
    )
    return logger


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() call reconfigures it."""
    global _logger
    _logger = None


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the ``reading_plan`` namespace."""
    if name:
        return logging.getLogger(f"reading_plan.{name}")
    return logging.getLogger("reading_plan")


def set_request_id(request_id: Optional[str]) -> None:
    request_id_var.set(request_id)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log a handled error with its type and request context."""
    get_logger("error").error(
        f"Error: {type(error).__name__}: {error}",
        exc_info=True,
        extra={"error_type": type(error).__name__, "context": context or {}},
    )
