"""Logging setup for processes that host the SDK.

The SDK writes its own diagnostics to the ``sentry_core.diagnostics`` logger.
``setup_logging`` routes everything through one JSON formatter and sets that
logger's threshold from ``SentryOptions`` so debug diagnostics are not
dropped by a stricter root level.
"""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH, SDK_NAME, SentryOptions
from .models import SentryLevel

DIAGNOSTICS_LOGGER = "sentry_core.diagnostics"

STDLIB_LEVELS = {
    SentryLevel.DEBUG: logging.DEBUG,
    SentryLevel.INFO: logging.INFO,
    SentryLevel.WARNING: logging.WARNING,
    SentryLevel.ERROR: logging.ERROR,
    SentryLevel.FATAL: logging.CRITICAL,
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Records from the diagnostic logger carry a ``context`` dict with the
    message template and its arguments; it is emitted as ``diagnostic``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "sdk": SDK_NAME,
        }

        if record.name.startswith(DIAGNOSTICS_LOGGER) and hasattr(record, "context"):
            log_data["diagnostic"] = record.context
        else:
            log_data["location"] = f"{record.module}.{record.funcName}:{record.lineno}"

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


def diagnostics_level(options: SentryOptions | None) -> int:
    """Stdlib threshold for the diagnostics logger under ``options``."""
    if options is None or not options.debug:
        return logging.WARNING
    return STDLIB_LEVELS[options.diagnostic_level]


def setup_logging(
    options: SentryOptions | None = None,
    log_level: str | None = None,
    log_file: str | None = None,
) -> None:
    """
    Setup JSON logging for the SDK host process.

    Args:
        options: SDK options; ``debug`` and ``diagnostic_level`` decide the
                 threshold of the diagnostics logger. Without options only
                 warnings and above get through.
        log_level: Root level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/sentry_core.log.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "sentry_core.logging_config.JSONFormatter"},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": log_file,
                    "maxBytes": 10 * 1024 * 1024,  # 10 MB
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                DIAGNOSTICS_LOGGER: {"level": logging.getLevelName(diagnostics_level(options))},
                # httpx logs every request at INFO
                "httpx": {"level": "WARNING"},
            },
            "root": {
                "level": log_level.upper(),
                "handlers": ["file", "console"],
            },
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically for ``__name__``)."""
    return logging.getLogger(name)
