"""Diagnostic loggers for SDK failures."""

import logging
import threading
from typing import Protocol

from ..logging_config import DIAGNOSTICS_LOGGER, STDLIB_LEVELS, get_logger
from ..models import LogEntry, SentryLevel


class IDiagnosticLogger(Protocol):
    """Sink for the SDK's own structured log entries."""

    def is_enabled(self, level: SentryLevel) -> bool:
        """Whether entries at this level are recorded."""
        ...

    def log(
        self,
        level: SentryLevel,
        message: str,
        *args: object,
        exception: BaseException | None = None,
    ) -> None:
        """Record an entry. ``message`` uses {0}-style positional placeholders."""
        ...


class DiagnosticLogger:
    """Forwards entries to the stdlib ``logging`` tree."""

    def __init__(
        self,
        min_level: SentryLevel = SentryLevel.DEBUG,
        logger: logging.Logger | None = None,
    ):
        self._min_level = min_level
        self._logger = logger or get_logger(DIAGNOSTICS_LOGGER)

    def is_enabled(self, level: SentryLevel) -> bool:
        return level.rank >= self._min_level.rank

    def log(
        self,
        level: SentryLevel,
        message: str,
        *args: object,
        exception: BaseException | None = None,
    ) -> None:
        if not self.is_enabled(level):
            return
        entry = LogEntry(level=level, message=message, args=args, exception=exception)
        self._logger.log(
            STDLIB_LEVELS[level],
            entry.formatted(),
            exc_info=exception,
            extra={"context": {"template": message, "args": [str(a) for a in args]}},
        )


class InMemoryDiagnosticLogger:
    """Keeps every entry in ``entries``; used for verification."""

    def __init__(self, min_level: SentryLevel = SentryLevel.DEBUG):
        self._min_level = min_level
        self._lock = threading.Lock()
        self.entries: list[LogEntry] = []

    def is_enabled(self, level: SentryLevel) -> bool:
        return level.rank >= self._min_level.rank

    def log(
        self,
        level: SentryLevel,
        message: str,
        *args: object,
        exception: BaseException | None = None,
    ) -> None:
        if not self.is_enabled(level):
            return
        with self._lock:
            self.entries.append(
                LogEntry(level=level, message=message, args=args, exception=exception)
            )

    def clear(self) -> None:
        with self._lock:
            self.entries.clear()


def resolve_diagnostic_logger(options) -> IDiagnosticLogger:
    """The logger configured on ``options``, or a stdlib-backed default."""
    if options.diagnostic_logger is not None:
        return options.diagnostic_logger
    if options.debug:
        return DiagnosticLogger(min_level=options.diagnostic_level)
    return DiagnosticLogger(min_level=SentryLevel.WARNING)
