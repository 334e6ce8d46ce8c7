"""Diagnostic log entry data model."""

from dataclasses import dataclass

from .event import SentryLevel


@dataclass(frozen=True)
class LogEntry:
    """A structured diagnostic record.

    ``args`` are positional and follow the ``{0}``, ``{1}``... placeholders of
    ``message`` in order.
    """

    level: SentryLevel
    message: str
    args: tuple = ()
    exception: BaseException | None = None

    def formatted(self) -> str:
        return self.message.format(*self.args) if self.args else self.message
