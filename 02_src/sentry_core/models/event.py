"""Event data models."""

import sys
import traceback
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .breadcrumb import Breadcrumb
from .scope import Scope, User


class SentryLevel(str, Enum):
    """Severity of an event or a diagnostic log entry."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK = {
    SentryLevel.DEBUG: 0,
    SentryLevel.INFO: 1,
    SentryLevel.WARNING: 2,
    SentryLevel.ERROR: 3,
    SentryLevel.FATAL: 4,
}

# Guards against reference cycles in __cause__ / __context__ chains
_MAX_CHAINED_EXCEPTIONS = 10


def new_event_id() -> str:
    return uuid.uuid4().hex


@dataclass
class SentryEvent:
    """A single event to be reported.

    The id is fixed at creation and is the id carried by the envelope and
    returned in the response.
    """

    event_id: str = field(default_factory=new_event_id)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    level: SentryLevel = SentryLevel.ERROR
    message: str | None = None
    exception: BaseException | None = None
    logger: str | None = None
    platform: str = "python"
    release: str | None = None
    environment: str | None = None
    tags: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    user: User | None = None
    breadcrumbs: list[Breadcrumb] = field(default_factory=list)

    @classmethod
    def from_exception(cls, exception: BaseException, **kwargs: Any) -> "SentryEvent":
        kwargs.setdefault("level", SentryLevel.ERROR)
        return cls(exception=exception, **kwargs)

    @classmethod
    def from_message(
        cls, message: str, level: SentryLevel = SentryLevel.INFO, **kwargs: Any
    ) -> "SentryEvent":
        return cls(message=message, level=level, **kwargs)

    def copy(self) -> "SentryEvent":
        """Shallow copy with its own tags, extra and breadcrumb containers."""
        return replace(
            self,
            tags=dict(self.tags),
            extra=dict(self.extra),
            breadcrumbs=list(self.breadcrumbs),
            user=User(**vars(self.user)) if self.user is not None else None,
        )

    def with_scope(self, scope: Scope) -> "SentryEvent":
        """Copy of the event with scope context merged in.

        Values set on the event win. The event itself is left untouched, so
        capturing it again merges the scope once more from scratch.
        """
        merged = self.copy()
        merged.breadcrumbs = list(scope.breadcrumbs) + merged.breadcrumbs
        for key, value in scope.tags.items():
            merged.tags.setdefault(key, value)
        for key, value in scope.extra.items():
            merged.extra.setdefault(key, value)
        if merged.user is None and scope.user is not None:
            merged.user = User(**vars(scope.user))
        return merged

    def to_payload(self) -> dict:
        """JSON-ready representation of the event."""
        payload: dict = {
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "platform": self.platform,
        }
        if self.message is not None:
            payload["message"] = {"formatted": self.message}
        if self.exception is not None:
            payload["exception"] = {"values": _exception_values(self.exception)}
        if self.logger is not None:
            payload["logger"] = self.logger
        if self.release is not None:
            payload["release"] = self.release
        if self.environment is not None:
            payload["environment"] = self.environment
        if self.tags:
            payload["tags"] = dict(self.tags)
        if self.extra:
            payload["extra"] = dict(self.extra)
        if self.user is not None:
            payload["user"] = self.user.to_payload()
        if self.breadcrumbs:
            payload["breadcrumbs"] = {
                "values": [crumb.to_payload() for crumb in self.breadcrumbs]
            }
        return payload


def _exception_values(exception: BaseException) -> list[dict]:
    """Exception chain, outermost last."""
    values = []
    seen: set[int] = set()
    current: BaseException | None = exception
    while current is not None and id(current) not in seen:
        if len(values) >= _MAX_CHAINED_EXCEPTIONS:
            break
        seen.add(id(current))
        values.append(_single_exception(current))
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    values.reverse()
    return values


def _single_exception(exception: BaseException) -> dict:
    exc_type = type(exception)
    value: dict = {
        "type": exc_type.__name__,
        "value": str(exception),
        "module": exc_type.__module__,
    }
    frames = [
        {
            "filename": frame.filename,
            "function": frame.name,
            "lineno": frame.lineno,
            "context_line": frame.line,
            "in_app": _in_app(frame.filename),
        }
        for frame in traceback.extract_tb(exception.__traceback__)
    ]
    if frames:
        value["stacktrace"] = {"frames": frames}
    return value


def _in_app(filename: str) -> bool:
    return not any(
        filename.startswith(prefix) for prefix in (sys.prefix, sys.base_prefix)
    )
