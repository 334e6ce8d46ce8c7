"""Response data models."""

from dataclasses import dataclass
from enum import Enum


class ResponseStatus(str, Enum):
    """Outcome of a capture call."""

    SUCCESS = "success"
    REJECTED = "rejected"
    DISABLED = "disabled"


@dataclass(frozen=True)
class SentryResponse:
    """What the caller gets back from a capture. Never raised."""

    status: ResponseStatus
    event_id: str | None = None
    message: str | None = None

    @property
    def success(self) -> bool:
        return self.status is ResponseStatus.SUCCESS

    @classmethod
    def ok(cls, event_id: str) -> "SentryResponse":
        return cls(ResponseStatus.SUCCESS, event_id)

    @classmethod
    def rejected(cls, event_id: str, message: str) -> "SentryResponse":
        return cls(ResponseStatus.REJECTED, event_id, message)

    @classmethod
    def disabled(cls) -> "SentryResponse":
        return _DISABLED


_DISABLED = SentryResponse(ResponseStatus.DISABLED)
