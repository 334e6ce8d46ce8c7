"""Breadcrumb data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class BreadcrumbLevel(str, Enum):
    """Severity of a breadcrumb."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class Breadcrumb:
    """A small trail entry recorded before an event happens."""

    message: str
    type: str | None = None
    category: str | None = None
    data: Mapping[str, str] | None = None
    level: BreadcrumbLevel = BreadcrumbLevel.INFO
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.data is not None:
            # read-only view over a private copy
            object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    def to_payload(self) -> dict:
        """Wire representation used inside the event payload."""
        payload: dict = {
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
            "level": self.level.value,
        }
        if self.type is not None:
            payload["type"] = self.type
        if self.category is not None:
            payload["category"] = self.category
        if self.data:
            payload["data"] = dict(self.data)
        return payload
