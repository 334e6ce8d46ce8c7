"""Envelope wire format.

An envelope is newline-delimited: the envelope header, then for each item its
header and its payload. Only ``event`` items are produced here.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from ..exceptions import EventSerializationError
from ..models import SentryEvent

EVENT_ITEM_TYPE = "event"
ENVELOPE_CONTENT_TYPE = "application/x-sentry-envelope"


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return value.hex
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _dumps(value: Any) -> bytes:
    return json.dumps(
        value, default=_json_default, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


@dataclass(frozen=True)
class EnvelopeItem:
    """One typed item: a header and an opaque payload."""

    header: dict
    payload: bytes

    @property
    def type(self) -> str | None:
        return self.header.get("type")

    def payload_json(self) -> dict:
        return json.loads(self.payload)

    def serialize(self) -> bytes:
        return _dumps(self.header) + b"\n" + self.payload


@dataclass(frozen=True)
class Envelope:
    """Envelope header plus ordered items."""

    header: dict
    items: tuple[EnvelopeItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_event(cls, event: SentryEvent) -> "Envelope":
        """Build a single-item envelope. The event id goes into both headers."""
        try:
            payload = _dumps(event.to_payload())
        except (TypeError, ValueError) as e:
            raise EventSerializationError(event.event_id, str(e)) from e

        item = EnvelopeItem(
            header={
                "type": EVENT_ITEM_TYPE,
                "event_id": event.event_id,
                "content_type": "application/json",
                "length": len(payload),
            },
            payload=payload,
        )
        return cls(header={"event_id": event.event_id}, items=(item,))

    @property
    def event_id(self) -> str | None:
        return self.header.get("event_id")

    def try_get_event_id(self) -> str | None:
        """The header's event id, falling back to the first event item."""
        if self.event_id:
            return self.event_id
        for item in self.items:
            if item.type == EVENT_ITEM_TYPE and item.header.get("event_id"):
                return item.header["event_id"]
        return None

    def serialize(self) -> bytes:
        parts = [_dumps(self.header)]
        parts.extend(item.serialize() for item in self.items)
        return b"\n".join(parts) + b"\n"
