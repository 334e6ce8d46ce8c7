"""Scope data models."""

import copy
from collections import deque
from dataclasses import dataclass, field
from typing import Any

from .breadcrumb import Breadcrumb

DEFAULT_MAX_BREADCRUMBS = 100


@dataclass
class User:
    """The user affected by an event."""

    id: str | None = None
    username: str | None = None
    email: str | None = None
    ip_address: str | None = None

    def to_payload(self) -> dict:
        return {
            key: value
            for key, value in (
                ("id", self.id),
                ("username", self.username),
                ("email", self.email),
                ("ip_address", self.ip_address),
            )
            if value is not None
        }


@dataclass
class Scope:
    """Contextual state merged into every event captured while it is current.

    Breadcrumbs are bounded by ``max_breadcrumbs``; the oldest one is dropped
    first once the bound is reached. ``state`` is an opaque value attached by
    whoever pushed the scope.
    """

    max_breadcrumbs: int = DEFAULT_MAX_BREADCRUMBS
    breadcrumbs: deque[Breadcrumb] = field(default_factory=deque)
    tags: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    user: User | None = None
    state: Any = None

    def __post_init__(self) -> None:
        if self.max_breadcrumbs < 0:
            raise ValueError("max_breadcrumbs must be >= 0")
        self.breadcrumbs = deque(self.breadcrumbs, maxlen=self.max_breadcrumbs)

    def add_breadcrumb(self, breadcrumb: Breadcrumb) -> None:
        self.breadcrumbs.append(breadcrumb)

    def clear_breadcrumbs(self) -> None:
        self.breadcrumbs.clear()

    def set_tag(self, key: str, value: str) -> None:
        self.tags[key] = value

    def remove_tag(self, key: str) -> None:
        self.tags.pop(key, None)

    def set_extra(self, key: str, value: Any) -> None:
        self.extra[key] = value

    def set_user(self, user: User | None) -> None:
        self.user = user

    def clone(self) -> "Scope":
        """Copy that shares no mutable container with this scope.

        ``extra`` values are deep-copied. A value that cannot be deep-copied
        (a lock or an open socket) is kept by reference in the clone.
        """
        return Scope(
            max_breadcrumbs=self.max_breadcrumbs,
            breadcrumbs=deque(self.breadcrumbs),
            tags=dict(self.tags),
            extra={key: _copy_value(value) for key, value in self.extra.items()},
            user=User(**vars(self.user)) if self.user is not None else None,
            state=self.state,
        )


def _copy_value(value: Any) -> Any:
    try:
        return copy.deepcopy(value)
    except Exception:
        return value
