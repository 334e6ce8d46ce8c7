"""Core data models for sentry-core."""

from .breadcrumb import Breadcrumb, BreadcrumbLevel
from .scope import DEFAULT_MAX_BREADCRUMBS, Scope, User
from .event import SentryEvent, SentryLevel, new_event_id
from .response import ResponseStatus, SentryResponse
from .log_entry import LogEntry

__all__ = [
    # Breadcrumbs
    "Breadcrumb",
    "BreadcrumbLevel",
    # Scope
    "DEFAULT_MAX_BREADCRUMBS",
    "Scope",
    "User",
    # Events
    "SentryEvent",
    "SentryLevel",
    "new_event_id",
    # Responses
    "ResponseStatus",
    "SentryResponse",
    # Diagnostics
    "LogEntry",
]
