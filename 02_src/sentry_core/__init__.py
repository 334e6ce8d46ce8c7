"""sentry-core: event capture, scope context and envelope transport."""

from .cancellation import CancellationToken
from .config import SentryOptions
from .diagnostics import DiagnosticLogger, IDiagnosticLogger, InMemoryDiagnosticLogger
from .dsn import Dsn
from .envelope import Envelope, EnvelopeItem
from .exceptions import (
    EventSerializationError,
    InvalidDsnError,
    RequestCancelledError,
    ScopeReleaseError,
    SentryError,
)
from .models import (
    Breadcrumb,
    BreadcrumbLevel,
    LogEntry,
    ResponseStatus,
    Scope,
    SentryEvent,
    SentryLevel,
    SentryResponse,
    User,
)
from .scope_stack import ScopeHandle, ScopeStack
from .sdk import ISdk, ISentryClient, Sdk, SentryClient, init
from .transport import CancellableTransport, HttpTransport, ITransport

__all__ = [
    # Entry point
    "init",
    "Sdk",
    "ISdk",
    "SentryClient",
    "ISentryClient",
    "SentryOptions",
    # Models
    "Breadcrumb",
    "BreadcrumbLevel",
    "LogEntry",
    "ResponseStatus",
    "Scope",
    "SentryEvent",
    "SentryLevel",
    "SentryResponse",
    "User",
    # Components
    "ScopeStack",
    "ScopeHandle",
    "Envelope",
    "EnvelopeItem",
    "HttpTransport",
    "ITransport",
    "CancellableTransport",
    "CancellationToken",
    "Dsn",
    "DiagnosticLogger",
    "IDiagnosticLogger",
    "InMemoryDiagnosticLogger",
    # Errors
    "SentryError",
    "InvalidDsnError",
    "EventSerializationError",
    "ScopeReleaseError",
    "RequestCancelledError",
]
