"""Exceptions raised by sentry-core.

Remote rejections are never raised; they come back as rejected responses.
Everything here is either a programming error or a local fault that the
caller has to see.
"""


class SentryError(Exception):
    """Base class for all sentry-core errors."""


class InvalidDsnError(SentryError, ValueError):
    """The configured DSN could not be parsed."""


class EventSerializationError(SentryError):
    """An event could not be turned into a valid envelope."""

    def __init__(self, event_id: str, reason: str):
        super().__init__(f"Event {event_id} could not be serialized: {reason}")
        self.event_id = event_id
        self.reason = reason


class ScopeReleaseError(SentryError, RuntimeError):
    """A scope handle was released out of LIFO order."""


class RequestCancelledError(SentryError):
    """A send was aborted because its cancellation token fired."""
