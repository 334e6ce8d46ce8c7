"""Sdk: the entry point applications capture through."""

import asyncio
import inspect
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Mapping, Protocol, TypeVar

from ..cancellation import CancellationToken
from ..config import SentryOptions
from ..diagnostics import resolve_diagnostic_logger
from ..logging_config import get_logger
from ..models import (
    Breadcrumb,
    BreadcrumbLevel,
    Scope,
    SentryEvent,
    SentryLevel,
    SentryResponse,
)
from ..scope_stack import IScopeHandle, NoOpScopeHandle, ScopeStack
from .client import ISentryClient, SentryClient

logger = get_logger(__name__)

T = TypeVar("T")

EventOrFactory = SentryEvent | Callable[[], SentryEvent]
AsyncEventOrFactory = (
    SentryEvent | Callable[[], SentryEvent] | Callable[[], Awaitable[SentryEvent]]
)
Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ISdk(Protocol):
    """Capture and scope API."""

    @property
    def is_enabled(self) -> bool:
        """False when no DSN is configured."""
        ...

    def configure_scope(self, configure: Callable[[Scope], None]) -> None:
        """Mutate the current scope."""
        ...

    def push_scope(self, state: Any = None) -> IScopeHandle:
        """Push a copy of the current scope; release the handle to pop it."""
        ...

    def add_breadcrumb(
        self,
        message: str,
        type: str | None = None,
        category: str | None = None,
        data: Mapping[str, str] | None = None,
        level: BreadcrumbLevel = BreadcrumbLevel.INFO,
    ) -> None:
        """Record a breadcrumb on the current scope."""
        ...

    def capture_event(self, event: EventOrFactory) -> SentryResponse:
        """Capture synchronously."""
        ...

    async def capture_event_async(
        self, event: AsyncEventOrFactory, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        """Capture without blocking the event loop."""
        ...

    def capture_exception(self, exception: BaseException) -> SentryResponse:
        """Capture an exception synchronously."""
        ...

    async def capture_exception_async(
        self, exception: BaseException, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        """Capture an exception without blocking the event loop."""
        ...

    def with_client_and_scope(
        self, handler: Callable[[ISentryClient, Scope], SentryResponse]
    ) -> SentryResponse:
        """Run custom logic with the client and a scope snapshot."""
        ...

    async def with_client_and_scope_async(
        self, handler: Callable[[ISentryClient, Scope], Awaitable[SentryResponse]]
    ) -> SentryResponse:
        """Async flavour of with_client_and_scope."""
        ...


class Sdk:
    """Explicit SDK state: a client plus the root of the scope stack.

    Captures never raise for remote rejections. The scope snapshot is taken
    once per capture, before anything can suspend.
    """

    def __init__(
        self,
        options: SentryOptions,
        client: ISentryClient | None = None,
        clock: Clock | None = None,
    ):
        self._options = options
        self._clock = clock or _utcnow
        self._client: ISentryClient | None = None
        self._scopes: ScopeStack | None = None

        if not options.is_enabled:
            logger.info("Sentry SDK disabled: no DSN configured")
            return

        self._client = client or SentryClient(
            options, logger=resolve_diagnostic_logger(options)
        )
        self._scopes = ScopeStack(Scope(max_breadcrumbs=options.max_breadcrumbs))
        logger.info("Sentry SDK initialized")

    @property
    def is_enabled(self) -> bool:
        return self._client is not None

    @property
    def options(self) -> SentryOptions:
        return self._options

    @property
    def client(self) -> ISentryClient | None:
        return self._client

    # Scope

    def configure_scope(self, configure: Callable[[Scope], None]) -> None:
        if self._scopes is not None:
            self._scopes.configure(configure)

    def push_scope(self, state: Any = None) -> IScopeHandle:
        if self._scopes is None:
            return NoOpScopeHandle()
        return self._scopes.push(state)

    def current_scope(self) -> Scope | None:
        return self._scopes.current() if self._scopes is not None else None

    def wrap(self, fn: Callable[..., T]) -> Callable[..., T]:
        """Bind ``fn`` to the current scopes so a new thread inherits them."""
        if self._scopes is None:
            return fn
        return self._scopes.wrap(fn)

    def add_breadcrumb(
        self,
        message: str,
        type: str | None = None,
        category: str | None = None,
        data: Mapping[str, str] | None = None,
        level: BreadcrumbLevel = BreadcrumbLevel.INFO,
    ) -> None:
        if self._scopes is None:
            return
        self._scopes.add_breadcrumb(
            Breadcrumb(
                message=message,
                type=type,
                category=category,
                data=data,
                level=level,
                timestamp=self._clock(),
            )
        )

    # Capture

    def capture_event(self, event: EventOrFactory) -> SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        _ensure_no_running_loop("capture_event")
        scope = self._scopes.current()
        produced = event() if callable(event) else event
        envelope = self._client.prepare_envelope(produced, scope)
        return asyncio.run(self._client.send_envelope(envelope))

    async def capture_event_async(
        self, event: AsyncEventOrFactory, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        scope = self._scopes.current()
        produced = event() if callable(event) else event
        if inspect.isawaitable(produced):
            produced = await produced
        return await self._client.capture_event(produced, scope, cancellation)

    def capture_exception(self, exception: BaseException) -> SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        return self.capture_event(lambda: SentryEvent.from_exception(exception))

    async def capture_exception_async(
        self, exception: BaseException, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        return await self.capture_event_async(
            lambda: SentryEvent.from_exception(exception), cancellation
        )

    def capture_message(
        self, message: str, level: SentryLevel = SentryLevel.INFO
    ) -> SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        return self.capture_event(lambda: SentryEvent.from_message(message, level))

    async def capture_message_async(
        self,
        message: str,
        level: SentryLevel = SentryLevel.INFO,
        cancellation: CancellationToken | None = None,
    ) -> SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        return await self.capture_event_async(
            lambda: SentryEvent.from_message(message, level), cancellation
        )

    def with_client_and_scope(
        self, handler: Callable[[ISentryClient, Scope], T]
    ) -> T | SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        return handler(self._client, self._scopes.current())

    async def with_client_and_scope_async(
        self, handler: Callable[[ISentryClient, Scope], Awaitable[T]]
    ) -> T | SentryResponse:
        if self._client is None:
            return SentryResponse.disabled()
        return await handler(self._client, self._scopes.current())

    # Lifecycle

    async def close(self) -> None:
        """Drop the client and release its connections."""
        if self._client is not None:
            await self._client.close()
            logger.info("Sentry SDK closed")
        self._client = None
        self._scopes = None

    async def __aenter__(self) -> "Sdk":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def _ensure_no_running_loop(operation: str) -> None:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return
    raise RuntimeError(
        f"{operation}() cannot run inside a running event loop; "
        f"use {operation}_async() instead"
    )


def init(options: SentryOptions | str | None = None, **kwargs: Any) -> Sdk:
    """Create the SDK state from options, a DSN string, or the environment."""
    if isinstance(options, str):
        options = SentryOptions(dsn=options, **kwargs)
    elif options is None:
        options = SentryOptions.from_env(**kwargs)
    elif kwargs:
        options = options.model_copy(update=kwargs)
    return Sdk(options)
