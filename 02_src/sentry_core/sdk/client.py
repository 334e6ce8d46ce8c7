"""SentryClient: merges scope into events and hands envelopes to a transport."""

from typing import Protocol

import httpx

from ..cancellation import CancellationToken
from ..config import SentryOptions
from ..diagnostics import IDiagnosticLogger, resolve_diagnostic_logger
from ..dsn import Dsn
from ..envelope import Envelope
from ..models import Scope, SentryEvent, SentryLevel, SentryResponse
from ..transport import CancellableTransport, HttpTransport, ITransport, auth_header_callback


class ISentryClient(Protocol):
    """Client half of the SDK: no ambient state, scope passed explicitly."""

    def prepare_envelope(self, event: SentryEvent, scope: Scope | None) -> Envelope:
        """Merge ``scope`` into ``event`` and build the envelope."""
        ...

    async def send_envelope(
        self, envelope: Envelope, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        """Deliver a prepared envelope."""
        ...

    async def capture_event(
        self,
        event: SentryEvent,
        scope: Scope | None = None,
        cancellation: CancellationToken | None = None,
    ) -> SentryResponse:
        """Prepare and deliver in one step."""
        ...

    async def close(self) -> None:
        """Release the transport."""
        ...


def create_http_transport(options: SentryOptions, logger: IDiagnosticLogger) -> HttpTransport:
    """Default transport: httpx client over a cancellation-aware layer."""
    dsn = Dsn.parse(options.dsn or "")
    client = httpx.AsyncClient(
        transport=CancellableTransport(httpx.AsyncHTTPTransport(retries=0)),
        timeout=options.send_timeout,
        limits=httpx.Limits(max_keepalive_connections=0),
    )
    return HttpTransport(
        options,
        client,
        auth_header_callback(dsn, options.sdk_name, options.sdk_version),
        logger=logger,
    )


class SentryClient:
    """Turns events into envelopes and sends them."""

    def __init__(
        self,
        options: SentryOptions,
        transport: ITransport | None = None,
        logger: IDiagnosticLogger | None = None,
    ):
        self._options = options
        self._logger = logger or resolve_diagnostic_logger(options)
        self._transport = transport or create_http_transport(options, self._logger)

    @property
    def options(self) -> SentryOptions:
        return self._options

    @property
    def transport(self) -> ITransport:
        return self._transport

    def prepare_envelope(self, event: SentryEvent, scope: Scope | None) -> Envelope:
        """Build the envelope from a merged copy; ``event`` is not modified."""
        merged = event.with_scope(scope) if scope is not None else event.copy()
        if merged.release is None:
            merged.release = self._options.release
        if merged.environment is None:
            merged.environment = self._options.environment
        return Envelope.from_event(merged)

    async def send_envelope(
        self, envelope: Envelope, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        response = await self._transport.send_envelope(envelope, cancellation)
        if response.success and self._logger.is_enabled(SentryLevel.DEBUG):
            self._logger.log(SentryLevel.DEBUG, "Event {0} delivered", response.event_id)
        return response

    async def capture_event(
        self,
        event: SentryEvent,
        scope: Scope | None = None,
        cancellation: CancellationToken | None = None,
    ) -> SentryResponse:
        envelope = self.prepare_envelope(event, scope)
        return await self.send_envelope(envelope, cancellation)

    async def close(self) -> None:
        await self._transport.aclose()
