"""HTTP transport: envelope in, SentryResponse out."""

import json
from typing import Protocol

import httpx

from ..cancellation import CancellationToken
from ..config import SentryOptions
from ..diagnostics import IDiagnosticLogger, resolve_diagnostic_logger
from ..dsn import Dsn
from ..envelope import ENVELOPE_CONTENT_TYPE, Envelope
from ..models import SentryLevel, SentryResponse
from .auth import AddAuthHeader
from .cancellable import CANCELLATION_EXTENSION


class ITransport(Protocol):
    """Delivers envelopes to the ingestion endpoint."""

    async def send_envelope(
        self, envelope: Envelope, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        """Send one envelope. Remote rejections are returned, not raised."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


def _status_name(status_code: int) -> str:
    """PascalCase status name, e.g. 502 -> "BadGateway"."""
    try:
        name = httpx.codes(status_code).name
    except ValueError:
        return str(status_code)
    return "".join(word.capitalize() for word in name.split("_"))


class HttpTransport:
    """Sends envelopes with an httpx client.

    The client is shared by concurrent sends; nothing else here is mutable.
    """

    NO_MESSAGE_FALLBACK = "No message"
    REJECTED_TEMPLATE = (
        "Sentry rejected the envelope {0}. Status code: {1}. Sentry response: {2}"
    )

    def __init__(
        self,
        options: SentryOptions,
        client: httpx.AsyncClient,
        add_auth_header: AddAuthHeader,
        logger: IDiagnosticLogger | None = None,
    ):
        self._endpoint = Dsn.parse(options.dsn or "").envelope_endpoint
        self._client = client
        self._add_auth_header = add_auth_header
        self._logger = logger or resolve_diagnostic_logger(options)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def create_request(self, envelope: Envelope) -> httpx.Request:
        """Build the POST request carrying the serialized envelope."""
        headers = httpx.Headers({"Content-Type": ENVELOPE_CONTENT_TYPE})
        self._add_auth_header(headers)
        return self._client.build_request(
            "POST",
            self._endpoint,
            headers=headers,
            content=envelope.serialize(),
        )

    async def send_envelope(
        self, envelope: Envelope, cancellation: CancellationToken | None = None
    ) -> SentryResponse:
        """Send once; interpret the status code."""
        request = self.create_request(envelope)
        request.extensions[CANCELLATION_EXTENSION] = cancellation

        response = await self._client.send(request)
        try:
            await response.aread()
        finally:
            await response.aclose()

        event_id = envelope.try_get_event_id()
        if response.is_success:
            return SentryResponse.ok(event_id)

        message = self._extract_message(response)
        if self._logger.is_enabled(SentryLevel.ERROR):
            self._logger.log(
                SentryLevel.ERROR,
                self.REJECTED_TEMPLATE,
                event_id,
                _status_name(response.status_code),
                message,
            )
        return SentryResponse.rejected(event_id, message)

    def _extract_message(self, response: httpx.Response) -> str:
        if not response.content:
            return self.NO_MESSAGE_FALLBACK
        try:
            body = json.loads(response.content)
        except ValueError:
            return self.NO_MESSAGE_FALLBACK
        if isinstance(body, dict):
            for key in ("detail", "message"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return self.NO_MESSAGE_FALLBACK

    async def aclose(self) -> None:
        await self._client.aclose()
