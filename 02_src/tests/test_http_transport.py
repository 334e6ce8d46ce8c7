"""Tests for HttpTransport."""

import httpx
import pytest

from samples import ENVELOPE_ENDPOINT, VALID_DSN, RecordingHandler, error_response
from sentry_core import SentryOptions
from sentry_core.cancellation import CancellationToken
from sentry_core.dsn import Dsn
from sentry_core.envelope import Envelope
from sentry_core.models import ResponseStatus, SentryEvent, SentryLevel
from sentry_core.transport import (
    AUTH_HEADER_NAME,
    CANCELLATION_EXTENSION,
    HttpTransport,
    auth_header_callback,
    build_auth_header,
)

REJECTED_TEMPLATE = "Sentry rejected the envelope {0}. Status code: {1}. Sentry response: {2}"


class TestSendEnvelope:
    """Tests for HttpTransport.send_envelope()."""

    @pytest.mark.asyncio
    async def test_cancellation_token_passed_to_client(self, make_transport):
        """Test a pre-cancelled token reaches the underlying send untouched."""
        token = CancellationToken()
        token.cancel()
        handler = RecordingHandler()
        transport = make_transport(handler)
        envelope = Envelope.from_event(SentryEvent(event_id="a" * 32))

        await transport.send_envelope(envelope, token)

        assert len(handler.requests) == 1
        forwarded = handler.requests[0].extensions[CANCELLATION_EXTENSION]
        assert forwarded is token
        assert forwarded.is_cancellation_requested

    @pytest.mark.asyncio
    async def test_no_token_forwarded_as_none(self, make_transport):
        """Test omitting the token does not invent one."""
        handler = RecordingHandler()
        transport = make_transport(handler)

        await transport.send_envelope(Envelope.from_event(SentryEvent()))

        assert handler.requests[0].extensions[CANCELLATION_EXTENSION] is None

    @pytest.mark.asyncio
    async def test_success_returns_ok_without_logging(self, make_transport, diagnostic_logger):
        """Test a 2xx answer is a success with the envelope's id."""
        transport = make_transport(RecordingHandler())
        envelope = Envelope.from_event(SentryEvent())

        response = await transport.send_envelope(envelope)

        assert response.status is ResponseStatus.SUCCESS
        assert response.event_id == envelope.try_get_event_id()
        assert diagnostic_logger.entries == []

    @pytest.mark.asyncio
    async def test_response_not_ok_with_message_logs_error(self, make_transport, diagnostic_logger):
        """Test a rejection logs one error entry with the body's message."""
        transport = make_transport(RecordingHandler(error_response(502, "Bad Gateway!")))
        envelope = Envelope.from_event(SentryEvent())

        response = await transport.send_envelope(envelope)

        errors = [e for e in diagnostic_logger.entries if e.level is SentryLevel.ERROR]
        assert len(errors) == 1
        entry = errors[0]
        assert entry.message == REJECTED_TEMPLATE
        assert entry.exception is None
        assert entry.args == (envelope.try_get_event_id(), "BadGateway", "Bad Gateway!")
        assert response.status is ResponseStatus.REJECTED
        assert response.message == "Bad Gateway!"

    @pytest.mark.asyncio
    async def test_response_not_ok_no_message_logs_error(self, make_transport, diagnostic_logger):
        """Test an empty rejection body falls back to the constant."""
        transport = make_transport(RecordingHandler(error_response(502, None)))
        envelope = Envelope.from_event(SentryEvent())

        await transport.send_envelope(envelope)

        errors = [e for e in diagnostic_logger.entries if e.level is SentryLevel.ERROR]
        assert len(errors) == 1
        assert errors[0].args == (
            envelope.try_get_event_id(),
            "BadGateway",
            HttpTransport.NO_MESSAGE_FALLBACK,
        )

    @pytest.mark.asyncio
    async def test_unparseable_body_uses_fallback(self, make_transport, diagnostic_logger):
        """Test a non-JSON rejection body falls back to the constant."""
        transport = make_transport(
            RecordingHandler(lambda request: httpx.Response(400, text="<html>oops</html>"))
        )

        response = await transport.send_envelope(Envelope.from_event(SentryEvent()))

        assert response.message == HttpTransport.NO_MESSAGE_FALLBACK
        assert diagnostic_logger.entries[0].args[1] == "BadRequest"

    @pytest.mark.asyncio
    async def test_unknown_status_code_name(self, make_transport, diagnostic_logger):
        """Test codes without a name are logged as numbers."""
        transport = make_transport(RecordingHandler(error_response(599, "odd")))

        await transport.send_envelope(Envelope.from_event(SentryEvent()))

        assert diagnostic_logger.entries[0].args[1] == "599"

    @pytest.mark.asyncio
    async def test_rejection_not_logged_when_level_disabled(self, make_transport):
        """Test the logger's level filter is respected."""
        from sentry_core.diagnostics import InMemoryDiagnosticLogger

        quiet = InMemoryDiagnosticLogger(min_level=SentryLevel.FATAL)
        options = SentryOptions(dsn=VALID_DSN, diagnostic_logger=quiet)
        transport = make_transport(
            RecordingHandler(error_response(429, "slow down")), transport_options=options
        )

        response = await transport.send_envelope(Envelope.from_event(SentryEvent()))

        assert response.status is ResponseStatus.REJECTED
        assert quiet.entries == []

    @pytest.mark.asyncio
    async def test_transport_fault_propagates(self, make_transport):
        """Test connection failures are raised, not swallowed."""

        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(RecordingHandler(refuse))

        with pytest.raises(httpx.ConnectError):
            await transport.send_envelope(Envelope.from_event(SentryEvent()))


class TestCreateRequest:
    """Tests for HttpTransport.create_request()."""

    def test_auth_header_invoked_once(self, make_transport):
        """Test the auth callback runs exactly once per request."""
        calls = []
        transport = make_transport(RecordingHandler(), add_auth_header=calls.append)

        transport.create_request(Envelope.from_event(SentryEvent()))

        assert len(calls) == 1
        assert isinstance(calls[0], httpx.Headers)

    def test_request_method_post(self, make_transport):
        """Test requests are POSTs."""
        request = make_transport(RecordingHandler()).create_request(
            Envelope.from_event(SentryEvent())
        )
        assert request.method == "POST"

    def test_sentry_url_from_options(self, make_transport, options):
        """Test the URL is the DSN's envelope endpoint."""
        request = make_transport(RecordingHandler()).create_request(
            Envelope.from_event(SentryEvent())
        )
        assert str(request.url) == Dsn.parse(options.dsn).envelope_endpoint
        assert str(request.url) == ENVELOPE_ENDPOINT

    def test_content_includes_event(self, make_transport):
        """Test the body text contains the event id."""
        envelope = Envelope.from_event(SentryEvent())
        request = make_transport(RecordingHandler()).create_request(envelope)

        assert envelope.try_get_event_id() in request.content.decode("utf-8")
        assert request.headers["Content-Type"] == "application/x-sentry-envelope"

    def test_auth_header_applied(self, make_transport, options):
        """Test the default callback writes the X-Sentry-Auth header."""
        dsn = Dsn.parse(options.dsn)
        transport = make_transport(
            RecordingHandler(), add_auth_header=auth_header_callback(dsn, "sentry-core", "1.2.3")
        )

        request = transport.create_request(Envelope.from_event(SentryEvent()))

        assert request.headers[AUTH_HEADER_NAME] == (
            "Sentry sentry_version=7, sentry_client=sentry-core/1.2.3, "
            "sentry_key=d4d82fc1c2c4032a83f3a29aa3a3aff, "
            "sentry_secret=ed0a8589a0bb4d4793ac4c70375f3d65"
        )


class TestAuthHeader:
    """Tests for build_auth_header()."""

    def test_without_secret(self):
        """Test the secret part is omitted when the DSN has none."""
        header = build_auth_header(Dsn.parse(VALID_DSN), "sentry-core", "0.1.0")
        assert header == (
            "Sentry sentry_version=7, sentry_client=sentry-core/0.1.0, "
            "sentry_key=d4d82fc1c2c4032a83f3a29aa3a3aff"
        )
