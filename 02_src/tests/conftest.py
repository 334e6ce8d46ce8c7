"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import httpx
import pytest

# Add source root and this directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from samples import VALID_DSN_WITH_SECRET, RecordingHandler  # noqa: E402


@pytest.fixture
def diagnostic_logger():
    """In-memory diagnostic logger."""
    from sentry_core.diagnostics import InMemoryDiagnosticLogger

    return InMemoryDiagnosticLogger()


@pytest.fixture
def options(diagnostic_logger):
    """Enabled options with debug logging into diagnostic_logger."""
    from sentry_core import SentryOptions

    return SentryOptions(
        dsn=VALID_DSN_WITH_SECRET,
        debug=True,
        diagnostic_logger=diagnostic_logger,
    )


@pytest.fixture
def handler():
    """Handler answering 200 to everything."""
    return RecordingHandler()


@pytest.fixture
def make_transport(options):
    """Factory for HttpTransport over a MockTransport handler."""
    from sentry_core.transport import HttpTransport

    def factory(handler, add_auth_header=lambda headers: None, transport_options=None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpTransport(transport_options or options, client, add_auth_header)

    return factory


@pytest.fixture
def make_sdk(options, make_transport):
    """Factory for an enabled Sdk whose requests go to ``handler``."""
    from sentry_core import Sdk, SentryClient

    def factory(handler, clock=None):
        client = SentryClient(options, transport=make_transport(handler))
        return Sdk(options, client=client, clock=clock)

    return factory
