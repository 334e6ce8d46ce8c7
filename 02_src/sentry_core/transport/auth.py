"""Authentication header for the ingestion endpoint."""

from typing import Callable

import httpx

from ..dsn import Dsn

AUTH_HEADER_NAME = "X-Sentry-Auth"
PROTOCOL_VERSION = "7"

AddAuthHeader = Callable[[httpx.Headers], None]


def build_auth_header(dsn: Dsn, client_name: str, client_version: str) -> str:
    parts = [
        f"sentry_version={PROTOCOL_VERSION}",
        f"sentry_client={client_name}/{client_version}",
        f"sentry_key={dsn.public_key}",
    ]
    if dsn.secret_key:
        parts.append(f"sentry_secret={dsn.secret_key}")
    return "Sentry " + ", ".join(parts)


def auth_header_callback(dsn: Dsn, client_name: str, client_version: str) -> AddAuthHeader:
    """Callback that stamps the auth header onto outgoing request headers."""
    value = build_auth_header(dsn, client_name, client_version)

    def add_auth_header(headers: httpx.Headers) -> None:
        headers[AUTH_HEADER_NAME] = value

    return add_auth_header
