"""Sample DSNs and HTTP handlers shared by the tests."""

import httpx

VALID_DSN = "https://d4d82fc1c2c4032a83f3a29aa3a3aff@fake-sentry.io:65535/2147483647"
VALID_DSN_WITH_SECRET = (
    "https://d4d82fc1c2c4032a83f3a29aa3a3aff:ed0a8589a0bb4d4793ac4c70375f3d65"
    "@fake-sentry.io:65535/2147483647"
)
ENVELOPE_ENDPOINT = "https://fake-sentry.io:65535/api/2147483647/envelope/"


def ok_response(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"id": "ok"})


def error_response(status_code: int, message: str | None):
    """Build a responder returning ``status_code`` with an optional detail body."""

    def respond(request: httpx.Request) -> httpx.Response:
        if message is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json={"detail": message})

    return respond


class RecordingHandler:
    """MockTransport handler that remembers every request it receives."""

    def __init__(self, respond=ok_response):
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)
