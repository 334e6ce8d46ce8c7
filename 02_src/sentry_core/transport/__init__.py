"""Transport module."""

from .auth import AUTH_HEADER_NAME, AddAuthHeader, auth_header_callback, build_auth_header
from .cancellable import CANCELLATION_EXTENSION, CancellableTransport
from .http_transport import HttpTransport, ITransport

__all__ = [
    "AUTH_HEADER_NAME",
    "AddAuthHeader",
    "CANCELLATION_EXTENSION",
    "CancellableTransport",
    "HttpTransport",
    "ITransport",
    "auth_header_callback",
    "build_auth_header",
]
