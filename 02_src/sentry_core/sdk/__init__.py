"""Sdk module."""

from .client import ISentryClient, SentryClient, create_http_transport
from .sdk import ISdk, Sdk, init

__all__ = ["ISdk", "ISentryClient", "Sdk", "SentryClient", "create_http_transport", "init"]
