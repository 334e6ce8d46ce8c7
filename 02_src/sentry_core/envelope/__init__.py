"""Envelope module."""

from .envelope import ENVELOPE_CONTENT_TYPE, EVENT_ITEM_TYPE, Envelope, EnvelopeItem

__all__ = ["ENVELOPE_CONTENT_TYPE", "EVENT_ITEM_TYPE", "Envelope", "EnvelopeItem"]
