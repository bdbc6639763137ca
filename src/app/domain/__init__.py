"""Modelos de domínio do relay."""

from .content_event import NOT_AVAILABLE, ComposedMessage, NormalizedRecord

__all__ = [
    "NOT_AVAILABLE",
    "ComposedMessage",
    "NormalizedRecord",
]
