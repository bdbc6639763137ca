"""Exceções utilitárias compartilhadas."""

from .exceptions import InfrastructureError, MediaFetchError

__all__ = [
    "InfrastructureError",
    "MediaFetchError",
]
