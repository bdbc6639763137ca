"""Normalizer Jellyfin: payload do plugin de webhook → NormalizedRecord."""

from ._extraction_helpers import strip_trailing_slash
from .normalizer import MissingItemError, normalize_content_event

__all__ = [
    "MissingItemError",
    "normalize_content_event",
    "strip_trailing_slash",
]
