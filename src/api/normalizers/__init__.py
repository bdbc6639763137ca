"""Normalizers: conversão de payloads externos para modelos internos.

Estrutura:
- jellyfin/: eventos do plugin de webhook do Jellyfin
"""

from .jellyfin import MissingItemError, normalize_content_event

__all__ = [
    "MissingItemError",
    "normalize_content_event",
]
