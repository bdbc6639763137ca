"""Mascaramento de identificadores para logs (sem PII)."""

from __future__ import annotations


def mask_destination(destination: str, visible: int = 4) -> str:
    """Mantém só os últimos dígitos do destino (ex: ***0001)."""
    local = destination.split("@", 1)[0]
    if len(local) <= visible:
        return "***"
    return f"***{local[-visible:]}"
