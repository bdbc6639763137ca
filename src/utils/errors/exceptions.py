"""Exceções compartilhadas para falhas recuperáveis do relay."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class MediaFetchError(InfrastructureError):
    """Falha ao baixar o poster (rede, status HTTP, tamanho ou MIME)."""
