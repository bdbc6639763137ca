"""Casos de uso do relay."""

from .relay_content_event import RelayContentEventUseCase, RelaySummary

__all__ = [
    "RelayContentEventUseCase",
    "RelaySummary",
]
