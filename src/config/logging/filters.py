"""Filter que injeta contexto da requisição em cada record."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


def _no_correlation_id() -> str:
    return ""


class CorrelationIdFilter(logging.Filter):
    """Adiciona `correlation_id` e `service` aos records; nunca descarta.

    Um correlation_id passado via `extra` tem precedência sobre o getter.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter or _no_correlation_id

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._correlation_id_getter()
        record.service = self._service_name
        return True
