"""Configuração centralizada de logging.

Uso:
    from config.logging import configure_logging, get_logger

    # Uma vez no startup (app/bootstrap/)
    configure_logging(level="INFO", service_name="jellyfin_relay")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("notification_sent", extra={"destination": "***0001"})
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter, create_text_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "jellyfin_relay"

# Bibliotecas que logam cada requisição em INFO
_NOISY_LOGGERS = ("httpx", "httpcore")


def _normalize_level(level: str) -> str:
    normalized = level.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    return normalized


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    json_output: bool = True,
) -> None:
    """Instala um único handler em stdout no logger raiz.

    Chamadas repetidas substituem o handler anterior (sem duplicar linhas).

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (sem diferenciar caixa)
        service_name: Valor do campo `service` em todo log
        correlation_id_getter: Retorna o correlation_id do contexto atual
        json_output: False usa texto legível (desenvolvimento local)

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    resolved = _normalize_level(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(create_json_formatter() if json_output else create_text_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(resolved)
    root.handlers = [handler]

    noisy_level = logging.DEBUG if resolved == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> logging.Logger:
    """Logger do módulo; service e correlation_id vêm do filter do handler."""
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra em WARNING que um caminho degradado foi usado.

    Exemplo:
        log_fallback(logger, "poster_fetch", reason="MediaFetchError: http_404", elapsed_ms=8012.4)
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = round(elapsed_ms, 2)

    logger.warning("Fallback applied for %s", component, extra=extra)
