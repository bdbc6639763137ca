"""Registro de métricas via structured logging.

As métricas são logs estruturados com `metric_type`, agregáveis depois
(Cloud Logging, Loki, etc.).

Uso:
    from app.observability import record_delivery, record_latency

    start = time.perf_counter()
    outcomes = await dispatcher.dispatch(message)
    record_latency("relay", "dispatch", (time.perf_counter() - start) * 1000)
    record_delivery(outcomes)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.protocols.models import DeliveryOutcome

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "relay", "poster_fetch")
        operation: Nome da operação (ex: "dispatch", "from_url")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (o filter preenche se omitido)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_delivery(outcomes: Sequence[DeliveryOutcome]) -> None:
    """Registra contadores de entrega de uma requisição."""
    delivered = sum(1 for outcome in outcomes if outcome.success)
    logger.info(
        "metric_delivery",
        extra={
            "metric_type": "delivery",
            "component": "dispatcher",
            "attempted": len(outcomes),
            "delivered": delivered,
            "failed": len(outcomes) - delivered,
            "with_media": sum(1 for outcome in outcomes if outcome.used_media),
        },
    )
