"""Use case: evento de conteúdo do Jellyfin → notificação WhatsApp.

Pipeline por requisição (sem estado compartilhado):
1. normaliza o payload (MissingItemError propaga para o HTTP → 400)
2. compõe legenda + poster
3. aguarda readiness do cliente (com timeout)
4. despacha para os destinos configurados

Falhas abaixo da validação ficam contidas: aparecem só em logs e no
RelaySummary, nunca no status HTTP.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from api.normalizers.jellyfin import normalize_content_event
from app.observability import record_delivery, record_latency
from app.services.caption_composer import compose_message
from config.settings.relay import DEFAULT_EVENT_TYPE

if TYPE_CHECKING:
    from app.protocols.models import DeliveryOutcome
    from app.services.client_readiness import ClientReadiness
    from app.services.notification_dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelaySummary:
    """Resultado do processamento de um evento."""

    poster_requested: bool
    client_ready: bool
    outcomes: list[DeliveryOutcome] = field(default_factory=list)

    @property
    def delivered(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return len(self.outcomes) - self.delivered

    @property
    def media_fallback_used(self) -> bool:
        """Poster pedido mas enviado só texto."""
        return self.poster_requested and not any(o.used_media for o in self.outcomes)


class RelayContentEventUseCase:
    """Orquestra normalização, composição e despacho."""

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        readiness: ClientReadiness | None = None,
        *,
        readiness_timeout_seconds: float = 10.0,
        default_event_type: str = DEFAULT_EVENT_TYPE,
        poster_enabled: bool = True,
    ) -> None:
        self._dispatcher = dispatcher
        self._readiness = readiness
        self._readiness_timeout = readiness_timeout_seconds
        self._default_event_type = default_event_type
        self._poster_enabled = poster_enabled

    async def execute(self, payload: Any) -> RelaySummary:
        """Processa um payload já parseado.

        Raises:
            MissingItemError: Se o payload não tiver `Item`.
        """
        record = normalize_content_event(payload, default_event_type=self._default_event_type)
        message = compose_message(record)
        if not self._poster_enabled and message.poster_url:
            message = replace(message, poster_url=None)

        logger.info(
            "content_event_normalized",
            extra={
                "event_type": record.event_type,
                "item_type": record.item_type,
                "item_id": record.item_id,
                "has_poster": message.has_poster,
                "caption_length": len(message.caption),
            },
        )

        client_ready = await self._await_client()

        started_at = time.perf_counter()
        outcomes = await self._dispatcher.dispatch(message)
        record_latency("relay", "dispatch", (time.perf_counter() - started_at) * 1000)
        record_delivery(outcomes)

        summary = RelaySummary(
            poster_requested=message.has_poster,
            client_ready=client_ready,
            outcomes=outcomes,
        )
        logger.info(
            "content_event_relayed",
            extra={
                "delivered": summary.delivered,
                "failed": summary.failed,
                "media_fallback_used": summary.media_fallback_used,
            },
        )
        return summary

    async def _await_client(self) -> bool:
        if self._readiness is None:
            return True
        if await self._readiness.wait_ready(self._readiness_timeout):
            return True
        logger.warning(
            "messaging_client_not_ready",
            extra={
                "timeout_seconds": self._readiness_timeout,
                "last_error": self._readiness.error,
            },
        )
        return False
