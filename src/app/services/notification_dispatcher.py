"""Despacho da mensagem composta para os destinos configurados.

Regras:
- Destinos fixos, injetados na construção, enviados na ordem configurada
- Com poster: baixa a mídia uma vez (unsafe_mime) antes de qualquer envio
- Falha no download do poster: degrada para envio somente texto
- Upload ou mensagem de imagem rejeitados: reenvia o destino só com texto
- Falha em um destino é logada e não impede os demais
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.protocols.models import (
    DELIVERY_FAILED,
    MEDIA_ERROR_CODES,
    MEDIA_UPLOAD_FAILED,
    DeliveryOutcome,
)
from config.logging import log_fallback
from utils.masking import mask_destination

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.content_event import ComposedMessage
    from app.protocols.messaging import MediaFetcherProtocol, MessagingClientProtocol
    from app.protocols.models import MediaObject

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Envia legenda (texto ou poster + legenda) para cada destino."""

    def __init__(
        self,
        client: MessagingClientProtocol,
        media_fetcher: MediaFetcherProtocol,
        destinations: Sequence[str],
    ) -> None:
        self._client = client
        self._media_fetcher = media_fetcher
        self._destinations = tuple(destinations)

    @property
    def destinations(self) -> tuple[str, ...]:
        return self._destinations

    async def dispatch(self, message: ComposedMessage) -> list[DeliveryOutcome]:
        """Tenta o envio para todos os destinos, em ordem.

        Returns:
            Um DeliveryOutcome por destino, na ordem configurada.
        """
        if not self._destinations:
            logger.warning("dispatch_skipped_no_destinations")
            return []

        media = await self._fetch_poster(message.poster_url) if message.poster_url else None

        outcomes: list[DeliveryOutcome] = []
        for destination in self._destinations:
            outcome = await self._send_one(destination, message.caption, media)
            if media is not None and _media_failed(outcome):
                log_fallback(logger, "poster_delivery", reason=outcome.error_code)
                if outcome.error_code == MEDIA_UPLOAD_FAILED:
                    # Upload repetiria a mesma falha para os demais destinos
                    media = None
                outcome = await self._send_one(destination, message.caption, None)
            outcomes.append(outcome)
        return outcomes

    async def _fetch_poster(self, url: str) -> MediaObject | None:
        started_at = time.perf_counter()
        try:
            media = await self._media_fetcher.from_url(url, unsafe_mime=True)
        except Exception as exc:
            log_fallback(
                logger,
                "poster_fetch",
                reason=f"{type(exc).__name__}: {exc}",
                elapsed_ms=(time.perf_counter() - started_at) * 1000,
            )
            return None

        logger.info(
            "poster_fetched",
            extra={"mime_type": media.mime_type, "size_bytes": media.size_bytes},
        )
        return media

    async def _send_one(
        self,
        destination: str,
        caption: str,
        media: MediaObject | None,
    ) -> DeliveryOutcome:
        masked = mask_destination(destination)
        try:
            if media is not None:
                outcome = await self._client.send_message(destination, media, caption=caption)
            else:
                outcome = await self._client.send_message(destination, caption)
        except Exception as exc:
            logger.error(
                "notification_delivery_failed",
                extra={
                    "destination": masked,
                    "used_media": media is not None,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return DeliveryOutcome(
                destination=destination,
                success=False,
                used_media=media is not None,
                error_code=DELIVERY_FAILED,
                error_message=str(exc),
            )

        if outcome.success:
            logger.info(
                "notification_sent",
                extra={
                    "destination": masked,
                    "used_media": outcome.used_media,
                    "message_id": outcome.message_id,
                },
            )
        else:
            logger.error(
                "notification_delivery_failed",
                extra={
                    "destination": masked,
                    "used_media": outcome.used_media,
                    "error_code": outcome.error_code,
                    "error": outcome.error_message,
                },
            )
        return outcome


def _media_failed(outcome: DeliveryOutcome) -> bool:
    return not outcome.success and outcome.error_code in MEDIA_ERROR_CODES
