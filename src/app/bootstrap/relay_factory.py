"""Factory de wiring do relay (bootstrap).

Único módulo que acopla app <-> api: instancia o cliente Graph API,
o fetcher de mídia e injeta ambos no dispatcher/use case.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.connectors.whatsapp import (
    GraphApiMessagingClient,
    HttpMediaFetcher,
    create_whatsapp_http_client,
)
from app.services.client_readiness import ClientReadiness
from app.services.notification_dispatcher import NotificationDispatcher
from app.use_cases.relay_content_event import RelayContentEventUseCase
from config.settings import get_relay_settings, get_whatsapp_settings

if TYPE_CHECKING:
    from app.protocols.messaging import MediaFetcherProtocol, MessagingClientProtocol
    from config.settings import RelaySettings, WhatsAppSettings


def create_messaging_client(
    settings: WhatsAppSettings | None = None,
) -> GraphApiMessagingClient:
    """Cria cliente de mensagens Graph API com settings do ambiente."""
    whatsapp = settings or get_whatsapp_settings()
    return GraphApiMessagingClient(
        settings=whatsapp,
        http_client=create_whatsapp_http_client(whatsapp),
    )


def create_media_fetcher(settings: WhatsAppSettings | None = None) -> HttpMediaFetcher:
    """Cria fetcher de poster com os limites de mídia configurados."""
    whatsapp = settings or get_whatsapp_settings()
    return HttpMediaFetcher(
        timeout_seconds=whatsapp.media_fetch_timeout_seconds,
        max_size_bytes=whatsapp.media_max_size_bytes,
    )


def create_relay_use_case(
    *,
    client: MessagingClientProtocol,
    media_fetcher: MediaFetcherProtocol,
    readiness: ClientReadiness | None = None,
    relay_settings: RelaySettings | None = None,
) -> RelayContentEventUseCase:
    """Wiring do use case com destinos fixos vindos da configuração.

    Args:
        client: Cliente de mensagens (Graph API ou fake em testes)
        media_fetcher: Fetcher de mídia por URL
        readiness: Estado de readiness do cliente (opcional)
        relay_settings: RelaySettings; se None, carrega do ambiente
    """
    relay = relay_settings or get_relay_settings()
    dispatcher = NotificationDispatcher(
        client=client,
        media_fetcher=media_fetcher,
        destinations=relay.destinations,
    )
    return RelayContentEventUseCase(
        dispatcher=dispatcher,
        readiness=readiness,
        readiness_timeout_seconds=relay.readiness_timeout_seconds,
        default_event_type=relay.default_event_type,
        poster_enabled=relay.poster_enabled,
    )
