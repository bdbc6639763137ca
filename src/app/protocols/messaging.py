"""Protocolos do cliente de mensagens externo.

O core depende apenas destes contratos; o transporte concreto
(Graph API) fica em api/connectors/whatsapp e é ligado no bootstrap.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import ClientInfo, DeliveryOutcome, MediaObject


class MessagingClientProtocol(Protocol):
    """Contrato mínimo para enviar mensagens a um destino."""

    async def send_message(
        self,
        destination: str,
        content: str | MediaObject,
        *,
        caption: str | None = None,
    ) -> DeliveryOutcome: ...

    async def initialize(self) -> ClientInfo: ...


class MediaFetcherProtocol(Protocol):
    """Contrato para obter mídia a partir de uma URL."""

    async def from_url(self, url: str, *, unsafe_mime: bool = False) -> MediaObject: ...
