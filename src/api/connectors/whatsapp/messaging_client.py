"""Cliente de mensagens WhatsApp sobre a Cloud API (Graph API).

Implementa MessagingClientProtocol:
- send_message(destino, texto)            -> mensagem de texto
- send_message(destino, mídia, caption=…) -> upload + mensagem de imagem
- initialize()                            -> consulta o número remetente
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.protocols.models import (
    MEDIA_REJECTED,
    MEDIA_UPLOAD_FAILED,
    WHATSAPP_API_ERROR,
    ClientInfo,
    DeliveryOutcome,
    MediaObject,
)
from utils.masking import mask_destination

from .http_base import HttpError

if TYPE_CHECKING:
    from config.settings import WhatsAppSettings

    from .http_client import WhatsAppHttpClient

logger = logging.getLogger(__name__)

# Limites da Cloud API
TEXT_BODY_MAX_LENGTH = 4096
MEDIA_CAPTION_MAX_LENGTH = 1024

# Sufixo de chat id individual do WhatsApp Web (ex: 5511999990001@c.us)
CHAT_ID_SUFFIX = "@c.us"


def to_recipient_id(destination: str) -> str:
    """Converte destino configurado no wa_id aceito pela Cloud API."""
    recipient = destination.strip()
    if recipient.endswith(CHAT_ID_SUFFIX):
        recipient = recipient[: -len(CHAT_ID_SUFFIX)]
    return recipient.lstrip("+")


def build_text_payload(destination: str, text: str) -> dict[str, Any]:
    """Payload de texto; preview de link ligado para IMDb/TMDb/Jellyfin."""
    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": to_recipient_id(destination),
        "type": "text",
        "text": {
            "preview_url": True,
            "body": _truncate(text, TEXT_BODY_MAX_LENGTH),
        },
    }


def build_image_payload(
    destination: str,
    media_id: str,
    caption: str | None = None,
) -> dict[str, Any]:
    """Payload de imagem por media_id com legenda opcional."""
    image: dict[str, Any] = {"id": media_id}
    if caption:
        image["caption"] = _truncate(caption, MEDIA_CAPTION_MAX_LENGTH)
    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": to_recipient_id(destination),
        "type": "image",
        "image": image,
    }


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def _failed(
    destination: str,
    error_code: str,
    exc: HttpError,
    *,
    used_media: bool,
) -> DeliveryOutcome:
    return DeliveryOutcome(
        destination=destination,
        success=False,
        used_media=used_media,
        error_code=error_code,
        error_message=str(exc),
    )


class GraphApiMessagingClient:
    """Envio de mensagens pela Graph API."""

    def __init__(
        self,
        settings: WhatsAppSettings,
        http_client: WhatsAppHttpClient,
    ) -> None:
        self._settings = settings
        self._http = http_client

    async def initialize(self) -> ClientInfo:
        """Handshake: valida token e número consultando /{phone_number_id}.

        Raises:
            HttpError: Token inválido, número inexistente ou API indisponível
            ValueError: Credenciais não configuradas
        """
        data = await self._http.get_json(
            self._settings.get_phone_number_endpoint(),
            self._settings.access_token,
            operation="phone_number_probe",
        )
        return ClientInfo(
            phone_number_id=str(data.get("id") or self._settings.phone_number_id),
            display_phone_number=str(data.get("display_phone_number") or ""),
            verified_name=str(data.get("verified_name") or ""),
        )

    async def send_message(
        self,
        destination: str,
        content: str | MediaObject,
        *,
        caption: str | None = None,
    ) -> DeliveryOutcome:
        """Envia texto ou mídia para um destino.

        Erros de transporte viram DeliveryOutcome(success=False); só
        ValueError de configuração propaga. Falhas da mídia usam
        MEDIA_UPLOAD_FAILED (upload) ou MEDIA_REJECTED (mensagem de
        imagem) para o chamador poder reenviar como texto.
        """
        used_media = isinstance(content, MediaObject)
        if isinstance(content, MediaObject):
            try:
                media_id = await self._upload(content)
            except HttpError as exc:
                return _failed(destination, MEDIA_UPLOAD_FAILED, exc, used_media=True)
            payload = build_image_payload(destination, media_id, caption)
            error_code = MEDIA_REJECTED
        else:
            payload = build_text_payload(destination, content)
            error_code = WHATSAPP_API_ERROR

        try:
            response = await self._http.send_message(
                endpoint=self._settings.get_messages_endpoint(),
                access_token=self._settings.access_token,
                payload=payload,
            )
        except HttpError as exc:
            return _failed(destination, error_code, exc, used_media=used_media)

        messages = response.get("messages")
        first = messages[0] if isinstance(messages, list) and messages else {}
        message_id = str(first.get("id", "unknown")) if isinstance(first, dict) else "unknown"
        logger.debug(
            "whatsapp_message_accepted",
            extra={"destination": mask_destination(destination), "message_id": message_id},
        )
        return DeliveryOutcome(
            destination=destination,
            success=True,
            used_media=used_media,
            message_id=message_id,
        )

    async def _upload(self, media: MediaObject) -> str:
        media_id = await self._http.upload_media(
            self._settings.get_media_endpoint(),
            self._settings.access_token,
            media,
            timeout=self._settings.media_upload_timeout_seconds,
        )
        logger.debug(
            "whatsapp_media_uploaded",
            extra={"media_id": media_id, "size_bytes": media.size_bytes},
        )
        return media_id
