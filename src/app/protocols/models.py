"""Modelos trocados entre o core e o cliente de mensagens."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MediaObject:
    """Mídia baixada de uma URL, pronta para envio.

    Attributes:
        data: Bytes do arquivo
        mime_type: MIME informado pela origem (ex: image/jpeg)
        filename: Nome derivado da URL
        source_url: URL de origem (para logs/diagnóstico)
    """

    data: bytes
    mime_type: str
    filename: str
    source_url: str = ""

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class DeliveryOutcome:
    """Resultado do envio para um destino."""

    destination: str
    success: bool
    used_media: bool = False
    message_id: str | None = None
    error_code: str | None = None
    error_message: str | None = None


@dataclass(frozen=True, slots=True)
class ClientInfo:
    """Dados do remetente obtidos no handshake de readiness."""

    phone_number_id: str
    display_phone_number: str = ""
    verified_name: str = ""


# Códigos de DeliveryOutcome.error_code
DELIVERY_FAILED = "DELIVERY_FAILED"
WHATSAPP_API_ERROR = "WHATSAPP_API_ERROR"
MEDIA_UPLOAD_FAILED = "MEDIA_UPLOAD_FAILED"
MEDIA_REJECTED = "MEDIA_REJECTED"

# Falhas da mídia em si: o mesmo destino ainda pode receber só texto
MEDIA_ERROR_CODES = frozenset({MEDIA_UPLOAD_FAILED, MEDIA_REJECTED})
