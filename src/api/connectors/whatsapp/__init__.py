"""Conector WhatsApp - adapter de borda para a Cloud API (Graph API).

Único ponto de IO com a Meta e com a origem das mídias:
- HTTP client com retry/backoff e erros Meta
- Download de mídia por URL (poster)
- Cliente de mensagens (texto, imagem + legenda, handshake)
"""

from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import WhatsAppHttpClient, create_whatsapp_http_client
from .media import HttpMediaFetcher
from .messaging_client import (
    GraphApiMessagingClient,
    build_image_payload,
    build_text_payload,
    to_recipient_id,
)
from .meta_errors import WhatsAppApiError, is_permanent_error, parse_meta_error

__all__ = [
    "GraphApiMessagingClient",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "HttpMediaFetcher",
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "build_image_payload",
    "build_text_payload",
    "create_whatsapp_http_client",
    "is_permanent_error",
    "parse_meta_error",
    "to_recipient_id",
]
