"""Settings do cliente WhatsApp (Cloud API / Graph API).

Credenciais do número remetente e limites de transporte usados pelo
conector em api/connectors/whatsapp/.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

GRAPH_API_VERSION = "v24.0"
GRAPH_API_BASE_URL = "https://graph.facebook.com"

# Limite de imagem aceito pela Cloud API
IMAGE_MAX_SIZE_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do remetente na Cloud API.

    Attributes:
        access_token: Token (system user) com permissão whatsapp_business_messaging
        phone_number_id: ID do número remetente (não é o telefone em si)
        api_version: Versão da Graph API usada nas URLs
        api_base_url: Host da Graph API (sobrescrito em testes)
        request_timeout_seconds: Timeout de envio e do probe de readiness
        max_retries: Novas tentativas em 429/5xx/timeout
        media_upload_timeout_seconds: Timeout do upload multipart do poster
        media_fetch_timeout_seconds: Timeout do download do poster no Jellyfin
        media_max_size_bytes: Poster maior que isso é descartado (vira texto)
    """

    access_token: str = ""
    phone_number_id: str = ""
    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL
    request_timeout_seconds: float = 30.0
    max_retries: int = 3
    media_upload_timeout_seconds: float = 120.0
    media_fetch_timeout_seconds: float = 15.0
    media_max_size_bytes: int = IMAGE_MAX_SIZE_BYTES

    @property
    def api_endpoint(self) -> str:
        """Prefixo versionado, ex: https://graph.facebook.com/v24.0."""
        return f"{self.api_base_url.rstrip('/')}/{self.api_version}"

    def _sender_url(self, resource: str = "") -> str:
        if not self.phone_number_id:
            raise ValueError("WHATSAPP_PHONE_NUMBER_ID não configurado")
        url = f"{self.api_endpoint}/{self.phone_number_id}"
        return f"{url}/{resource}" if resource else url

    def get_messages_endpoint(self) -> str:
        """POST de mensagens (texto e imagem)."""
        return self._sender_url("messages")

    def get_media_endpoint(self) -> str:
        """POST multipart de upload de mídia."""
        return self._sender_url("media")

    def get_phone_number_endpoint(self) -> str:
        """GET do número remetente (handshake de readiness).

        Raises:
            ValueError: Se phone_number_id não estiver configurado.
        """
        return self._sender_url()

    def validate(self) -> list[str]:
        """Retorna erros de configuração (vazia = OK)."""
        checks = (
            (bool(self.phone_number_id), "WHATSAPP_PHONE_NUMBER_ID não configurado"),
            (bool(self.access_token), "WHATSAPP_ACCESS_TOKEN não configurado"),
            (self.request_timeout_seconds > 0, "WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0"),
            (
                self.media_fetch_timeout_seconds > 0,
                "WHATSAPP_MEDIA_FETCH_TIMEOUT_SECONDS deve ser > 0",
            ),
            (self.max_retries >= 0, "WHATSAPP_MAX_RETRIES deve ser >= 0"),
            (self.media_max_size_bytes > 0, "WHATSAPP_MEDIA_MAX_SIZE_BYTES deve ser > 0"),
        )
        return [message for ok, message in checks if not ok]


def _load_from_env() -> WhatsAppSettings:
    env = os.environ
    return WhatsAppSettings(
        access_token=env.get("WHATSAPP_ACCESS_TOKEN", "").strip(),
        phone_number_id=env.get("WHATSAPP_PHONE_NUMBER_ID", "").strip(),
        api_version=env.get("WHATSAPP_API_VERSION", GRAPH_API_VERSION),
        api_base_url=env.get("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(env.get("WHATSAPP_REQUEST_TIMEOUT_SECONDS", 30)),
        max_retries=int(env.get("WHATSAPP_MAX_RETRIES", 3)),
        media_upload_timeout_seconds=float(
            env.get("WHATSAPP_MEDIA_UPLOAD_TIMEOUT_SECONDS", 120)
        ),
        media_fetch_timeout_seconds=float(env.get("WHATSAPP_MEDIA_FETCH_TIMEOUT_SECONDS", 15)),
        media_max_size_bytes=int(
            env.get("WHATSAPP_MEDIA_MAX_SIZE_BYTES", IMAGE_MAX_SIZE_BYTES)
        ),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """WhatsAppSettings do ambiente, carregado uma vez por processo."""
    return _load_from_env()
