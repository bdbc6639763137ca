"""Cliente HTTP especializado para a Graph API do WhatsApp.

Estende HttpClient genérico com:
- Autenticação Bearer (access_token validado antes de usar)
- Upload multipart de mídia
- Tratamento de erros Meta (error.type, error.code): permanente vs transitório
- Logging estruturado sem tokens ou telefones
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from .http_base import HttpClient, HttpClientConfig, HttpError
from .meta_errors import WhatsAppApiError, parse_meta_error

if TYPE_CHECKING:
    import httpx

    from app.protocols.models import MediaObject
    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP para a Graph API.

    Nunca retorna resposta mal-formada: JSON inválido, status != 2xx ou
    objeto `error` viram HttpError.
    """

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """POST JSON em /{phone_number_id}/messages.

        Raises:
            ValueError: Se access_token está vazio
            HttpError: Se erro HTTP ou Meta
        """
        headers = _auth_headers(access_token)
        headers["Content-Type"] = "application/json"
        response = await self.post(endpoint, json=payload, headers=headers)
        return self._process_response(response, "POST", "send_message")

    async def upload_media(
        self,
        endpoint: str,
        access_token: str,
        media: MediaObject,
        timeout: float | None = None,
    ) -> str:
        """Upload multipart em /{phone_number_id}/media.

        Returns:
            media_id atribuído pela Meta

        Raises:
            HttpError: Se erro HTTP/Meta ou resposta sem id
        """
        response = await self.post(
            endpoint,
            headers=_auth_headers(access_token),
            data={"messaging_product": "whatsapp", "type": media.mime_type},
            files={"file": (media.filename, media.data, media.mime_type)},
            timeout=timeout,
        )
        data = self._process_response(response, "POST", "upload_media")
        media_id = data.get("id")
        if not media_id:
            raise HttpError("media_upload_without_id", status_code=response.status_code)
        return str(media_id)

    async def get_json(
        self,
        endpoint: str,
        access_token: str,
        operation: str = "get",
    ) -> dict[str, Any]:
        """GET autenticado retornando o JSON da Meta."""
        response = await self.get(endpoint, headers=_auth_headers(access_token))
        return self._process_response(response, "GET", operation)

    def _process_response(
        self,
        response: httpx.Response,
        method: str,
        operation: str,
    ) -> dict[str, Any]:
        try:
            response_data = response.json()
        except json.JSONDecodeError as exc:
            logger.error(
                "whatsapp_api_invalid_json",
                extra={"operation": operation, "status_code": response.status_code},
            )
            raise HttpError("invalid_json_response", status_code=response.status_code) from exc

        meta_error = parse_meta_error(response_data)
        if meta_error:
            raise _meta_http_error(meta_error, method, operation)

        if response.status_code >= 400 or not isinstance(response_data, dict):
            raise HttpError(
                f"unexpected_response_{response.status_code}",
                status_code=response.status_code,
            )

        logger.debug(
            "whatsapp_api_ok",
            extra={"method": method, "operation": operation, "status_code": response.status_code},
        )
        return response_data


def _meta_http_error(meta_error: WhatsAppApiError, method: str, operation: str) -> HttpError:
    """Loga o erro da Meta (sem token/telefone) e o converte em HttpError.

    Permanente sai em ERROR: só uma ação do operador resolve.
    """
    logger.log(
        logging.ERROR if meta_error.is_permanent else logging.WARNING,
        "whatsapp_api_error",
        extra={
            "method": method,
            "operation": operation,
            "error_type": meta_error.error_type,
            "error_code": meta_error.error_code,
            "reason": meta_error.reason or None,
            "details": meta_error.details or None,
            "is_permanent": meta_error.is_permanent,
            "fbtrace_id": meta_error.trace_id,
        },
    )
    label = f", {meta_error.reason}" if meta_error.reason else ""
    return HttpError(
        f"Meta API error: {meta_error.error_type} ({meta_error.error_code}{label})",
        status_code=meta_error.error_code,
        is_retryable=not meta_error.is_permanent,
    )


def _auth_headers(access_token: str) -> dict[str, str]:
    if not access_token or not access_token.strip():
        raise ValueError(
            "access_token é obrigatório. Verifique se WHATSAPP_ACCESS_TOKEN está configurado."
        )
    return {"Authorization": f"Bearer {access_token}"}


def create_whatsapp_http_client(
    settings: WhatsAppSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> WhatsAppHttpClient:
    """Factory para criar cliente WhatsApp com config das settings.

    Args:
        settings: WhatsAppSettings opcional. Se None, carrega do ambiente.
        transport: Transport httpx opcional (testes).
    """
    from config.settings import get_whatsapp_settings

    whatsapp = settings or get_whatsapp_settings()
    config = HttpClientConfig(
        timeout_seconds=whatsapp.request_timeout_seconds,
        max_retries=whatsapp.max_retries,
        transport=transport,
    )
    return WhatsAppHttpClient(config=config)
