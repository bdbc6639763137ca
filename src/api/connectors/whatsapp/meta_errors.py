"""Classificação do objeto `error` da Graph API.

A Meta devolve `{"error": {"type", "code", "message", "fbtrace_id",
"error_data": {"details"}}}`. O `code` tanto pode ser um status HTTP
quanto um código próprio do WhatsApp (13xxxx); as tabelas abaixo
decidem se vale repetir a chamada.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Limites de taxa e indisponibilidade da Meta
_RETRYABLE_CODES: dict[int, str] = {
    1: "api_unknown",
    2: "api_service",
    4: "app_rate_limit",
    80007: "waba_rate_limit",
    130429: "throughput_limit",
    131000: "something_went_wrong",
    131016: "service_unavailable",
    131056: "pair_rate_limit",
}

# Códigos que falham igual em qualquer nova tentativa
_PERMANENT_CODES: dict[int, str] = {
    100: "invalid_parameter",
    190: "access_token_expired",
    131026: "message_undeliverable",
    131047: "outside_24h_window",
    131051: "unsupported_message_type",
    131052: "media_download_error",
    131053: "media_upload_error",
}

_PERMANENT_HTTP_STATUS = frozenset({400, 401, 403, 404, 413})
_PERMANENT_TYPES = frozenset({"OAuthException", "InvalidRequest", "GraphMethodException"})


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro da Graph API já classificado.

    Attributes:
        reason: Rótulo curto do código (ex: outside_24h_window), "" se desconhecido
        details: `error_data.details`, quando a Meta informa
    """

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool
    trace_id: str | None = None
    reason: str = ""
    details: str = ""


def is_permanent_error(error_code: int, error_type: str) -> bool:
    if error_code in _RETRYABLE_CODES:
        return False
    if error_code in _PERMANENT_CODES or error_code in _PERMANENT_HTTP_STATUS:
        return True
    return error_type in _PERMANENT_TYPES


def parse_meta_error(response_data: Any) -> WhatsAppApiError | None:
    """WhatsAppApiError se o corpo traz um objeto `error`, senão None."""
    error_obj = response_data.get("error") if isinstance(response_data, dict) else None
    if not isinstance(error_obj, dict) or not error_obj:
        return None

    code = error_obj.get("code")
    error_code = code if isinstance(code, int) else 0
    error_type = str(error_obj.get("type") or "unknown")
    error_data = error_obj.get("error_data")
    details = error_data.get("details", "") if isinstance(error_data, dict) else ""

    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=str(error_obj.get("message") or "Erro desconhecido"),
        is_permanent=is_permanent_error(error_code, error_type),
        trace_id=error_obj.get("fbtrace_id"),
        reason=_RETRYABLE_CODES.get(error_code) or _PERMANENT_CODES.get(error_code, ""),
        details=str(details),
    )
