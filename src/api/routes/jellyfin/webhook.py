"""Endpoint de webhook do Jellyfin.

Endpoint:
- POST /newcontent: evento de conteúdo novo/atualizado

Contrato HTTP:
- Corpo parseado como JSON independente do Content-Type
- 400 (texto) quando não há `Item` válido; nada é despachado
- 200 (corpo vazio) em qualquer outro caso, inclusive falha de entrega;
  o status confirma aceite, não entrega
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status

from api.normalizers.jellyfin import MissingItemError
from app.observability import correlation_scope

if TYPE_CHECKING:
    from app.use_cases.relay_content_event import RelayContentEventUseCase

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_ITEM_MESSAGE = "No valid item data"

# Fallback lazy quando o app não foi montado pelo lifespan
_relay_use_case = None


def parse_json_body(raw_body: bytes) -> Any:
    """Parseia o corpo como JSON; None se vazio ou inválido."""
    if not raw_body or not raw_body.strip():
        return None
    try:
        return json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def _get_relay_use_case(request: Request) -> RelayContentEventUseCase:
    """Use case do app.state (lifespan) ou criado sob demanda."""
    use_case = getattr(request.app.state, "relay_use_case", None)
    if use_case is not None:
        return use_case

    global _relay_use_case
    if _relay_use_case is None:
        from app.bootstrap.relay_factory import (
            create_media_fetcher,
            create_messaging_client,
            create_relay_use_case,
        )

        _relay_use_case = create_relay_use_case(
            client=create_messaging_client(),
            media_fetcher=create_media_fetcher(),
        )
    return _relay_use_case


@router.post("/newcontent", response_model=None)
async def receive_new_content(request: Request) -> Response:
    """Recebe evento do plugin de webhook do Jellyfin e dispara o relay."""
    with correlation_scope(request.headers.get("x-correlation-id")) as correlation_id:
        raw_body = await request.body()
        payload = parse_json_body(raw_body)

        logger.info(
            "content_event_received",
            extra={
                "payload_size": len(raw_body),
                "content_type": request.headers.get("content-type", ""),
                "is_json_object": isinstance(payload, dict),
            },
        )
        logger.debug("content_event_payload", extra={"payload": payload})

        try:
            await _get_relay_use_case(request).execute(payload)
        except MissingItemError as exc:
            logger.warning("content_event_rejected", extra={"reason": str(exc)})
            return Response(
                content=INVALID_ITEM_MESSAGE,
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
                headers={"x-correlation-id": correlation_id},
            )
        except Exception:
            logger.exception("content_event_processing_failed")

        return Response(
            status_code=status.HTTP_200_OK,
            headers={"x-correlation-id": correlation_id},
        )
