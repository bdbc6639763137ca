"""Normalizer de eventos de conteúdo do Jellyfin.

Converte o JSON do plugin de webhook em NormalizedRecord, aplicando os
fallbacks de cada campo. Rejeita com MissingItemError quando não há
objeto `Item`; o chamador responde 400 e não despacha nada.

Função pura, sem IO.
"""

from __future__ import annotations

from typing import Any

from app.domain.content_event import NOT_AVAILABLE, NormalizedRecord
from config.settings.relay import DEFAULT_EVENT_TYPE

from ._extraction_helpers import (
    as_number,
    as_text,
    extract_provider_ids,
    get_field,
    strip_trailing_slash,
)


class MissingItemError(ValueError):
    """Payload ausente, não-objeto ou sem `Item` válido."""


def normalize_content_event(
    payload: Any,
    *,
    default_event_type: str = DEFAULT_EVENT_TYPE,
) -> NormalizedRecord:
    """Extrai e normaliza os campos do evento.

    Args:
        payload: JSON já parseado (qualquer tipo)
        default_event_type: EventType quando o payload não informa

    Returns:
        NormalizedRecord imutável

    Raises:
        MissingItemError: Se payload não for objeto ou não tiver `Item` objeto
    """
    if not isinstance(payload, dict) or not payload:
        raise MissingItemError("payload_missing")

    item = payload.get("Item")
    if not isinstance(item, dict):
        raise MissingItemError("item_missing")

    imdb_id, tmdb_id = extract_provider_ids(item)
    server_url = as_text(item.get("ServerUrl"))

    return NormalizedRecord(
        event_type=as_text(payload.get("EventType")) or default_event_type,
        name=as_text(item.get("Name")) or NOT_AVAILABLE,
        item_type=as_text(item.get("Type")) or NOT_AVAILABLE,
        series_name=as_text(item.get("SeriesName")) or "",
        season_number=as_text(item.get("SeasonNumber")) or "",
        episode_number=as_text(item.get("EpisodeNumber")) or "",
        year=as_text(item.get("Year")) or NOT_AVAILABLE,
        overview=as_text(item.get("Overview")) or "",
        runtime=as_text(get_field(item, "RunTime", "Runtime")) or NOT_AVAILABLE,
        server_url=strip_trailing_slash(server_url) if server_url else "",
        item_id=as_text(item.get("ItemId")) or "",
        imdb_id=imdb_id,
        tmdb_id=tmdb_id,
        community_rating=as_number(item.get("CommunityRating")),
    )
