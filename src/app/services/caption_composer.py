"""Composição da legenda e do poster a partir do NormalizedRecord.

Ordem fixa das linhas: título+ano, evento, série, temporada, episódio,
duração, rating, IMDb, TMDb, sinopse, link para assistir. Linhas cujo
valor está vazio são omitidas; o título sempre aparece.

Função pura, sem IO.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.content_event import ComposedMessage

if TYPE_CHECKING:
    from app.domain.content_event import NormalizedRecord

IMDB_TITLE_URL = "https://www.imdb.com/title/{imdb_id}/"
TMDB_TV_URL = "https://www.themoviedb.org/tv/{tmdb_id}/"
TMDB_MOVIE_URL = "https://www.themoviedb.org/movie/{tmdb_id}/"

POSTER_PATH = "/Items/{item_id}/Images/Primary"
WATCH_PATH = "/web/index.html#!/details?id={item_id}"

# Tipos Jellyfin (minúsculos) por template de link TMDb
_TMDB_TEMPLATES = {
    "series": TMDB_TV_URL,
    "season": TMDB_TV_URL,
    "movie": TMDB_MOVIE_URL,
}


def tmdb_link(item_type: str, tmdb_id: str | None) -> str | None:
    """Link TMDb conforme o tipo; None para tipos sem página no TMDb."""
    if not tmdb_id:
        return None
    template = _TMDB_TEMPLATES.get(item_type.lower())
    return template.format(tmdb_id=tmdb_id) if template else None


def poster_url(record: NormalizedRecord) -> str | None:
    """URL da imagem Primary; None sem item_id ou server_url."""
    if not record.has_server_link:
        return None
    return record.server_url + POSTER_PATH.format(item_id=record.item_id)


def watch_url(record: NormalizedRecord) -> str | None:
    """URL da página de detalhes na interface web do Jellyfin."""
    if not record.has_server_link:
        return None
    return record.server_url + WATCH_PATH.format(item_id=record.item_id)


def _format_rating(rating: float) -> str:
    return str(int(rating)) if rating.is_integer() else f"{rating:g}"


def build_caption(record: NormalizedRecord) -> str:
    """Monta a legenda multi-linha (formatação WhatsApp: *negrito*)."""
    caption = f"🎬 *{record.name}* ({record.year})\n"
    caption += f"📅 Event: {record.event_type}\n"
    if record.series_name:
        caption += f"📺 Series: {record.series_name}\n"
    if record.season_number:
        caption += f"🌿 Season: {record.season_number}\n"
    if record.episode_number:
        caption += f"🎞 Episode: {record.episode_number}\n"
    if record.runtime:
        caption += f"⏱ Runtime: {record.runtime}\n"
    if record.community_rating is not None:
        caption += f"⭐ Community Rating: {_format_rating(record.community_rating)}\n"

    if record.imdb_id:
        caption += f"🔗 IMDb: {IMDB_TITLE_URL.format(imdb_id=record.imdb_id)}\n"

    tmdb = tmdb_link(record.item_type, record.tmdb_id)
    if tmdb:
        caption += f"🔗 TMDb: {tmdb}\n"

    if record.overview:
        caption += f"\n📝 {record.overview}\n"

    link = watch_url(record)
    if link:
        caption += f"\n📺 Watch here: {link}"

    return caption


def compose_message(record: NormalizedRecord) -> ComposedMessage:
    """Compõe legenda e referência de poster para despacho."""
    return ComposedMessage(caption=build_caption(record), poster_url=poster_url(record))
