"""Modelos de domínio do evento de conteúdo do Jellyfin.

NormalizedRecord é construído uma vez por requisição pelo normalizer
(api/normalizers/jellyfin) e nunca alterado depois.
"""

from __future__ import annotations

from dataclasses import dataclass

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True, slots=True)
class NormalizedRecord:
    """Campos do item com fallbacks já aplicados.

    Textos ausentes viram "N/A" (name, item_type, year, runtime) ou "".
    IDs externos e rating ausentes ficam None.
    server_url chega sem a barra final.
    """

    event_type: str
    name: str = NOT_AVAILABLE
    item_type: str = NOT_AVAILABLE
    series_name: str = ""
    season_number: str = ""
    episode_number: str = ""
    year: str = NOT_AVAILABLE
    overview: str = ""
    runtime: str = NOT_AVAILABLE
    server_url: str = ""
    item_id: str = ""
    imdb_id: str | None = None
    tmdb_id: str | None = None
    community_rating: float | None = None

    @property
    def has_server_link(self) -> bool:
        """True quando é possível montar URLs do servidor para o item."""
        return bool(self.item_id and self.server_url)


@dataclass(frozen=True, slots=True)
class ComposedMessage:
    """Mensagem pronta para despacho."""

    caption: str
    poster_url: str | None = None

    @property
    def has_poster(self) -> bool:
        return self.poster_url is not None
