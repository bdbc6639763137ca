"""Configuração do pytest para o relay Jellyfin → WhatsApp."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def dune_payload() -> dict:
    """Payload de exemplo do plugin de webhook (filme)."""
    return {
        "EventType": "New Content Added",
        "Item": {
            "Name": "Dune",
            "Year": 2021,
            "Type": "Movie",
            "ProviderIds": {"Imdb": "tt1160419", "Tmdb": "438631"},
            "ServerUrl": "http://host:8096/",
            "ItemId": "abc123",
        },
    }


@pytest.fixture
def episode_payload() -> dict:
    """Payload de episódio, sem ServerUrl (sem poster)."""
    return {
        "EventType": "Item Added",
        "Item": {
            "Name": "Pilot",
            "Type": "Episode",
            "SeriesName": "Severance",
            "SeasonNumber": 1,
            "EpisodeNumber": 1,
            "Year": 2022,
            "RunTime": "57m",
            "CommunityRating": 8.7,
            "Overview": "Mark leads a team of office workers.",
        },
    }
