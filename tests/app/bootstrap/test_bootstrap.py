"""Testes do bootstrap (validação de settings e wiring do relay)."""

from __future__ import annotations

import pytest
from tests.fakes.fake_messaging import FakeMediaFetcher, FakeMessagingClient

from app.bootstrap import validate_runtime_settings
from app.bootstrap.relay_factory import (
    create_media_fetcher,
    create_messaging_client,
    create_relay_use_case,
)
from config.settings import (
    RelaySettings,
    WhatsAppSettings,
    get_base_settings,
    get_relay_settings,
    get_whatsapp_settings,
)


@pytest.fixture
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "WHATSAPP_ACCESS_TOKEN",
        "WHATSAPP_PHONE_NUMBER_ID",
        "RELAY_DESTINATIONS",
        "RELAY_DESTINATIONS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    getters = (get_base_settings, get_relay_settings, get_whatsapp_settings)
    for getter in getters:
        getter.cache_clear()
    yield monkeypatch
    for getter in getters:
        getter.cache_clear()


def test_validation_warns_in_development(fresh_settings: pytest.MonkeyPatch) -> None:
    fresh_settings.setenv("ENVIRONMENT", "development")

    errors = validate_runtime_settings()

    assert "whatsapp: WHATSAPP_ACCESS_TOKEN não configurado" in errors
    assert any(error.startswith("relay: RELAY_DESTINATIONS vazio") for error in errors)


def test_validation_fails_fast_in_production(fresh_settings: pytest.MonkeyPatch) -> None:
    fresh_settings.setenv("ENVIRONMENT", "production")

    with pytest.raises(RuntimeError, match="Configuração inválida para production"):
        validate_runtime_settings()


def test_validation_ok_with_complete_env(fresh_settings: pytest.MonkeyPatch) -> None:
    fresh_settings.setenv("ENVIRONMENT", "production")
    fresh_settings.setenv("WHATSAPP_ACCESS_TOKEN", "token")
    fresh_settings.setenv("WHATSAPP_PHONE_NUMBER_ID", "pn_1")
    fresh_settings.setenv("RELAY_DESTINATIONS", "5511000000001@c.us")

    assert validate_runtime_settings() == []


@pytest.mark.asyncio
async def test_relay_use_case_wired_with_configured_destinations(dune_payload: dict) -> None:
    client = FakeMessagingClient()
    use_case = create_relay_use_case(
        client=client,
        media_fetcher=FakeMediaFetcher(),
        relay_settings=RelaySettings(destinations=("b", "a"), poster_enabled=False),
    )

    summary = await use_case.execute(dune_payload)

    assert client.attempts == ["b", "a"]
    assert summary.poster_requested is False


def test_factories_use_explicit_settings() -> None:
    settings = WhatsAppSettings(
        access_token="token",
        phone_number_id="pn_1",
        media_fetch_timeout_seconds=3.0,
        media_max_size_bytes=1024,
    )

    assert create_messaging_client(settings) is not None
    fetcher = create_media_fetcher(settings)
    assert fetcher._timeout == 3.0
    assert fetcher._max_size_bytes == 1024
