"""Testes do use case de relay de eventos de conteúdo."""

from __future__ import annotations

import asyncio

import pytest
from tests.fakes.fake_messaging import FakeMediaFetcher, FakeMessagingClient

from api.normalizers.jellyfin import MissingItemError
from app.protocols.models import ClientInfo, MediaObject
from app.services.client_readiness import ClientReadiness
from app.services.notification_dispatcher import NotificationDispatcher
from app.use_cases.relay_content_event import RelayContentEventUseCase

DESTINATIONS = ("5511999990001@c.us", "5511999990002@c.us")


def _ready() -> ClientReadiness:
    readiness = ClientReadiness()
    readiness.mark_ready(ClientInfo(phone_number_id="pn_1"))
    return readiness


def _use_case(
    client: FakeMessagingClient,
    fetcher: FakeMediaFetcher,
    readiness: ClientReadiness | None = None,
    **kwargs: object,
) -> RelayContentEventUseCase:
    dispatcher = NotificationDispatcher(client, fetcher, DESTINATIONS)
    return RelayContentEventUseCase(
        dispatcher,
        readiness,
        readiness_timeout_seconds=0.01,
        **kwargs,  # type: ignore[arg-type]
    )


@pytest.mark.asyncio
async def test_full_relay_with_poster(dune_payload: dict) -> None:
    client = FakeMessagingClient()
    fetcher = FakeMediaFetcher()

    summary = await _use_case(client, fetcher, _ready()).execute(dune_payload)

    assert summary.client_ready is True
    assert summary.poster_requested is True
    assert summary.delivered == 2
    assert summary.failed == 0
    assert summary.media_fallback_used is False
    assert fetcher.requested == [("http://host:8096/Items/abc123/Images/Primary", True)]
    assert isinstance(client.sent[0].content, MediaObject)
    assert (client.sent[0].caption or "").startswith("🎬 *Dune* (2021)")


@pytest.mark.asyncio
async def test_missing_item_propagates_without_dispatch() -> None:
    client = FakeMessagingClient()
    fetcher = FakeMediaFetcher()

    with pytest.raises(MissingItemError):
        await _use_case(client, fetcher, _ready()).execute({"EventType": "X"})

    assert client.attempts == []
    assert fetcher.requested == []


@pytest.mark.asyncio
async def test_media_fallback_reported_in_summary(dune_payload: dict) -> None:
    client = FakeMessagingClient()

    summary = await _use_case(client, FakeMediaFetcher(fail=True), _ready()).execute(
        dune_payload
    )

    assert summary.media_fallback_used is True
    assert summary.delivered == 2
    assert all(isinstance(sent.content, str) for sent in client.sent)


@pytest.mark.asyncio
async def test_not_ready_client_still_dispatches(episode_payload: dict) -> None:
    client = FakeMessagingClient()

    summary = await _use_case(client, FakeMediaFetcher(), ClientReadiness()).execute(
        episode_payload
    )

    assert summary.client_ready is False
    assert summary.poster_requested is False
    assert client.attempts == list(DESTINATIONS)


@pytest.mark.asyncio
async def test_failed_handshake_does_not_wait_full_timeout(episode_payload: dict) -> None:
    client = FakeMessagingClient()
    readiness = ClientReadiness()
    await readiness.initialize(FakeMessagingClient(initialize_error=PermissionError("x")))
    use_case = RelayContentEventUseCase(
        NotificationDispatcher(client, FakeMediaFetcher(), DESTINATIONS),
        readiness,
        readiness_timeout_seconds=30.0,
    )

    summary = await asyncio.wait_for(use_case.execute(episode_payload), timeout=1.0)

    assert summary.client_ready is False
    assert client.attempts == list(DESTINATIONS)


@pytest.mark.asyncio
async def test_poster_disabled_sends_text_only(dune_payload: dict) -> None:
    client = FakeMessagingClient()
    fetcher = FakeMediaFetcher()

    summary = await _use_case(client, fetcher, poster_enabled=False).execute(dune_payload)

    assert fetcher.requested == []
    assert summary.poster_requested is False
    assert all(isinstance(sent.content, str) for sent in client.sent)


@pytest.mark.asyncio
async def test_custom_default_event_type(episode_payload: dict) -> None:
    client = FakeMessagingClient()
    payload = {"Item": episode_payload["Item"]}

    await _use_case(client, FakeMediaFetcher(), default_event_type="Novo item").execute(payload)

    assert "📅 Event: Novo item\n" in str(client.sent[0].content)


@pytest.mark.asyncio
async def test_partial_failure_counts(dune_payload: dict) -> None:
    client = FakeMessagingClient(raise_for={DESTINATIONS[0]})

    summary = await _use_case(client, FakeMediaFetcher(), _ready()).execute(dune_payload)

    assert summary.delivered == 1
    assert summary.failed == 1
