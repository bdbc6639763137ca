"""Testes do endpoint POST /newcontent."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from starlette.requests import Request
from tests.fakes.fake_messaging import FakeMediaFetcher, FakeMessagingClient

from api.routes.jellyfin.webhook import (
    INVALID_ITEM_MESSAGE,
    parse_json_body,
    receive_new_content,
)
from app.protocols.models import ClientInfo
from app.services.client_readiness import ClientReadiness
from app.services.notification_dispatcher import NotificationDispatcher
from app.use_cases.relay_content_event import RelayContentEventUseCase

DESTINATIONS = ("5511999990001@c.us", "5511999990002@c.us")


def _build_request(
    body: bytes,
    state: SimpleNamespace,
    headers: list[tuple[bytes, bytes]] | None = None,
) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/newcontent",
        "raw_path": b"/newcontent",
        "query_string": b"",
        "headers": headers or [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _state(client: FakeMessagingClient, fetcher: FakeMediaFetcher) -> SimpleNamespace:
    readiness = ClientReadiness()
    readiness.mark_ready(ClientInfo(phone_number_id="pn_1"))
    use_case = RelayContentEventUseCase(
        NotificationDispatcher(client, fetcher, DESTINATIONS),
        readiness,
        readiness_timeout_seconds=0.01,
    )
    return SimpleNamespace(relay_use_case=use_case)


@pytest.mark.asyncio
async def test_valid_event_returns_empty_200(dune_payload: dict) -> None:
    client = FakeMessagingClient()
    fetcher = FakeMediaFetcher()
    request = _build_request(
        json.dumps(dune_payload).encode("utf-8"),
        _state(client, fetcher),
        headers=[(b"content-type", b"application/json")],
    )

    response = await receive_new_content(request)

    assert response.status_code == 200
    assert response.body == b""
    assert response.headers["x-correlation-id"]
    assert [sent.destination for sent in client.sent] == list(DESTINATIONS)


@pytest.mark.asyncio
async def test_content_type_is_not_enforced(episode_payload: dict) -> None:
    client = FakeMessagingClient()
    request = _build_request(
        json.dumps(episode_payload).encode("utf-8"),
        _state(client, FakeMediaFetcher()),
        headers=[(b"content-type", b"text/plain")],
    )

    response = await receive_new_content(request)

    assert response.status_code == 200
    assert len(client.sent) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [b"", b"not json", b"[1, 2]", b'"Dune"', b'{"EventType": "New Content Added"}'],
)
async def test_invalid_item_returns_400_and_dispatches_nothing(body: bytes) -> None:
    client = FakeMessagingClient()
    fetcher = FakeMediaFetcher()
    request = _build_request(body, _state(client, fetcher))

    response = await receive_new_content(request)

    assert response.status_code == 400
    assert response.body.decode("utf-8") == INVALID_ITEM_MESSAGE
    assert response.headers["content-type"].startswith("text/plain")
    assert client.attempts == []
    assert fetcher.requested == []


@pytest.mark.asyncio
async def test_delivery_failures_still_return_200(dune_payload: dict) -> None:
    client = FakeMessagingClient(raise_for=set(DESTINATIONS))
    request = _build_request(
        json.dumps(dune_payload).encode("utf-8"),
        _state(client, FakeMediaFetcher(fail=True)),
    )

    response = await receive_new_content(request)

    assert response.status_code == 200
    assert client.attempts == list(DESTINATIONS)


@pytest.mark.asyncio
async def test_incoming_correlation_id_is_echoed(dune_payload: dict) -> None:
    request = _build_request(
        json.dumps(dune_payload).encode("utf-8"),
        _state(FakeMessagingClient(), FakeMediaFetcher()),
        headers=[(b"x-correlation-id", b"corr-123")],
    )

    response = await receive_new_content(request)

    assert response.headers["x-correlation-id"] == "corr-123"


@pytest.mark.asyncio
async def test_unexpected_error_is_contained(dune_payload: dict) -> None:
    class _BrokenUseCase:
        async def execute(self, payload: object) -> None:
            raise RuntimeError("boom")

    request = _build_request(
        json.dumps(dune_payload).encode("utf-8"),
        SimpleNamespace(relay_use_case=_BrokenUseCase()),
    )

    response = await receive_new_content(request)

    assert response.status_code == 200


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (b'{"Item": {}}', {"Item": {}}),
        (b"  ", None),
        (b"{broken", None),
        (b"\xff\xfe", None),
    ],
)
def test_parse_json_body(raw: bytes, expected: object) -> None:
    assert parse_json_body(raw) == expected
