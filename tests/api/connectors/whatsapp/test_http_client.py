"""Testes do cliente HTTP da Graph API (retry, erros Meta, auth)."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from api.connectors.whatsapp import (
    HttpClient,
    HttpClientConfig,
    HttpError,
    WhatsAppHttpClient,
    is_permanent_error,
    parse_meta_error,
)
from app.protocols.models import MediaObject

ENDPOINT = "https://graph.test/v24.0/pn_1/messages"


def _client(handler, *, max_retries: int = 0, cls=WhatsAppHttpClient):
    config = HttpClientConfig(
        max_retries=max_retries,
        backoff_base_seconds=0,
        transport=httpx.MockTransport(handler),
    )
    return cls(config=config)


@pytest.mark.asyncio
async def test_send_message_posts_json_with_bearer() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["auth"] = request.headers["authorization"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"messages": [{"id": "wamid.1"}]})

    data = await _client(handler).send_message(ENDPOINT, "token-1", {"to": "5511"})

    assert data == {"messages": [{"id": "wamid.1"}]}
    assert captured["auth"] == "Bearer token-1"
    assert captured["body"] == {"to": "5511"}


@pytest.mark.asyncio
async def test_empty_token_raises_value_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("não deveria chamar a API")

    with pytest.raises(ValueError):
        await _client(handler).send_message(ENDPOINT, "  ", {})


@pytest.mark.asyncio
async def test_meta_error_becomes_permanent_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401,
            json={
                "error": {
                    "type": "OAuthException",
                    "code": 190,
                    "message": "Invalid OAuth access token",
                    "fbtrace_id": "trace-1",
                }
            },
        )

    with pytest.raises(HttpError) as exc_info:
        await _client(handler).send_message(ENDPOINT, "token", {})

    assert exc_info.value.status_code == 190
    assert exc_info.value.is_retryable is False
    assert "OAuthException" in str(exc_info.value)


@pytest.mark.asyncio
async def test_invalid_json_response_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(HttpError, match="invalid_json_response"):
        await _client(handler).send_message(ENDPOINT, "token", {})


@pytest.mark.asyncio
async def test_retries_on_server_error_then_succeeds() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        if len(calls) == 1:
            return httpx.Response(503, json={})
        return httpx.Response(200, json={"ok": True})

    response = await _client(handler, max_retries=2, cls=HttpClient).get("https://graph.test/x")

    assert response.status_code == 200
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_retry_exhausted_on_rate_limit() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(429, json={})

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=1, cls=HttpClient).get("https://graph.test/x")

    assert exc_info.value.status_code == 429
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_connect_error_becomes_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(HttpError, match="http_connection_error"):
        await _client(handler, cls=HttpClient).get("https://graph.test/x")


@pytest.mark.asyncio
async def test_upload_media_returns_media_id() -> None:
    captured: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["content_type"] = request.headers["content-type"]
        captured["body"] = request.content
        return httpx.Response(200, json={"id": "media-42"})

    media = MediaObject(data=b"jpeg-bytes", mime_type="image/jpeg", filename="Primary.jpg")
    media_id = await _client(handler).upload_media(
        "https://graph.test/v24.0/pn_1/media", "token", media
    )

    assert media_id == "media-42"
    assert str(captured["content_type"]).startswith("multipart/form-data")
    body = captured["body"]
    assert isinstance(body, bytes)
    assert b"Primary.jpg" in body
    assert b"jpeg-bytes" in body
    assert b"whatsapp" in body


@pytest.mark.asyncio
async def test_upload_without_id_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={})

    media = MediaObject(data=b"x", mime_type="image/png", filename="Primary.png")
    with pytest.raises(HttpError, match="media_upload_without_id"):
        await _client(handler).upload_media("https://graph.test/media", "token", media)


def test_parse_meta_error_ignores_success_payloads() -> None:
    assert parse_meta_error({"messages": []}) is None
    assert parse_meta_error([1, 2]) is None
    assert parse_meta_error({"error": "text"}) is None


def test_parse_meta_error_transient() -> None:
    error = parse_meta_error({"error": {"type": "Throttling", "code": 130429}})

    assert error is not None
    assert error.error_code == 130429
    assert error.is_permanent is False


@pytest.mark.parametrize(
    ("code", "error_type", "expected"),
    [
        (400, "x", True),
        (190, "OAuthException", True),
        (131000, "Other", False),
        (131047, "OAuthException", True),
        (130429, "OAuthException", False),
        (999999, "Other", False),
    ],
)
def test_is_permanent_error(code: int, error_type: str, expected: bool) -> None:
    assert is_permanent_error(code, error_type) is expected


def test_parse_meta_error_labels_known_codes() -> None:
    error = parse_meta_error(
        {
            "error": {
                "type": "OAuthException",
                "code": 131047,
                "message": "Re-engagement message",
                "error_data": {"details": "Message failed to send because more than 24 hours"},
                "fbtrace_id": "trace-9",
            }
        }
    )

    assert error is not None
    assert error.is_permanent is True
    assert error.reason == "outside_24h_window"
    assert error.details.startswith("Message failed")
    assert error.trace_id == "trace-9"


def test_parse_meta_error_unknown_code_has_no_reason() -> None:
    error = parse_meta_error({"error": {"code": "x", "message": None}})

    assert error is not None
    assert error.error_code == 0
    assert error.error_type == "unknown"
    assert error.error_message == "Erro desconhecido"
    assert error.reason == ""


@pytest.mark.asyncio
async def test_permanent_meta_error_logged_as_error_with_reason(
    caplog: pytest.LogCaptureFixture,
) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": {"type": "OAuthException", "code": 131047, "message": "window"}},
        )

    with caplog.at_level(logging.DEBUG), pytest.raises(HttpError) as exc_info:
        await _client(handler).send_message(ENDPOINT, "token-secret", {"to": "5511999990001"})

    assert "outside_24h_window" in str(exc_info.value)
    records = [r for r in caplog.records if r.getMessage() == "whatsapp_api_error"]
    assert len(records) == 1
    assert records[0].levelno == logging.ERROR
    assert records[0].reason == "outside_24h_window"
    assert records[0].operation == "send_message"
    assert "token-secret" not in caplog.text
    assert "5511999990001" not in caplog.text


@pytest.mark.asyncio
async def test_transient_meta_error_logged_as_warning(caplog: pytest.LogCaptureFixture) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": {"type": "OAuthException", "code": 130429, "message": "slow down"}},
        )

    with caplog.at_level(logging.WARNING), pytest.raises(HttpError) as exc_info:
        await _client(handler).send_message(ENDPOINT, "token", {})

    assert exc_info.value.is_retryable is True
    records = [r for r in caplog.records if r.getMessage() == "whatsapp_api_error"]
    assert records[0].levelno == logging.WARNING
