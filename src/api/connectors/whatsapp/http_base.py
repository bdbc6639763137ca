"""Transporte HTTP do conector (httpx + retry com backoff exponencial).

Política de retry fica aqui, não no core: o dispatcher só vê o
resultado final de cada envio.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# 5xx também é repetido (ver _is_retryable_status)
RETRYABLE_STATUS = frozenset({408, 429})


@dataclass
class HttpClientConfig:
    """Parâmetros de transporte.

    `transport` permite injetar httpx.MockTransport em testes.
    """

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 2.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    transport: httpx.AsyncBaseTransport | None = None


class HttpError(Exception):
    """Falha de transporte; mensagem nunca inclui token ou telefone."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def _is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS or status_code >= 500


class HttpClient:
    """Cliente HTTP assíncrono com até `max_retries` novas tentativas.

    Repete em 408/429/5xx, timeout e erro de conexão. Demais status
    (inclusive 4xx) voltam ao chamador para interpretação.
    """

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        return await self.request("GET", url, headers=headers, timeout=timeout)

    async def post(
        self,
        url: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        *,
        data: dict[str, str] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        return await self.request(
            "POST",
            url,
            headers=headers,
            timeout=timeout,
            json=json,
            data=data,
            files=files,
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
        **content: Any,
    ) -> httpx.Response:
        """Executa a requisição aplicando a política de retry.

        Args:
            content: `json`, `data` e/ou `files` repassados ao httpx

        Raises:
            HttpError: Status repetível ou falha de conexão após esgotar
                as tentativas
        """
        all_headers = {**self._config.default_headers, **(headers or {})}
        attempts = self._config.max_retries + 1

        for attempt in range(attempts):
            is_last = attempt == attempts - 1
            try:
                response = await self._send_once(
                    method,
                    url,
                    headers=all_headers,
                    timeout=timeout or self._config.timeout_seconds,
                    **content,
                )
            except (httpx.TimeoutException, httpx.ConnectError) as exc:
                if is_last:
                    raise HttpError("http_connection_error", is_retryable=True) from exc
                logger.warning(
                    "http_transport_error",
                    extra={"error_type": type(exc).__name__, "attempt": attempt + 1},
                )
            else:
                if not _is_retryable_status(response.status_code):
                    return response
                if is_last:
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
            await asyncio.sleep(self._retry_delay(attempt))

        raise HttpError("http_retry_exhausted", is_retryable=True)

    async def _send_once(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        timeout: float,
        **content: Any,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            verify=self._config.verify_ssl,
            transport=self._config.transport,
        ) as client:
            return await client.request(
                method,
                url,
                headers=headers,
                timeout=timeout,
                **content,
            )

    def _retry_delay(self, attempt: int) -> float:
        delay = min(
            self._config.backoff_base_seconds * (2**attempt),
            self._config.backoff_max_seconds,
        )
        logger.info("http_backoff", extra={"backoff_seconds": delay, "attempt": attempt + 1})
        return delay
