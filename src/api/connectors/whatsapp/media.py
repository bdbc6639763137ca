"""Download de mídia por URL (equivalente a MessageMedia.fromUrl).

Usado para baixar o poster do Jellyfin antes do upload para a Meta.
"""

from __future__ import annotations

import logging
import mimetypes
from urllib.parse import urlsplit

import httpx

from app.protocols.models import MediaObject
from utils.errors import MediaFetchError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class HttpMediaFetcher:
    """Baixa mídia via GET com limite de tamanho e retry em timeout."""

    def __init__(
        self,
        *,
        timeout_seconds: float = 15.0,
        max_size_bytes: int = 5 * 1024 * 1024,
        max_retries: int = 1,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout_seconds
        self._max_size_bytes = max_size_bytes
        self._max_retries = max(0, max_retries)
        self._headers = headers or {}
        self._transport = transport

    async def from_url(self, url: str, *, unsafe_mime: bool = False) -> MediaObject:
        """Baixa a URL como MediaObject.

        Args:
            url: URL absoluta (http/https)
            unsafe_mime: True aceita qualquer Content-Type; False exige image/*

        Raises:
            MediaFetchError: URL inválida, timeout, status != 2xx,
                corpo vazio/grande demais ou MIME recusado
        """
        if urlsplit(url).scheme not in ("http", "https"):
            raise MediaFetchError("unsupported_url_scheme")

        for attempt in range(self._max_retries + 1):
            try:
                return await self._attempt_fetch(url, unsafe_mime=unsafe_mime)
            except httpx.TimeoutException as exc:
                logger.warning("media_fetch_timeout", extra={"attempt": attempt + 1})
                if attempt >= self._max_retries:
                    raise MediaFetchError("timeout") from exc
            except httpx.HTTPStatusError as exc:
                raise MediaFetchError(f"http_{exc.response.status_code}") from exc
            except httpx.HTTPError as exc:
                logger.warning(
                    "media_fetch_failed",
                    extra={"error_type": type(exc).__name__, "attempt": attempt + 1},
                )
                if attempt >= self._max_retries:
                    raise MediaFetchError("download_failed") from exc

        raise MediaFetchError("download_failed")

    async def _attempt_fetch(self, url: str, *, unsafe_mime: bool) -> MediaObject:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.get(url, headers=self._headers)
            response.raise_for_status()

        if self._is_too_large(response):
            raise MediaFetchError("media_too_large")
        if not response.content:
            raise MediaFetchError("empty_media")

        mime_type = _content_type(response)
        if not unsafe_mime and not mime_type.startswith("image/"):
            raise MediaFetchError(f"mime_not_allowed:{mime_type}")

        return MediaObject(
            data=response.content,
            mime_type=mime_type,
            filename=_filename_for(url, mime_type),
            source_url=url,
        )

    def _is_too_large(self, response: httpx.Response) -> bool:
        content_length = response.headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self._max_size_bytes:
                return True
        return len(response.content) > self._max_size_bytes


def _content_type(response: httpx.Response) -> str:
    raw = response.headers.get("content-type", "")
    mime_type = raw.split(";", 1)[0].strip().lower()
    return mime_type or DEFAULT_MIME_TYPE


def _filename_for(url: str, mime_type: str) -> str:
    """Último segmento do path + extensão do MIME (ex: Primary.jpg)."""
    segment = urlsplit(url).path.rstrip("/").rsplit("/", 1)[-1] or "media"
    if "." in segment:
        return segment
    extension = mimetypes.guess_extension(mime_type) or ""
    return f"{segment}{extension}"
