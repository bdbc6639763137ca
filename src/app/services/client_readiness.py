"""Estado explícito de readiness do cliente de mensagens.

O handshake roda uma vez no startup (lifespan) em background; o HTTP
começa a aceitar requisições antes dele terminar, então o use case
aguarda readiness com timeout antes de despachar e o /ready reporta o
estado.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.messaging import MessagingClientProtocol
    from app.protocols.models import ClientInfo

logger = logging.getLogger(__name__)


class ClientReadiness:
    """Readiness do cliente (asyncio.Event + info do handshake).

    `_settled` marca que o handshake terminou, com sucesso ou não: após
    uma falha os waiters retornam na hora em vez de esperar o timeout.
    """

    def __init__(self) -> None:
        self._ready = asyncio.Event()
        self._settled = asyncio.Event()
        self._info: ClientInfo | None = None
        self._error: str | None = None

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    @property
    def is_settled(self) -> bool:
        """True quando o handshake já terminou (pronto ou falho)."""
        return self._settled.is_set()

    @property
    def info(self) -> ClientInfo | None:
        return self._info

    @property
    def error(self) -> str | None:
        """Tipo do erro do último handshake falho (None se ok/pendente)."""
        return self._error

    def mark_ready(self, info: ClientInfo) -> None:
        self._info = info
        self._error = None
        self._ready.set()
        self._settled.set()

    def mark_failed(self, error: str) -> None:
        self._error = error
        self._settled.set()

    async def initialize(self, client: MessagingClientProtocol) -> bool:
        """Executa o handshake do cliente e marca readiness.

        Returns:
            True se o cliente ficou pronto.
        """
        try:
            info = await client.initialize()
        except Exception as exc:
            self.mark_failed(type(exc).__name__)
            logger.error(
                "messaging_client_initialize_failed",
                extra={"error_type": type(exc).__name__, "error": str(exc)},
            )
            return False

        self.mark_ready(info)
        logger.info(
            "messaging_client_ready",
            extra={
                "phone_number_id": info.phone_number_id,
                "display_phone_number": info.display_phone_number,
                "verified_name": info.verified_name,
            },
        )
        return True

    async def wait_ready(self, timeout: float) -> bool:
        """Aguarda o fim do handshake por até `timeout` segundos.

        Returns:
            True se o cliente está pronto; False em timeout ou handshake falho.
        """
        if self._settled.is_set():
            return self.is_ready
        if timeout <= 0:
            return False
        try:
            await asyncio.wait_for(self._settled.wait(), timeout=timeout)
        except TimeoutError:
            return False
        return self.is_ready
