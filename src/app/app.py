"""Entrypoint do relay Jellyfin → WhatsApp.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 3000

Uso (desenvolvimento):
    jellyfin-relay            # ou: python -m app.app

No plugin de webhook do Jellyfin, apontar a URL para
http://<host>:3000/newcontent.
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.relay_factory import (
    create_media_fetcher,
    create_messaging_client,
    create_relay_use_case,
)
from app.services.client_readiness import ClientReadiness
from config.logging import get_logger
from config.settings import get_base_settings, get_relay_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer log
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Monta cliente, dispatcher e use case
    - Dispara o handshake do cliente em background

    Shutdown:
    - Cancela handshake pendente
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    relay_settings = get_relay_settings()
    client = create_messaging_client()
    readiness = ClientReadiness()

    app.state.relay_settings = relay_settings
    app.state.client_readiness = readiness
    app.state.relay_use_case = create_relay_use_case(
        client=client,
        media_fetcher=create_media_fetcher(),
        readiness=readiness,
        relay_settings=relay_settings,
    )
    init_task = asyncio.create_task(readiness.initialize(client))

    logger.info(
        "relay_configured",
        extra={"destination_count": len(relay_settings.destinations)},
    )

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    if not init_task.done():
        init_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await init_task


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI."""
    fastapi_app = FastAPI(
        title="Jellyfin WhatsApp Relay",
        description="Relay de notificações de conteúdo do Jellyfin para o WhatsApp",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured")

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    relay_settings = get_relay_settings()
    logger.info(
        "server_listening",
        extra={"host": relay_settings.host, "port": relay_settings.port},
    )
    uvicorn.run(
        "app.app:app",
        host=relay_settings.host,
        port=relay_settings.port,
        reload=get_base_settings().debug,
    )


if __name__ == "__main__":
    main()
