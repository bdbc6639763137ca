"""Agregador de rotas: registra todos os routers da API.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.jellyfin.webhook import router as jellyfin_router


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks (/health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    # Jellyfin (POST /newcontent na raiz, URL configurada no plugin)
    api_router.include_router(jellyfin_router, tags=["jellyfin"])

    return api_router
