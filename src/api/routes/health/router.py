"""Endpoints de health check e readiness."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_base_settings, get_relay_settings

router = APIRouter()

SERVICE_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = SERVICE_VERSION


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    detail: str | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "detail": self.detail,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: handshake do cliente concluído e destinos configurados."""
    client_check = _check_messaging_client(getattr(request.app.state, "client_readiness", None))
    destinations_check = _check_destinations(
        getattr(request.app.state, "relay_settings", None) or get_relay_settings()
    )

    ready = client_check.status == "ok" and destinations_check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "messaging_client": client_check.as_dict(),
            "destinations": destinations_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_messaging_client(readiness: Any | None) -> DependencyCheck:
    if readiness is None:
        return DependencyCheck(status="failed", error="not_configured")
    if readiness.is_ready:
        info = readiness.info
        return DependencyCheck(
            status="ok",
            detail=getattr(info, "display_phone_number", None) or None,
        )
    if readiness.error:
        return DependencyCheck(status="failed", error=readiness.error)
    return DependencyCheck(status="failed", error="initializing")


def _check_destinations(relay_settings: Any) -> DependencyCheck:
    count = len(relay_settings.destinations)
    if not count:
        return DependencyCheck(status="failed", error="no_destinations")
    return DependencyCheck(status="ok", detail=f"{count} destination(s)")
