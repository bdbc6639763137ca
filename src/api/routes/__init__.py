"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook Jellyfin, health)
- Leitura inicial do request (headers, corpo)
- Delegação para use cases
- Respostas HTTP apropriadas

Estrutura:
- routes/jellyfin/: POST /newcontent
- routes/health/: health checks e readiness
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
