"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto; IO fica atrás dos protocolos.
"""

from app.services.caption_composer import build_caption, compose_message
from app.services.client_readiness import ClientReadiness
from app.services.notification_dispatcher import NotificationDispatcher

__all__ = [
    "ClientReadiness",
    "NotificationDispatcher",
    "build_caption",
    "compose_message",
]
