"""Protocolos e contratos do core da aplicação."""

from .messaging import MediaFetcherProtocol, MessagingClientProtocol
from .models import (
    DELIVERY_FAILED,
    MEDIA_ERROR_CODES,
    MEDIA_REJECTED,
    MEDIA_UPLOAD_FAILED,
    WHATSAPP_API_ERROR,
    ClientInfo,
    DeliveryOutcome,
    MediaObject,
)

__all__ = [
    "DELIVERY_FAILED",
    "MEDIA_ERROR_CODES",
    "MEDIA_REJECTED",
    "MEDIA_UPLOAD_FAILED",
    "WHATSAPP_API_ERROR",
    "ClientInfo",
    "DeliveryOutcome",
    "MediaFetcherProtocol",
    "MediaObject",
    "MessagingClientProtocol",
]
