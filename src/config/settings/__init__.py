"""Agregador de settings do relay.

Re-exporta settings e getters de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.relay import (
    DEFAULT_EVENT_TYPE,
    DestinationsFileError,
    RelaySettings,
    get_relay_settings,
    load_destinations_file,
    parse_destinations,
)
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "DEFAULT_EVENT_TYPE",
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    # Base
    "BaseSettings",
    "DestinationsFileError",
    "Environment",
    # Relay
    "RelaySettings",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_relay_settings",
    "get_whatsapp_settings",
    "load_destinations_file",
    "parse_destinations",
]
