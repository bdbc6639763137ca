"""Formatters de logging do relay.

JSON (produção) com campos obrigatórios:
- correlation_id
- service
- asctime
- level
- logger
- message

Texto simples (desenvolvimento local), com os mesmos campos em linha.
"""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Nomes de campo no JSON final
FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(correlation_id)s) %(message)s"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Campos passados via `extra` (ex: destination, status_code) são
    serializados ao lado dos obrigatórios.

    Exemplo de output:
        {
            "asctime": "2026-10-19 10:30:00,120",
            "level": "INFO",
            "logger": "app.services.notification_dispatcher",
            "message": "notification_sent",
            "correlation_id": "abc-123",
            "service": "jellyfin_relay",
            "destination": "***0001"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
        json_ensure_ascii=False,
    )


def create_text_formatter() -> logging.Formatter:
    """Formatter legível para terminal (sem os campos de `extra`)."""
    return logging.Formatter(TEXT_FORMAT)
