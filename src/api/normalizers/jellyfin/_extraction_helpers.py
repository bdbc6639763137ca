"""Helpers de extração tolerante de campos do payload Jellyfin.

O payload vem de um template configurável do plugin de webhook, então
qualquer campo pode faltar ou chegar com tipo inesperado. Valores
"falsy" (None, "", 0, False) e tipos não escalares contam como ausentes.
"""

from __future__ import annotations

import math
from typing import Any


def as_text(value: Any) -> str | None:
    """Converte valor escalar em texto; None se ausente ou malformado.

    Números são renderizados sem ".0" espúrio (2021.0 -> "2021").
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value) if value else None
    if isinstance(value, float):
        if not value or not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else str(value)
    if isinstance(value, str):
        return value or None
    return None


def as_number(value: Any) -> float | None:
    """Converte rating numérico (ou string numérica); None se ausente/zero."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not number or not math.isfinite(number):
        return None
    return number


def strip_trailing_slash(url: str) -> str:
    """Remove exatamente uma barra final, se houver."""
    return url[:-1] if url.endswith("/") else url


def get_field(block: dict[str, Any], *names: str) -> Any:
    """Retorna o primeiro campo presente (não None) entre os nomes dados."""
    for name in names:
        value = block.get(name)
        if value is not None:
            return value
    return None


def extract_provider_ids(item: dict[str, Any]) -> tuple[str | None, str | None]:
    """Extrai (imdb_id, tmdb_id) de ProviderIds, sem diferenciar maiúsculas."""
    providers = item.get("ProviderIds")
    if not isinstance(providers, dict):
        return None, None
    lowered = {str(key).lower(): value for key, value in providers.items()}
    return as_text(lowered.get("imdb")), as_text(lowered.get("tmdb"))
