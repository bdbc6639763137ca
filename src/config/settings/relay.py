"""Settings do relay Jellyfin → WhatsApp.

Lista fixa e ordenada de destinos, carregada uma vez no startup a partir
de `RELAY_DESTINATIONS` (separados por vírgula) ou de um arquivo YAML
apontado por `RELAY_DESTINATIONS_FILE`.

Formatos aceitos no YAML:

    destinations:
      - "5511999990001"
      - "5511999990002"

ou uma lista simples na raiz.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_EVENT_TYPE = "New Content Added"
DEFAULT_PORT = 3000

# wa_id aceito pela Cloud API, opcionalmente com "+" ou sufixo @c.us
_RECIPIENT_PATTERN = re.compile(r"\+?\d{8,15}(@c\.us)?")


class DestinationsFileError(Exception):
    """Erro ao carregar arquivo YAML de destinos."""


@dataclass(frozen=True)
class RelaySettings:
    """Configurações do relay.

    Attributes:
        destinations: Destinos (wa_id/chat id) na ordem de envio
        default_event_type: EventType usado quando o payload não informa
        readiness_timeout_seconds: Espera máxima pelo cliente antes do envio
        poster_enabled: False força envio somente texto
        host: Interface do servidor HTTP
        port: Porta do servidor HTTP
        destinations_file_error: Erro ao ler RELAY_DESTINATIONS_FILE, se houver
    """

    destinations: tuple[str, ...] = ()
    default_event_type: str = DEFAULT_EVENT_TYPE
    readiness_timeout_seconds: float = 10.0
    poster_enabled: bool = True
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    destinations_file_error: str | None = None

    def validate(self) -> list[str]:
        """Valida configurações do relay.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.destinations:
            errors.append("RELAY_DESTINATIONS vazio: nenhum destino configurado")

        if any(not dest.strip() for dest in self.destinations):
            errors.append("RELAY_DESTINATIONS contém destino vazio")

        invalid = [dest for dest in self.destinations if not _RECIPIENT_PATTERN.fullmatch(dest)]
        if invalid:
            errors.append(
                f"Destinos inválidos: {', '.join(invalid)}. Use o número (wa_id), "
                "ex: 5511999990001; grupos (@g.us) não são suportados pela Cloud API"
            )

        if self.destinations_file_error:
            errors.append(f"RELAY_DESTINATIONS_FILE: {self.destinations_file_error}")

        if self.readiness_timeout_seconds < 0:
            errors.append("RELAY_READINESS_TIMEOUT_SECONDS deve ser >= 0")

        if not 0 < self.port < 65536:
            errors.append(f"PORT inválida: {self.port}")

        return errors


def parse_destinations(raw: Any) -> tuple[str, ...]:
    """Normaliza destinos: strip, remove vazios e duplicados (ordem preservada).

    Args:
        raw: String separada por vírgula ou lista de valores.

    Returns:
        Tupla de destinos na ordem original.
    """
    if raw is None:
        return ()
    items = raw.split(",") if isinstance(raw, str) else list(raw)

    seen: dict[str, None] = {}
    for item in items:
        if item is None or isinstance(item, (dict, list)):
            continue
        value = str(item).strip()
        if value:
            seen.setdefault(value, None)
    return tuple(seen)


def load_destinations_file(path: str | Path) -> tuple[str, ...]:
    """Carrega destinos de um arquivo YAML.

    Raises:
        DestinationsFileError: Se arquivo não existir ou YAML inválido
    """
    file_path = Path(path)
    if not file_path.exists():
        raise DestinationsFileError(f"Arquivo de destinos não encontrado: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise DestinationsFileError(f"YAML de destinos inválido: {file_path}") from exc

    if isinstance(data, dict):
        data = data.get("destinations")
    if not isinstance(data, list):
        raise DestinationsFileError(
            "YAML de destinos deve ser uma lista ou conter a chave 'destinations'"
        )
    return parse_destinations(data)


def _load_relay_from_env() -> RelaySettings:
    """Carrega RelaySettings de variáveis de ambiente."""
    file_error: str | None = None
    destinations = parse_destinations(os.getenv("RELAY_DESTINATIONS", ""))
    destinations_file = os.getenv("RELAY_DESTINATIONS_FILE", "")
    if destinations_file:
        try:
            destinations = parse_destinations(
                destinations + load_destinations_file(destinations_file)
            )
        except DestinationsFileError as exc:
            file_error = str(exc)
            logger.error(
                "relay_destinations_file_invalid",
                extra={"path": destinations_file, "error": str(exc)},
            )

    return RelaySettings(
        destinations=destinations,
        default_event_type=os.getenv("RELAY_DEFAULT_EVENT_TYPE", DEFAULT_EVENT_TYPE),
        readiness_timeout_seconds=float(
            os.getenv("RELAY_READINESS_TIMEOUT_SECONDS", "10")
        ),
        poster_enabled=os.getenv("RELAY_POSTER_ENABLED", "true").lower()
        in ("true", "1", "yes"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        destinations_file_error=file_error,
    )


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Retorna instância cacheada de RelaySettings."""
    return _load_relay_from_env()
