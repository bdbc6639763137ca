"""Settings comuns a todo o relay (ambiente, nome do serviço, logging)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
}
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class BaseSettings:
    """Configurações de processo.

    Attributes:
        environment: development | staging | production
        service_name: Campo `service` dos logs e do /health
        debug: Liga reload do uvicorn
        log_level: Nível do logger raiz
        log_json: False troca JSON por texto legível
    """

    environment: Environment = "development"
    service_name: str = "jellyfin_relay"
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True

    @property
    def is_strict(self) -> bool:
        """Configuração inválida impede o boot (staging/production)."""
        return self.environment != "development"

    def validate(self) -> list[str]:
        """Retorna erros de configuração (vazia = OK)."""
        errors: list[str] = []
        if not self.service_name.strip():
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        return errors


def _parse_environment(raw: str) -> Environment:
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _load_base_from_env() -> BaseSettings:
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "jellyfin_relay"),
        debug=_flag("DEBUG", "false"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_json=_flag("LOG_JSON", "true"),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """BaseSettings do ambiente, carregado uma vez por processo."""
    return _load_base_from_env()
