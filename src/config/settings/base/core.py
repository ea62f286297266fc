"""Settings de processo do Atende Evolution.

Ambiente, identificação do serviço nos logs, porta HTTP e credenciais
compartilhadas pelos backends (GCP e Redis).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from config.logging.config import VALID_LOG_LEVELS

Environment = Literal["development", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "prod": "production",
    "production": "production",
    "stage": "staging",
    "staging": "staging",
    "dev": "development",
    "development": "development",
    "local": "development",
}


@dataclass(frozen=True)
class BaseSettings:
    """Configurações do processo.

    Attributes:
        environment: development|staging|production
        service_name: Valor do campo `service` em cada log
        log_level: Nível do root logger
        http_port: Porta do uvicorn no modo `main()`
        gcp_project: Projeto GCP padrão (Firestore)
        redis_url: URL do Redis usado pelo sink de notificações
    """

    environment: Environment = "development"
    service_name: str = "atende_evolution"
    log_level: str = "INFO"
    http_port: int = 8080

    gcp_project: str = ""
    redis_url: str = ""

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")
        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")
        if not 0 < self.http_port < 65536:
            errors.append(f"PORT fora do intervalo: {self.http_port}")
        return errors


def _environment_from(raw: str) -> Environment:
    # Valor desconhecido cai em development para não bloquear execução local
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Lê BaseSettings do ambiente (cacheado; limpar com cache_clear nos testes)."""
    return BaseSettings(
        environment=_environment_from(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "atende_evolution"),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        http_port=int(os.getenv("PORT", "8080")),
        gcp_project=os.getenv("GCP_PROJECT") or os.getenv("GOOGLE_CLOUD_PROJECT", ""),
        redis_url=os.getenv("REDIS_URL", ""),
    )
