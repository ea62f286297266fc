"""Settings do gateway WhatsApp (Evolution API).

Cada gateway tem seu próprio arquivo de settings para isolamento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_INSTANCE_NAME: str = "atendimento-ao-cliente-sac1"


@dataclass(frozen=True)
class EvolutionSettings:
    """Configurações do gateway Evolution API.

    Attributes:
        api_url: URL base da Evolution API
        api_key: Chave enviada no header `apikey`
        instance_name: Instância padrão para envios
        webhook_url: URL pública deste serviço registrada no gateway
        request_timeout_seconds: Timeout de cada chamada HTTP ao gateway
        max_retries: Tentativas extras em erros transitórios
        send_delay_ms: Delay de "digitando..." aplicado pelo gateway
    """

    api_url: str = ""
    api_key: str = ""
    instance_name: str = DEFAULT_INSTANCE_NAME
    webhook_url: str = ""

    request_timeout_seconds: float = 10.0
    max_retries: int = 0
    send_delay_ms: int = 2000

    def get_send_text_endpoint(self, instance_name: str | None = None) -> str:
        """Retorna URL de envio de texto.

        Args:
            instance_name: Instância. Usa self.instance_name se None.

        Returns:
            URL no formato: {api_url}/message/sendText/{instance}

        Raises:
            ValueError: Se api_url não configurada.
        """
        if not self.api_url:
            raise ValueError("EVOLUTION_API_URL é obrigatória")
        instance = instance_name or self.instance_name
        return f"{self.api_url.rstrip('/')}/message/sendText/{instance}"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do gateway.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.api_url:
            errors.append("EVOLUTION_API_URL não configurada")

        if not self.api_key:
            errors.append("EVOLUTION_API_KEY não configurada")

        if not self.instance_name:
            errors.append("EVOLUTION_INSTANCE não configurada")

        if not 0 < self.request_timeout_seconds <= 30:
            errors.append("EVOLUTION_REQUEST_TIMEOUT_SECONDS deve estar entre 0 e 30")

        if self.max_retries < 0:
            errors.append("EVOLUTION_MAX_RETRIES deve ser >= 0")

        return errors


def _load_from_env() -> EvolutionSettings:
    """Carrega EvolutionSettings a partir de variáveis de ambiente."""
    return EvolutionSettings(
        api_url=os.getenv("EVOLUTION_API_URL", ""),
        api_key=os.getenv("EVOLUTION_API_KEY", ""),
        instance_name=os.getenv("EVOLUTION_INSTANCE", DEFAULT_INSTANCE_NAME),
        webhook_url=os.getenv("EVOLUTION_WEBHOOK_URL", ""),
        request_timeout_seconds=float(
            os.getenv("EVOLUTION_REQUEST_TIMEOUT_SECONDS", "10")
        ),
        max_retries=int(os.getenv("EVOLUTION_MAX_RETRIES", "0")),
        send_delay_ms=int(os.getenv("EVOLUTION_SEND_DELAY_MS", "2000")),
    )


@lru_cache(maxsize=1)
def get_evolution_settings() -> EvolutionSettings:
    """Retorna instância cacheada de EvolutionSettings."""
    return _load_from_env()
