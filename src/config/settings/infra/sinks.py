"""Settings dos colaboradores downstream (ticket store e sink de notificação)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

TicketStoreBackend = Literal["memory", "firestore"]
NotificationSinkBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class DownstreamSettings:
    """Configurações de ticket store e notificações em tempo real.

    Attributes:
        ticket_store_backend: Backend do registro de conversas
        notification_sink_backend: Backend de publicação de eventos
        notification_channel: Canal Redis para eventos "new_message"
        timeout_seconds: Timeout de cada chamada downstream
    """

    ticket_store_backend: TicketStoreBackend = "memory"
    notification_sink_backend: NotificationSinkBackend = "memory"
    notification_channel: str = "atende:new_message"
    timeout_seconds: float = 5.0

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida backends conforme o ambiente.

        Args:
            base: BaseSettings para verificar ambiente e credenciais.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.ticket_store_backend not in ("memory", "firestore"):
            errors.append(f"TICKET_STORE_BACKEND inválido: {self.ticket_store_backend}")

        if self.notification_sink_backend not in ("memory", "redis"):
            errors.append(
                f"NOTIFICATION_SINK_BACKEND inválido: {self.notification_sink_backend}"
            )

        if self.notification_sink_backend == "redis" and not base.redis_url:
            errors.append("NOTIFICATION_SINK_BACKEND=redis requer REDIS_URL configurado")

        if self.ticket_store_backend == "memory" and not base.is_development:
            errors.append("TICKET_STORE_BACKEND=memory proibido em staging/production")

        if self.timeout_seconds <= 0:
            errors.append("DOWNSTREAM_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_downstream_from_env() -> DownstreamSettings:
    """Carrega DownstreamSettings de variáveis de ambiente."""
    ticket_backend = os.getenv("TICKET_STORE_BACKEND", "memory").lower()
    sink_backend = os.getenv("NOTIFICATION_SINK_BACKEND", "memory").lower()
    return DownstreamSettings(
        ticket_store_backend=ticket_backend,  # type: ignore[arg-type]
        notification_sink_backend=sink_backend,  # type: ignore[arg-type]
        notification_channel=os.getenv("NOTIFICATION_CHANNEL", "atende:new_message"),
        timeout_seconds=float(os.getenv("DOWNSTREAM_TIMEOUT_SECONDS", "5")),
    )


@lru_cache(maxsize=1)
def get_downstream_settings() -> DownstreamSettings:
    """Retorna instância cacheada de DownstreamSettings."""
    return _load_downstream_from_env()
