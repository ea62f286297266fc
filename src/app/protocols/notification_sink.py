"""Protocolo do sink de notificações em tempo real.

Transporte opaco: entrega at-least-once é aceitável e o pipeline não
faz retry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class NotificationSinkProtocol(ABC):
    """Contrato para publicar eventos para a UI em tempo real."""

    @abstractmethod
    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        """Publica um evento (ex.: "new_message").

        Raises:
            InfrastructureError: Sink indisponível (ex.: RedisConnectionError).
        """
