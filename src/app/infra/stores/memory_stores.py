"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from app.domain.message_info import MessageInfo
from app.protocols.notification_sink import NotificationSinkProtocol
from app.protocols.ticket_store import TicketStoreProtocol


class MemoryTicketStore(TicketStoreProtocol):
    """Ticket store em memória, apenas para dev/test."""

    def __init__(self, max_records: int = 10000) -> None:
        self._records: list[dict[str, Any]] = []
        self._max_records = max_records

    async def record_conversation(
        self,
        contact_data: dict[str, Any],
        message_info: MessageInfo,
        *,
        message_id: str | None = None,
    ) -> None:
        """Append do registro de conversa."""
        self._records.append(
            {
                "message_id": message_id,
                "contact": dict(contact_data),
                "message": message_info.to_dict(),
                "recorded_at": datetime.now(UTC).isoformat(),
            }
        )
        # Limita tamanho para evitar memory leak em dev
        if len(self._records) > self._max_records:
            self._records = self._records[-self._max_records:]

    def get_records(self) -> list[dict[str, Any]]:
        """Retorna todos os registros (apenas para testes)."""
        return list(self._records)


class MemoryNotificationSink(NotificationSinkProtocol):
    """Sink de notificações em memória, apenas para dev/test."""

    def __init__(self, max_events: int = 10000) -> None:
        self._events: list[tuple[str, dict[str, Any]]] = []
        self._max_events = max_events

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        """Guarda o evento publicado."""
        self._events.append((event, dict(payload)))
        if len(self._events) > self._max_events:
            self._events = self._events[-self._max_events:]

    def get_events(self) -> list[tuple[str, dict[str, Any]]]:
        """Retorna eventos publicados (apenas para testes)."""
        return list(self._events)
