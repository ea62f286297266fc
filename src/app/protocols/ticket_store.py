"""Protocolo do store de tickets/clientes.

O pipeline não define o schema do store; apenas garante que entrega
telefone, nome, idioma, flag de grupo e o MessageInfo normalizado.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.domain.message_info import MessageInfo


class TicketStoreProtocol(ABC):
    """Contrato para persistir um registro de conversa."""

    @abstractmethod
    async def record_conversation(
        self,
        contact_data: dict[str, Any],
        message_info: MessageInfo,
        *,
        message_id: str | None = None,
    ) -> None:
        """Persiste a mensagem recebida na conversa do contato.

        Raises:
            InfrastructureError: Store indisponível (ex.: FirestoreUnavailableError).
        """
