"""Protocolo do cliente de gateway WhatsApp (envio de texto).

Evita dependência direta da camada api.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class SendResult:
    """Resultado de um envio aceito pelo gateway."""

    message_id: str | None
    status: str | None
    raw: dict[str, Any] | None = None


class GatewayClientProtocol(Protocol):
    """Contrato mínimo para envio de texto via gateway.

    O telefone já deve estar normalizado (apenas dígitos).
    Falhas levantam GatewayError.
    """

    async def send_text(
        self,
        instance: str,
        phone: str,
        text: str,
        options: dict[str, Any] | None = None,
    ) -> SendResult: ...
