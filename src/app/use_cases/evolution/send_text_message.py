"""Use case para envio manual de texto via gateway (endpoint público)."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from app.domain.phone import MIN_PHONE_DIGITS, to_gateway_number
from app.observability import hash_identifier
from utils.errors import GatewayError, InfrastructureError

if TYPE_CHECKING:
    from app.protocols import GatewayClientProtocol

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 4096


@dataclass(frozen=True, slots=True)
class SendTextResult:
    """Resultado do envio manual."""

    success: bool
    message_id: str | None = None
    status: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message_id": self.message_id,
            "status": self.status,
            "error": self.error,
        }


class SendTextMessageUseCase:
    """Valida telefone/texto e delega o envio ao gateway client."""

    def __init__(
        self,
        gateway: GatewayClientProtocol,
        *,
        default_instance: str,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._gateway = gateway
        self._default_instance = default_instance
        self._timeout = timeout_seconds

    async def execute(
        self,
        *,
        phone: str,
        text: str,
        instance: str | None = None,
        options: dict[str, Any] | None = None,
    ) -> SendTextResult:
        number = to_gateway_number(phone or "")
        if len(number) < MIN_PHONE_DIGITS:
            return SendTextResult(success=False, error="invalid_phone")
        if not text or not text.strip():
            return SendTextResult(success=False, error="empty_text")
        if len(text) > MAX_TEXT_LENGTH:
            return SendTextResult(success=False, error="text_too_long")

        target_instance = instance or self._default_instance
        try:
            result = await asyncio.wait_for(
                self._gateway.send_text(target_instance, number, text, options),
                timeout=self._timeout,
            )
        except TimeoutError:
            logger.warning("send_text_timeout", extra={"phone_hash": hash_identifier(number)})
            return SendTextResult(success=False, error="timeout")
        except GatewayError as exc:
            logger.warning(
                "send_text_gateway_error",
                extra={
                    "phone_hash": hash_identifier(number),
                    "status_code": exc.status_code,
                    "is_retryable": exc.is_retryable,
                },
            )
            return SendTextResult(success=False, error=str(exc))
        except InfrastructureError as exc:
            return SendTextResult(success=False, error=type(exc).__name__)

        return SendTextResult(success=True, message_id=result.message_id, status=result.status)
