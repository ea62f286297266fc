"""Use cases da integração Evolution API (WhatsApp)."""

from .process_inbound_event import (
    InboundProcessingResult,
    ProcessingReason,
    ProcessingState,
    ProcessInboundEventUseCase,
)
from .send_text_message import SendTextMessageUseCase, SendTextResult

__all__ = [
    # Inbound
    "InboundProcessingResult",
    "ProcessInboundEventUseCase",
    "ProcessingReason",
    "ProcessingState",
    # Envio manual
    "SendTextMessageUseCase",
    "SendTextResult",
]
