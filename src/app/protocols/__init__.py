"""Protocolos e contratos do core da aplicação."""

from .contact_directory import ContactDirectoryProtocol, PatchFactory
from .gateway_client import GatewayClientProtocol, SendResult
from .notification_sink import NotificationSinkProtocol
from .ticket_store import TicketStoreProtocol

__all__ = [
    "ContactDirectoryProtocol",
    "GatewayClientProtocol",
    "NotificationSinkProtocol",
    "PatchFactory",
    "SendResult",
    "TicketStoreProtocol",
]
