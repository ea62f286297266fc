"""Stores: implementações concretas de persistência e notificação.

Módulos disponíveis:
    - contact_directory: Diretório de contatos em memória (lock por chave)
    - firestore_ticket_store: Registro de conversas no Firestore
    - redis_notification_sink: Notificações via Redis pub/sub
    - memory_stores: Ticket store e sink em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.contact_directory import InMemoryContactDirectory
from app.infra.stores.firestore_ticket_store import FirestoreTicketStore
from app.infra.stores.memory_stores import MemoryNotificationSink, MemoryTicketStore
from app.infra.stores.redis_notification_sink import RedisNotificationSink

__all__ = [
    # Diretório
    "InMemoryContactDirectory",
    # Firestore
    "FirestoreTicketStore",
    # Memory (dev/test)
    "MemoryNotificationSink",
    "MemoryTicketStore",
    # Redis
    "RedisNotificationSink",
]
