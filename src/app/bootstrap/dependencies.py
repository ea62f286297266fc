"""Factories de dependências baseadas em configuração de ambiente.

Conecta implementações concretas (stores, sink, gateway) aos protocolos
usados pelos use cases.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from api.connectors.evolution import EvolutionHttpClient
from app.bootstrap.clients import create_async_redis_client, create_firestore_client
from app.infra.stores import (
    FirestoreTicketStore,
    InMemoryContactDirectory,
    MemoryNotificationSink,
    MemoryTicketStore,
    RedisNotificationSink,
)
from app.services.auto_reply import AutoReplyEngine
from app.use_cases.evolution import ProcessInboundEventUseCase, SendTextMessageUseCase
from config.settings import (
    get_auto_reply_settings,
    get_base_settings,
    get_contact_cache_settings,
    get_downstream_settings,
    get_evolution_settings,
    get_firestore_settings,
)

if TYPE_CHECKING:
    from app.protocols import (
        ContactDirectoryProtocol,
        GatewayClientProtocol,
        NotificationSinkProtocol,
        TicketStoreProtocol,
    )

logger = logging.getLogger(__name__)


def create_contact_directory() -> ContactDirectoryProtocol:
    """Cria diretório de contatos com janelas vindas do ambiente."""
    settings = get_contact_cache_settings()
    directory = InMemoryContactDirectory(
        staleness_window=settings.staleness_window,
        cold_threshold=settings.cold_threshold,
        sweep_every=settings.sweep_every,
    )
    logger.info(
        "contact_directory_created",
        extra={
            "staleness_minutes": settings.staleness_minutes,
            "cold_hours": settings.cold_hours,
            "sweep_every": settings.sweep_every,
        },
    )
    return directory


def create_ticket_store() -> TicketStoreProtocol:
    """Cria ticket store baseado em TICKET_STORE_BACKEND."""
    backend = get_downstream_settings().ticket_store_backend

    if backend == "firestore":
        firestore_settings = get_firestore_settings()
        store = FirestoreTicketStore(
            create_firestore_client(),
            collection=firestore_settings.collection_conversations,
            messages_subcollection=firestore_settings.subcollection_messages,
        )
        logger.info("ticket_store_created", extra={"backend": "firestore"})
        return store

    if backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_ticket_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        logger.info("ticket_store_created", extra={"backend": "memory"})
        return MemoryTicketStore()

    msg = f"TICKET_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_notification_sink() -> NotificationSinkProtocol:
    """Cria sink de notificação baseado em NOTIFICATION_SINK_BACKEND."""
    settings = get_downstream_settings()
    backend = settings.notification_sink_backend

    if backend == "redis":
        sink = RedisNotificationSink(
            create_async_redis_client(),
            channel=settings.notification_channel,
        )
        logger.info("notification_sink_created", extra={"backend": "redis"})
        return sink

    if backend == "memory":
        logger.info("notification_sink_created", extra={"backend": "memory"})
        return MemoryNotificationSink()

    msg = f"NOTIFICATION_SINK_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_gateway_client() -> GatewayClientProtocol:
    """Cria cliente da Evolution API."""
    return EvolutionHttpClient(get_evolution_settings())


def create_auto_reply_engine() -> AutoReplyEngine:
    return AutoReplyEngine(get_auto_reply_settings())


def create_inbound_use_case(
    directory: ContactDirectoryProtocol,
    gateway: GatewayClientProtocol,
) -> ProcessInboundEventUseCase:
    """Monta o use case inbound com dependências do ambiente."""
    evolution = get_evolution_settings()
    auto_reply = get_auto_reply_settings()
    downstream = get_downstream_settings()
    return ProcessInboundEventUseCase(
        directory=directory,
        auto_reply=create_auto_reply_engine(),
        gateway=gateway,
        ticket_store=create_ticket_store(),
        notification_sink=create_notification_sink(),
        default_instance=evolution.instance_name,
        default_language=auto_reply.default_language,
        send_timeout_seconds=evolution.request_timeout_seconds,
        downstream_timeout_seconds=downstream.timeout_seconds,
    )


def create_send_text_use_case(gateway: GatewayClientProtocol) -> SendTextMessageUseCase:
    evolution = get_evolution_settings()
    return SendTextMessageUseCase(
        gateway,
        default_instance=evolution.instance_name,
        timeout_seconds=evolution.request_timeout_seconds,
    )
