"""Clientes dos backends downstream (Redis e Firestore).

Singletons criados sob demanda; o import dos SDKs fica dentro das factories
para que o backend `memory` rode sem credenciais nem rede.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings, get_downstream_settings, get_firestore_settings

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_async_redis_client() -> AsyncRedis[bytes]:
    """Cliente Redis assíncrono para o sink de notificações.

    Os timeouts de socket seguem DOWNSTREAM_TIMEOUT_SECONDS, o mesmo limite
    aplicado pelo use case a cada publicação.

    Raises:
        ValueError: REDIS_URL ausente.
    """
    from redis.asyncio import Redis as AsyncRedis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        raise ValueError("REDIS_URL não configurado")

    timeout = get_downstream_settings().timeout_seconds
    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
        health_check_interval=30,
    )
    pool_kwargs = client.connection_pool.connection_kwargs
    logger.info(
        "async_redis_client_created",
        extra={"host": pool_kwargs.get("host", "unknown"), "db": pool_kwargs.get("db", 0)},
    )
    return client


@lru_cache(maxsize=1)
def create_firestore_client() -> FirestoreClient:
    """Cliente Firestore síncrono (usado via asyncio.to_thread)."""
    from google.cloud import firestore

    settings = get_firestore_settings()
    project = settings.resolve_project(get_base_settings().gcp_project)
    client = firestore.Client(project=project, database=settings.database)
    logger.info(
        "firestore_client_created",
        extra={"project": project, "database": settings.database},
    )
    return client
