"""Erros de infraestrutura (gateway, Redis, Firestore) compartilhados pelas camadas."""

from .exceptions import (
    FirestoreUnavailableError,
    GatewayError,
    InfrastructureError,
    RedisConnectionError,
)

__all__ = [
    "FirestoreUnavailableError",
    "GatewayError",
    "InfrastructureError",
    "RedisConnectionError",
]
