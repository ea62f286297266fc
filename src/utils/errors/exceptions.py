"""Exceções para falhas recuperáveis de infraestrutura e do gateway."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class RedisConnectionError(InfrastructureError):
    """Falha de conexão/timeout ao acessar Redis."""


class FirestoreUnavailableError(InfrastructureError):
    """Falha de indisponibilidade ao acessar Firestore."""


class GatewayError(InfrastructureError):
    """Erro de chamada ao gateway WhatsApp sem dados sensíveis.

    Attributes:
        status_code: Status HTTP (ou código do gateway) quando conhecido.
        is_retryable: Se uma nova tentativa pode ter sucesso.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable
