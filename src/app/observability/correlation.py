"""Gerenciamento de correlation_id para rastreamento de requisições.

O correlation_id vem do header `X-Correlation-ID` (ou é gerado) e é
injetado em todos os logs pelo CorrelationIdFilter.
Usa ContextVar para ser async-safe.

Uso:
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        # processar request
    finally:
        reset_correlation_id(token)
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from contextvars import ContextVar, Token

CORRELATION_HEADER = "x-correlation-id"
_MAX_INBOUND_LENGTH = 128

# ContextVar para correlation_id (async-safe)
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def correlation_id_from_headers(headers: Mapping[str, str]) -> str | None:
    """Lê o correlation_id recebido, descartando valores vazios ou longos demais."""
    value = (headers.get(CORRELATION_HEADER) or "").strip()
    if not value or len(value) > _MAX_INBOUND_LENGTH:
        return None
    return value
