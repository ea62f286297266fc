"""Filters de logging: contexto (correlation_id, service) e redação de telefones."""

from __future__ import annotations

import hashlib
import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos padrão do LogRecord; tudo fora daqui veio de `extra`
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "correlation_id", "service"}

# Telefone (10+ dígitos) com ou sem sufixo de JID
_PHONE_LIKE = re.compile(r"\+?\d{10,}(@(s\.whatsapp\.net|c\.us|g\.us))?")


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        Um correlation_id passado explicitamente via `extra` é preservado.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class PhoneRedactionFilter(logging.Filter):
    """Substitui telefones/JIDs em campos `extra` por hash curto.

    Última barreira: o código já loga `phone_hash`, mas um campo extra com
    número em claro não chega ao output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for name, value in list(record.__dict__.items()):
            if name in _RESERVED_ATTRS or not isinstance(value, str):
                continue
            if _PHONE_LIKE.search(value):
                setattr(record, name, _PHONE_LIKE.sub(_mask, value))
        return True


def _mask(match: re.Match[str]) -> str:
    digest = hashlib.sha256(match.group(0).encode("utf-8")).hexdigest()[:12]
    return f"phone#{digest}"
