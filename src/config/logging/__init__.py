"""Logging estruturado JSON do Atende Evolution.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="atende_evolution")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("inbound_event_processed", extra={"latency_ms": 42})

Campos presentes em todo log: correlation_id, service, severity, logger,
message e timestamp. Telefones em campos extra são trocados por hash.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter, PhoneRedactionFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "PhoneRedactionFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
