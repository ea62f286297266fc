"""Observabilidade: logs estruturados, correlação, métricas e redação de PII.

Uso:
    from app.observability import get_correlation_id, set_correlation_id
    from app.observability import record_latency, record_auto_reply, hash_identifier
"""

from app.observability.correlation import (
    correlation_id_from_headers,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.observability.metrics import (
    record_auto_reply,
    record_inbound_event,
    record_latency,
)
from app.observability.redaction import hash_identifier

__all__ = [
    "correlation_id_from_headers",
    "generate_correlation_id",
    "get_correlation_id",
    "hash_identifier",
    "record_auto_reply",
    "record_inbound_event",
    "record_latency",
    "reset_correlation_id",
    "set_correlation_id",
]
