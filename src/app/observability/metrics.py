"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (BigQuery, Cloud Logging, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Inbound: contador de eventos processados por motivo
- Auto-reply: contador de respostas automáticas por template/idioma/resultado

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("inbound_processor", "execute", (time.perf_counter() - start) * 1000)
"""

from __future__ import annotations

import logging

from app.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "inbound_processor", "gateway")
        operation: Nome da operação (ex: "execute", "send_text")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (default: do contexto atual)
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id or get_correlation_id(),
        },
    )


def record_inbound_event(
    reason: str,
    *,
    success: bool,
    message_type: str | None = None,
) -> None:
    """Registra um evento inbound processado."""
    logger.info(
        "metric_inbound_event",
        extra={
            "metric_type": "counter",
            "component": "inbound_processor",
            "reason": reason,
            "success": success,
            "message_type": message_type,
            "correlation_id": get_correlation_id(),
        },
    )


def record_auto_reply(
    template_key: str,
    language: str,
    *,
    sent: bool,
    after_hours: bool = False,
) -> None:
    """Registra tentativa de resposta automática.

    Args:
        template_key: Template escolhido (welcome, welcome_back)
        language: Idioma do template
        sent: Se o gateway aceitou o envio
        after_hours: Se o aviso de horário comercial foi anexado
    """
    logger.info(
        "metric_auto_reply",
        extra={
            "metric_type": "counter",
            "component": "auto_reply",
            "template_key": template_key,
            "language": language,
            "sent": sent,
            "after_hours": after_hours,
            "correlation_id": get_correlation_id(),
        },
    )
