"""Formatter JSON compatível com Cloud Logging (Cloud Run)."""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

# Cloud Logging lê `severity` e `timestamp` do payload JSON
FIELD_RENAME_MAP = {
    "asctime": "timestamp",
    "levelname": "severity",
    "name": "logger",
}

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON; campos de `extra` entram no nível raiz.

    Exemplo de output:
        {
            "timestamp": "2026-03-02T12:00:00-0300",
            "severity": "INFO",
            "logger": "app.use_cases.evolution.process_inbound_event",
            "message": "inbound_event_processed",
            "correlation_id": "abc-123",
            "service": "atende_evolution",
            "reason": "processed"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)
    return JsonFormatter(
        format_string,
        datefmt=_TIMESTAMP_FORMAT,
        rename_fields=FIELD_RENAME_MAP,
    )
