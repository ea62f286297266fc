"""Testes para config.logging.

Cobre: configure_logging, log_fallback, CorrelationIdFilter e o formato JSON.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    PhoneRedactionFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "message", name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    def test_default_level(self) -> None:
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    def test_level_is_case_insensitive(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging()

        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "atende_evolution"
        assert get_logger("a.b") is logging.getLogger("a.b")


class TestLogFallback:
    def test_basic(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "ticket_store")

        call_args = logger.info.call_args
        assert call_args[0] == ("Fallback applied for %s", "ticket_store")
        extra = call_args[1]["extra"]
        assert extra == {"fallback_used": True, "component": "ticket_store"}

    def test_with_reason_and_elapsed(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "notification_sink", reason="TimeoutError", elapsed_ms=5000.0)

        extra = logger.info.call_args[1]["extra"]
        assert extra["reason"] == "TimeoutError"
        assert extra["elapsed_ms"] == 5000.0


class TestCorrelationIdFilter:
    def test_adds_correlation_id_from_getter(self) -> None:
        filter_ = CorrelationIdFilter("atende", lambda: "corr-123")
        record = _record()

        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "atende"

    def test_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"

        filter_.filter(record)

        assert record.correlation_id == "explicit-id"

    def test_empty_string_without_getter(self) -> None:
        record = _record()
        CorrelationIdFilter("svc").filter(record)
        assert record.correlation_id == ""


class TestJsonFormatter:
    def test_fields(self) -> None:
        assert set(REQUIRED_LOG_FIELDS) == {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        }
        assert FIELD_RENAME_MAP == {
            "asctime": "timestamp",
            "levelname": "severity",
            "name": "logger",
        }

    def test_formats_record_as_json(self) -> None:
        record = _record("inbound_event_processed", name="app.use_cases")
        record.correlation_id = "abc-123"
        record.service = "atende_evolution"
        record.reason = "processed"

        output = json.loads(create_json_formatter().format(record))

        assert output["message"] == "inbound_event_processed"
        assert output["logger"] == "app.use_cases"
        assert output["severity"] == "INFO"
        assert "timestamp" in output
        assert output["correlation_id"] == "abc-123"
        assert output["reason"] == "processed"


class TestPhoneRedactionFilter:
    def test_masks_phone_in_extra_fields(self) -> None:
        record = _record()
        record.remote_jid = "5511999990001@s.whatsapp.net"
        record.note = "contato 5511999990001 respondeu"

        assert PhoneRedactionFilter().filter(record) is True

        assert record.remote_jid.startswith("phone#")
        assert "5511999990001" not in record.note
        assert record.note.startswith("contato phone#")

    def test_keeps_non_phone_values(self) -> None:
        record = _record()
        record.message_id = "3EB0ABC123"
        record.latency_ms = 12.5

        PhoneRedactionFilter().filter(record)

        assert record.message_id == "3EB0ABC123"
        assert record.latency_ms == 12.5

    def test_does_not_touch_standard_attributes(self) -> None:
        record = _record(msg="evento 5511999990001")

        PhoneRedactionFilter().filter(record)

        assert record.msg == "evento 5511999990001"
