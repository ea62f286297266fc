"""Testes de correlação, redação de PII e métricas."""

from __future__ import annotations

import logging

import pytest

from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    hash_identifier,
    record_auto_reply,
    record_latency,
    reset_correlation_id,
    set_correlation_id,
)


class TestCorrelation:
    def test_set_and_reset(self) -> None:
        before = get_correlation_id()
        token = set_correlation_id("req-1")
        assert get_correlation_id() == "req-1"
        reset_correlation_id(token)
        assert get_correlation_id() == before

    def test_generates_when_missing(self) -> None:
        token = set_correlation_id(None)
        try:
            assert len(get_correlation_id()) == 36
        finally:
            reset_correlation_id(token)

    def test_from_headers(self) -> None:
        assert correlation_id_from_headers({"x-correlation-id": " abc "}) == "abc"
        assert correlation_id_from_headers({}) is None
        assert correlation_id_from_headers({"x-correlation-id": "x" * 200}) is None


def test_hash_identifier_is_short_and_stable() -> None:
    digest = hash_identifier("5511999990001")

    assert len(digest) == 12
    assert digest == hash_identifier("5511999990001")
    assert "5511999990001" not in digest
    assert hash_identifier(None) == ""


def test_metrics_are_structured_logs(caplog: pytest.LogCaptureFixture) -> None:
    token = set_correlation_id("metric-corr")
    try:
        with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
            record_latency("inbound_processor", "execute", 12.345)
            record_auto_reply("welcome", "pt", sent=True)
    finally:
        reset_correlation_id(token)

    latency, auto_reply = caplog.records[-2:]
    assert latency.message == "metric_latency"
    assert latency.latency_ms == 12.35
    assert latency.correlation_id == "metric-corr"
    assert auto_reply.template_key == "welcome"
    assert auto_reply.sent is True
