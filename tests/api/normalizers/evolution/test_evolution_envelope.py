"""Testes de validação do envelope de webhook."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from api.normalizers.evolution import InvalidPayloadError, parse_envelope
from api.normalizers.evolution.envelope import is_message_event


def _payload(**data_overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "key": {
            "remoteJid": "5511999990001@s.whatsapp.net",
            "fromMe": False,
            "id": "3EB0ABC",
        },
        "pushName": "Maria",
        "message": {"conversation": "oi"},
        "messageTimestamp": 1772452800,
    }
    data.update(data_overrides)
    return {"event": "messages.upsert", "instance": "sac1", "data": data}


def test_parse_full_envelope() -> None:
    envelope = parse_envelope(_payload(), default_instance="padrao")

    assert envelope.instance == "sac1"
    assert envelope.message_id == "3EB0ABC"
    assert envelope.remote_jid == "5511999990001@s.whatsapp.net"
    assert envelope.from_me is False
    assert envelope.push_name == "Maria"
    assert envelope.message == {"conversation": "oi"}
    assert envelope.message_timestamp == datetime.fromtimestamp(1772452800, tz=UTC)
    assert envelope.directory_key == "sac1:5511999990001@s.whatsapp.net"


def test_missing_instance_uses_default() -> None:
    payload = _payload()
    del payload["instance"]

    envelope = parse_envelope(payload, default_instance="padrao")

    assert envelope.instance == "padrao"


def test_string_timestamp_and_missing_push_name() -> None:
    envelope = parse_envelope(
        _payload(messageTimestamp="1772452800", pushName=""),
        default_instance="padrao",
    )

    assert envelope.message_timestamp is not None
    assert envelope.push_name is None


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"event": "messages.upsert"},
        {"data": {"message": {}}},
        {"data": {"key": {"remoteJid": "5511999990001@s.whatsapp.net"}}},
        {"data": {"key": {"id": "3EB0ABC"}}},
        {"data": {"key": {"id": 123, "remoteJid": "5511999990001@s.whatsapp.net"}}},
    ],
)
def test_invalid_envelopes_raise(payload: object) -> None:
    with pytest.raises(InvalidPayloadError):
        parse_envelope(payload, default_instance="padrao")


def test_is_message_event() -> None:
    assert is_message_event("messages.upsert") is True
    assert is_message_event("MESSAGES_UPSERT") is True
    assert is_message_event("connection.update") is False
    assert is_message_event(None) is False
