"""Validação do envelope de webhook Evolution API.

Formato esperado:
    {event, instance, data: {key: {remoteJid, fromMe, id}, message,
     pushName, messageTimestamp}}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from ._extraction_helpers import coerce_int

MESSAGE_EVENTS = frozenset({"messages.upsert", "MESSAGES_UPSERT"})


class InvalidPayloadError(ValueError):
    """Envelope sem identidade de mensagem ou com formato inválido."""


@dataclass(frozen=True, slots=True)
class EvolutionEnvelope:
    """Campos do envelope usados pelo pipeline inbound."""

    event: str
    instance: str
    message_id: str
    remote_jid: str
    from_me: bool
    push_name: str | None
    message: Any
    message_timestamp: datetime | None

    @property
    def directory_key(self) -> str:
        return f"{self.instance}:{self.remote_jid}"


def is_message_event(event: Any) -> bool:
    """True para eventos de mensagem nova (`messages.upsert`)."""
    return isinstance(event, str) and event in MESSAGE_EVENTS


def _parse_timestamp(value: Any) -> datetime | None:
    seconds = coerce_int(value)
    if seconds is None or seconds <= 0:
        return None
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def parse_envelope(payload: Any, *, default_instance: str) -> EvolutionEnvelope:
    """Valida o envelope e extrai os campos de identidade.

    Args:
        payload: Corpo JSON do webhook.
        default_instance: Instância usada quando o envelope não informa.

    Raises:
        InvalidPayloadError: Envelope não é objeto, ou falta `data.key.id`
            ou `data.key.remoteJid`.
    """
    if not isinstance(payload, Mapping):
        raise InvalidPayloadError("payload is not an object")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise InvalidPayloadError("missing data")

    key = data.get("key")
    if not isinstance(key, Mapping):
        raise InvalidPayloadError("missing data.key")

    message_id = key.get("id")
    if not message_id or not isinstance(message_id, str):
        raise InvalidPayloadError("missing or invalid message_id")

    remote_jid = key.get("remoteJid")
    if not remote_jid or not isinstance(remote_jid, str):
        raise InvalidPayloadError("missing remoteJid")

    instance = payload.get("instance")
    push_name = data.get("pushName")
    event = payload.get("event")

    return EvolutionEnvelope(
        event=event if isinstance(event, str) else "",
        instance=instance if isinstance(instance, str) and instance else default_instance,
        message_id=message_id,
        remote_jid=remote_jid,
        from_me=key.get("fromMe") is True,
        push_name=push_name if isinstance(push_name, str) and push_name else None,
        message=data.get("message"),
        message_timestamp=_parse_timestamp(data.get("messageTimestamp")),
    )
