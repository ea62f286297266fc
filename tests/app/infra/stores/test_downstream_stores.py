"""Testes dos stores downstream (memória, Redis e Firestore)."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.message_info import MessageInfo
from app.infra.stores import (
    FirestoreTicketStore,
    MemoryNotificationSink,
    MemoryTicketStore,
    RedisNotificationSink,
)
from app.observability import hash_identifier
from utils.errors import FirestoreUnavailableError, RedisConnectionError

CONTACT_DATA = {
    "id": "sac1:5511999990001@s.whatsapp.net",
    "phone": "5511999990001",
    "phone_formatted": "+55 (11) 99999-0001",
    "name": "Maria",
    "language": "pt",
    "is_group": False,
    "country": "brazil",
    "message_count": 1,
}


class TestMemoryStores:
    @pytest.mark.asyncio
    async def test_ticket_store_records_conversation(self) -> None:
        store = MemoryTicketStore()

        await store.record_conversation(
            CONTACT_DATA, MessageInfo.text("oi"), message_id="3EB0ABC"
        )

        records = store.get_records()
        assert len(records) == 1
        assert records[0]["message_id"] == "3EB0ABC"
        assert records[0]["message"] == {"type": "text", "content": "oi"}

    @pytest.mark.asyncio
    async def test_ticket_store_is_bounded(self) -> None:
        store = MemoryTicketStore(max_records=2)
        for index in range(3):
            await store.record_conversation(
                CONTACT_DATA, MessageInfo.text("oi"), message_id=str(index)
            )

        assert [r["message_id"] for r in store.get_records()] == ["1", "2"]

    @pytest.mark.asyncio
    async def test_notification_sink_keeps_events(self) -> None:
        sink = MemoryNotificationSink()

        await sink.publish("new_message", {"message_id": "3EB0ABC"})

        assert sink.get_events() == [("new_message", {"message_id": "3EB0ABC"})]


class TestRedisNotificationSink:
    @pytest.mark.asyncio
    async def test_publish_serializes_event(self) -> None:
        redis_client = MagicMock()
        redis_client.publish = AsyncMock(return_value=1)
        sink = RedisNotificationSink(redis_client, channel="canal:teste")

        await sink.publish("new_message", {"contact": {"name": "Maria"}})

        channel, message = redis_client.publish.await_args.args
        body = json.loads(message)
        assert channel == "canal:teste"
        assert body["event"] == "new_message"
        assert body["payload"] == {"contact": {"name": "Maria"}}
        assert "published_at" in body

    @pytest.mark.asyncio
    async def test_publish_failure_is_wrapped(self) -> None:
        redis_client = MagicMock()
        redis_client.publish = AsyncMock(side_effect=ConnectionError("refused"))
        sink = RedisNotificationSink(redis_client)

        with pytest.raises(RedisConnectionError):
            await sink.publish("new_message", {})


class TestFirestoreTicketStore:
    @pytest.mark.asyncio
    async def test_records_conversation_and_message(self) -> None:
        client = MagicMock()
        store = FirestoreTicketStore(
            client, collection="conversas", messages_subcollection="mensagens"
        )

        await store.record_conversation(
            CONTACT_DATA, MessageInfo.text("oi"), message_id="3EB0ABC"
        )

        client.collection.assert_called_once_with("conversas")
        conversation_ref = client.collection.return_value.document.return_value
        client.collection.return_value.document.assert_called_once_with(
            f"sac1_{hash_identifier('5511999990001')}"
        )
        conversation_doc = conversation_ref.set.call_args.args[0]
        assert conversation_ref.set.call_args.kwargs == {"merge": True}
        assert conversation_doc["last_message_type"] == "text"
        assert conversation_doc["name"] == "Maria"

        messages = conversation_ref.collection.return_value
        conversation_ref.collection.assert_called_once_with("mensagens")
        messages.document.assert_called_once_with("3EB0ABC")
        message_doc = messages.document.return_value.set.call_args.args[0]
        assert message_doc["content"] == "oi"
        assert message_doc["message_id"] == "3EB0ABC"

    @pytest.mark.asyncio
    async def test_failure_is_wrapped(self) -> None:
        client = MagicMock()
        client.collection.side_effect = RuntimeError("unavailable")
        store = FirestoreTicketStore(client)

        with pytest.raises(FirestoreUnavailableError):
            await store.record_conversation(CONTACT_DATA, MessageInfo.unknown())
