"""Testes dos endpoints de webhook da Evolution API."""

from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta

import pytest
from starlette.requests import Request

from api.routes.evolution import webhook
from app.domain.contact_patch import ContactPatch
from app.infra.stores import InMemoryContactDirectory
from app.services.auto_reply import AutoReplyEngine
from app.use_cases.evolution import ProcessInboundEventUseCase, SendTextMessageUseCase
from config.settings import AutoReplySettings
from tests.fakes.fake_gateway_client import FakeGatewayClient
from utils.errors import GatewayError


def _build_request(body: bytes, headers: dict[str, str] | None = None) -> Request:
    raw_headers = [
        (k.lower().encode("utf-8"), v.encode("utf-8")) for k, v in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "path": "/webhook/evolution",
        "raw_path": b"/webhook/evolution",
        "query_string": b"",
        "headers": raw_headers,
    }
    sent = False

    async def _receive() -> dict[str, object]:
        nonlocal sent
        if sent:
            return {"type": "http.request", "body": b"", "more_body": False}
        sent = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def _inbound_use_case(gateway: FakeGatewayClient) -> ProcessInboundEventUseCase:
    return ProcessInboundEventUseCase(
        directory=InMemoryContactDirectory(),
        auto_reply=AutoReplyEngine(AutoReplySettings(enabled=False)),
        gateway=gateway,
        default_instance="sac1",
    )


def _json(response) -> dict:  # type: ignore[no-untyped-def]
    return json.loads(response.body.decode("utf-8"))


class TestReceiveWebhook:
    @pytest.mark.asyncio
    async def test_valid_event_returns_result(self) -> None:
        payload = {
            "event": "messages.upsert",
            "instance": "sac1",
            "data": {
                "key": {
                    "remoteJid": "5511999990001@s.whatsapp.net",
                    "fromMe": False,
                    "id": "3EB0ABC",
                },
                "pushName": "Maria",
                "message": {"conversation": "oi"},
            },
        }
        request = _build_request(
            json.dumps(payload).encode("utf-8"),
            headers={"X-Correlation-ID": "corr-123"},
        )

        response = await webhook.receive_evolution_webhook(
            request, use_case=_inbound_use_case(FakeGatewayClient())
        )
        body = _json(response)

        assert response.status_code == 200
        assert body["success"] is True
        assert body["reason"] == "processed"
        assert body["cache_updated"] is True
        assert body["contact"]["name"] == "Maria"
        assert body["correlation_id"] == "corr-123"

    @pytest.mark.asyncio
    async def test_invalid_json_still_returns_200(self) -> None:
        response = await webhook.receive_evolution_webhook(
            _build_request(b"{not json"),
            use_case=_inbound_use_case(FakeGatewayClient()),
        )
        body = _json(response)

        assert response.status_code == 200
        assert body["success"] is False
        assert body["reason"] == "malformed_payload"
        assert body["correlation_id"]

    @pytest.mark.asyncio
    async def test_group_event_is_acknowledged(self) -> None:
        payload = {
            "event": "messages.upsert",
            "data": {
                "key": {"remoteJid": "120363025555555555@g.us", "id": "3EB0G"},
                "message": {"conversation": "oi"},
            },
        }

        response = await webhook.receive_evolution_webhook(
            _build_request(json.dumps(payload).encode("utf-8")),
            use_case=_inbound_use_case(FakeGatewayClient()),
        )

        assert response.status_code == 200
        assert _json(response)["reason"] == "invalid_phone"


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        gateway = FakeGatewayClient()
        use_case = SendTextMessageUseCase(gateway, default_instance="sac1")

        response = await webhook.send_message(
            webhook.SendMessageRequest(phone="5511999990001", text="Olá"),
            use_case=use_case,
        )

        assert response.status_code == 200
        assert _json(response)["message_id"] == "3EB0FAKE0001"

    @pytest.mark.asyncio
    async def test_invalid_phone_is_400(self) -> None:
        use_case = SendTextMessageUseCase(FakeGatewayClient(), default_instance="sac1")

        response = await webhook.send_message(
            webhook.SendMessageRequest(phone="123", text="Olá"),
            use_case=use_case,
        )

        assert response.status_code == 400
        assert _json(response)["error"] == "invalid_phone"

    @pytest.mark.asyncio
    async def test_gateway_failure_is_502(self) -> None:
        use_case = SendTextMessageUseCase(
            FakeGatewayClient(error=GatewayError("http_timeout", is_retryable=True)),
            default_instance="sac1",
        )

        response = await webhook.send_message(
            webhook.SendMessageRequest(phone="5511999990001", text="Olá"),
            use_case=use_case,
        )

        assert response.status_code == 502


class TestCacheEndpoints:
    @pytest.mark.asyncio
    async def test_snapshot_marks_stale_entries(self) -> None:
        now = datetime.now(UTC)
        times = iter([now - timedelta(hours=1), now])
        directory = InMemoryContactDirectory(clock=lambda: next(times))
        await directory.upsert("sac1:old", ContactPatch(push_name="Antigo"))
        await directory.upsert("sac1:new", ContactPatch(push_name="Novo"))

        body = await webhook.cache_snapshot(directory=directory)

        assert body["total"] == 2
        assert body["stale"] == 1
        by_id = {contact["id"]: contact for contact in body["contacts"]}
        assert by_id["sac1:old"]["is_stale"] is True
        assert by_id["sac1:new"]["is_stale"] is False

    @pytest.mark.asyncio
    async def test_clear_cache(self) -> None:
        directory = InMemoryContactDirectory()
        await directory.upsert("sac1:a")

        body = await webhook.clear_cache(directory=directory)

        assert body == {"success": True, "removed": 1}
        assert directory.size == 0
