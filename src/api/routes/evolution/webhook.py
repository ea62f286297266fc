"""Endpoints de webhook da Evolution API.

Endpoints:
- POST /webhook/evolution: recebimento de eventos (messages.upsert etc.)
- POST /webhook/send-message: envio manual de texto
- GET /webhook/cache: snapshot do diretório de contatos
- POST /webhook/clear-cache: limpa o diretório de contatos

O webhook sempre responde 200 com o resultado no corpo: falhas de
validação não devem disparar retry do gateway.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.bootstrap import get_contact_directory, get_inbound_use_case, get_send_text_use_case
from app.observability import (
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from app.protocols import ContactDirectoryProtocol
from app.use_cases.evolution import (
    InboundProcessingResult,
    ProcessingReason,
    ProcessingState,
    ProcessInboundEventUseCase,
    SendTextMessageUseCase,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_CLIENT_ERRORS = frozenset({"invalid_phone", "empty_text", "text_too_long"})


class SendMessageRequest(BaseModel):
    """Corpo de POST /webhook/send-message."""

    phone: str = Field(min_length=1)
    text: str = Field(min_length=1)
    instance: str | None = None
    options: dict[str, Any] | None = None


def _parse_body(raw_body: bytes) -> Any:
    try:
        return json.loads(raw_body)
    except (UnicodeDecodeError, ValueError):
        return None


@router.post("/evolution")
async def receive_evolution_webhook(
    request: Request,
    use_case: ProcessInboundEventUseCase = Depends(get_inbound_use_case),
) -> JSONResponse:
    """Recebe evento da Evolution API e processa de forma síncrona.

    Returns:
        200 com o InboundProcessingResult serializado (inclusive para JSON inválido).
    """
    token = set_correlation_id(correlation_id_from_headers(request.headers))
    try:
        raw_body = await request.body()
        payload = _parse_body(raw_body)

        if payload is None:
            logger.warning(
                "webhook_json_invalid",
                extra={"channel": "evolution", "payload_size": len(raw_body)},
            )
            result = InboundProcessingResult(
                success=False,
                reason=ProcessingReason.MALFORMED_PAYLOAD,
                state=ProcessingState.REJECTED,
            )
        else:
            logger.info(
                "webhook_received",
                extra={"channel": "evolution", "payload_size": len(raw_body)},
            )
            result = await use_case.execute(payload)

        body = result.to_dict()
        body["correlation_id"] = get_correlation_id()
        return JSONResponse(content=body, status_code=status.HTTP_200_OK)
    finally:
        reset_correlation_id(token)


@router.post("/send-message")
async def send_message(
    body: SendMessageRequest,
    use_case: SendTextMessageUseCase = Depends(get_send_text_use_case),
) -> JSONResponse:
    """Envia texto para um telefone via gateway."""
    result = await use_case.execute(
        phone=body.phone,
        text=body.text,
        instance=body.instance,
        options=body.options,
    )
    if result.success:
        status_code = status.HTTP_200_OK
    elif result.error in _CLIENT_ERRORS:
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    return JSONResponse(content=result.to_dict(), status_code=status_code)


@router.get("/cache")
async def cache_snapshot(
    directory: ContactDirectoryProtocol = Depends(get_contact_directory),
) -> dict[str, Any]:
    """Snapshot do diretório de contatos (observabilidade)."""
    now = datetime.now(UTC)
    profiles = await directory.snapshot()
    contacts = []
    stale = 0
    for profile in profiles:
        is_stale = directory.is_stale(profile, now)
        stale += int(is_stale)
        contacts.append({**profile.to_snapshot(), "is_stale": is_stale})
    return {
        "total": len(contacts),
        "stale": stale,
        "contacts": contacts,
        "timestamp": now.isoformat(),
    }


@router.post("/clear-cache")
async def clear_cache(
    directory: ContactDirectoryProtocol = Depends(get_contact_directory),
) -> dict[str, Any]:
    """Remove todas as entradas do diretório de contatos."""
    removed = await directory.clear()
    return {"success": True, "removed": removed}
