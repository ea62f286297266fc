"""Erros e helpers de parsing para respostas de erro da Evolution API."""

from __future__ import annotations

from typing import Any

# Erros do cliente: não adianta repetir
PERMANENT_STATUS_CODES = frozenset({400, 401, 403, 404, 413})


def is_permanent_status(status_code: int) -> bool:
    return status_code in PERMANENT_STATUS_CODES


def parse_evolution_error(response_data: Any) -> str:
    """Extrai uma descrição curta do corpo de erro da Evolution API.

    Formatos observados:
        {"status": 400, "error": "Bad Request", "response": {"message": [...]}}
        {"message": "..."}

    Returns:
        Descrição sem dados do destinatário (números são removidos).
    """
    if not isinstance(response_data, dict):
        return "unknown_error"

    response = response_data.get("response")
    if isinstance(response, dict):
        message = response.get("message")
        if isinstance(message, list) and message:
            return _scrub(_first_text(message))
        if isinstance(message, str) and message:
            return _scrub(message)

    for field in ("message", "error"):
        value = response_data.get(field)
        if isinstance(value, str) and value:
            return _scrub(value)

    return "unknown_error"


def _first_text(items: list[Any]) -> str:
    first = items[0]
    if isinstance(first, dict):
        # ex.: {"exists": false, "jid": "...", "number": "..."}
        if first.get("exists") is False:
            return "number_not_on_whatsapp"
        return "invalid_request"
    return str(first)


def _scrub(text: str) -> str:
    return "".join("#" if ch.isdigit() else ch for ch in text)[:200]
