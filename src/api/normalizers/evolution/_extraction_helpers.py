"""Helpers de extração de campos por bloco de mensagem Evolution (Baileys).

Separado de extractor.py para manter SRP.
Cada função recebe o bloco já isolado e nunca levanta exceção: campos
malformados viram None.
"""

from __future__ import annotations

from typing import Any

from app.domain.message_info import LocationInfo, MediaInfo


def coerce_int(value: Any) -> int | None:
    """Converte números enviados como string (ex.: fileLength) para int."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    # Long serializado como {"low": ..., "high": ...}
    if isinstance(value, dict) and isinstance(value.get("low"), int):
        high = value.get("high") if isinstance(value.get("high"), int) else 0
        return (high << 32) + (value["low"] & 0xFFFFFFFF)
    return None


def coerce_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def extract_text_block(block: Any) -> tuple[str | None, str | None]:
    """Extrai (texto, quoted_message_id) de um extendedTextMessage."""
    if not isinstance(block, dict):
        return None, None
    text = block.get("text")
    if not isinstance(text, str):
        return None, None
    context = block.get("contextInfo")
    quoted_id = None
    if isinstance(context, dict):
        quoted_id = _str_or_none(context.get("stanzaId"))
    return text, quoted_id


def extract_media_block(block: dict[str, Any]) -> tuple[MediaInfo, str]:
    """Extrai (MediaInfo, legenda) de image/video/audio/document/sticker."""
    media = MediaInfo(
        mimetype=_str_or_none(block.get("mimetype")),
        size=coerce_int(block.get("fileLength")),
        width=coerce_int(block.get("width")),
        height=coerce_int(block.get("height")),
        duration_seconds=coerce_int(block.get("seconds")),
        url=_str_or_none(block.get("url")),
        file_name=_str_or_none(block.get("fileName")),
        is_voice_note=block.get("ptt") is True,
    )
    caption = block.get("caption")
    return media, caption if isinstance(caption, str) else ""


def extract_location_block(block: dict[str, Any]) -> LocationInfo:
    """Extrai coordenadas de um locationMessage."""
    return LocationInfo(
        latitude=coerce_float(block.get("degreesLatitude")),
        longitude=coerce_float(block.get("degreesLongitude")),
        name=_str_or_none(block.get("name")),
        address=_str_or_none(block.get("address")),
    )


def extract_contact_block(block: dict[str, Any]) -> str | None:
    """Extrai o nome de exibição de um contactMessage."""
    return _str_or_none(block.get("displayName"))
