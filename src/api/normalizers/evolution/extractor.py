"""Extrator de conteúdo de mensagens Evolution API.

Decodifica o bloco `data.message` do webhook em um MessageInfo, tentando
cada formato conhecido em ordem de prioridade. O primeiro formato presente
decide o tipo; formatos desconhecidos viram `MessageInfo.unknown()`.

Não faz validação de negócio, apenas extração estrutural.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from app.domain.message_info import MediaType, MessageInfo

from ._extraction_helpers import (
    extract_contact_block,
    extract_location_block,
    extract_media_block,
    extract_text_block,
)

logger = logging.getLogger(__name__)

# Envelopes que apenas embrulham outra mensagem
_WRAPPER_KEYS = ("ephemeralMessage", "viewOnceMessage", "viewOnceMessageV2")

_MEDIA_BLOCKS: tuple[tuple[str, MediaType], ...] = (
    ("imageMessage", "image"),
    ("videoMessage", "video"),
    ("audioMessage", "audio"),
    ("documentMessage", "document"),
    ("stickerMessage", "sticker"),
)


def _decode_conversation(message: Mapping[str, Any]) -> MessageInfo | None:
    text = message.get("conversation")
    if isinstance(text, str) and text:
        return MessageInfo.text(text)
    return None


def _decode_extended_text(message: Mapping[str, Any]) -> MessageInfo | None:
    text, quoted_id = extract_text_block(message.get("extendedTextMessage"))
    if text is None:
        return None
    return MessageInfo.text(text, quoted_message_id=quoted_id)


def _decode_media(message: Mapping[str, Any]) -> MessageInfo | None:
    for key, media_type in _MEDIA_BLOCKS:
        block = message.get(key)
        if isinstance(block, dict):
            media, caption = extract_media_block(block)
            return MessageInfo.media_message(media_type, media, caption)
    return None


def _decode_location(message: Mapping[str, Any]) -> MessageInfo | None:
    block = message.get("locationMessage")
    if not isinstance(block, dict):
        return None
    return MessageInfo.location_message(extract_location_block(block))


def _decode_contact(message: Mapping[str, Any]) -> MessageInfo | None:
    block = message.get("contactMessage")
    if not isinstance(block, dict):
        return None
    return MessageInfo.contact_card(extract_contact_block(block))


_DECODERS: tuple[Callable[[Mapping[str, Any]], MessageInfo | None], ...] = (
    _decode_conversation,
    _decode_extended_text,
    _decode_media,
    _decode_location,
    _decode_contact,
)


def _unwrap(message: Mapping[str, Any]) -> Mapping[str, Any]:
    for key in _WRAPPER_KEYS:
        wrapper = message.get(key)
        if isinstance(wrapper, dict) and isinstance(wrapper.get("message"), dict):
            return wrapper["message"]
    return message


def extract_message_info(message: Any) -> MessageInfo | None:
    """Converte o bloco `message` do webhook em MessageInfo.

    Args:
        message: Conteúdo de `data.message` (formato desconhecido).

    Returns:
        MessageInfo do primeiro formato reconhecido; `MessageInfo.unknown()`
        quando nenhum formato bate; None quando não há bloco de mensagem
        (entrada ausente, vazia ou que não é um objeto).
    """
    if not isinstance(message, Mapping) or not message:
        return None

    message = _unwrap(message)
    for decoder in _DECODERS:
        try:
            info = decoder(message)
        except (TypeError, ValueError, AttributeError):
            logger.warning(
                "evolution_message_block_malformed",
                extra={"decoder": decoder.__name__},
            )
            continue
        if info is not None:
            return info

    logger.info(
        "evolution_message_type_unrecognized",
        extra={"message_keys": sorted(str(k) for k in message.keys())[:10]},
    )
    return MessageInfo.unknown()
