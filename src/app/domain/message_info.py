"""Conteúdo normalizado de uma mensagem inbound.

Tipo soma fechado: instâncias só são criadas pelos construtores de variante
(`text`, `media_message`, `location_message`, `contact_card`, `unknown`), que garantem que texto
nunca carrega mídia e que mídia sempre carrega `MediaInfo`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

MessageType = Literal[
    "text",
    "image",
    "audio",
    "video",
    "document",
    "sticker",
    "location",
    "contact",
    "unknown",
]

MediaType = Literal["image", "audio", "video", "document", "sticker"]

MEDIA_TYPES: frozenset[str] = frozenset({"image", "audio", "video", "document", "sticker"})


@dataclass(frozen=True, slots=True)
class MediaInfo:
    """Metadados de mídia informados pelo gateway."""

    mimetype: str | None = None
    size: int | None = None
    width: int | None = None
    height: int | None = None
    duration_seconds: int | None = None
    url: str | None = None
    file_name: str | None = None
    is_voice_note: bool = False


@dataclass(frozen=True, slots=True)
class LocationInfo:
    """Coordenadas de uma mensagem de localização."""

    latitude: float | None
    longitude: float | None
    name: str | None = None
    address: str | None = None


@dataclass(frozen=True, slots=True)
class MessageInfo:
    """Registro normalizado `{type, content, media?}`."""

    type: MessageType
    content: str | None
    media: MediaInfo | None = None
    location: LocationInfo | None = None
    quoted_message_id: str | None = None

    @classmethod
    def text(cls, body: str, quoted_message_id: str | None = None) -> MessageInfo:
        return cls(type="text", content=body, quoted_message_id=quoted_message_id)

    @classmethod
    def media_message(
        cls,
        media_type: MediaType,
        media: MediaInfo,
        caption: str | None = None,
    ) -> MessageInfo:
        if media_type not in MEDIA_TYPES:
            raise ValueError(f"tipo de mídia desconhecido: {media_type}")
        return cls(type=media_type, content=caption or "", media=media)

    @classmethod
    def location_message(cls, location: LocationInfo) -> MessageInfo:
        label = f"[Localização: {location.latitude}, {location.longitude}]"
        return cls(type="location", content=label, location=location)

    @classmethod
    def contact_card(cls, display_name: str | None) -> MessageInfo:
        return cls(type="contact", content=f"[Contato: {display_name or 'sem nome'}]")

    @classmethod
    def unknown(cls) -> MessageInfo:
        return cls(type="unknown", content=None)

    @property
    def is_text(self) -> bool:
        return self.type == "text"

    @property
    def has_media(self) -> bool:
        return self.media is not None

    def to_dict(self) -> dict[str, Any]:
        """Serializa para o payload de resposta/stores (omite blocos ausentes)."""
        data: dict[str, Any] = {"type": self.type, "content": self.content}
        if self.media is not None:
            data["media"] = {k: v for k, v in asdict(self.media).items() if v is not None}
        if self.location is not None:
            data["location"] = asdict(self.location)
        if self.quoted_message_id:
            data["quoted_message_id"] = self.quoted_message_id
        return data
