"""ContactProfile: estado de um contato remoto mantido pelo diretório.

Valor imutável (pydantic frozen). Toda alteração produz uma nova instância
via `model_copy`, devolvida pelo `upsert` do diretório.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from config.settings.auto_reply import DEFAULT_LANGUAGE


class ContactProfile(BaseModel):
    """Perfil de contato (uma entrada por identidade remota + instância)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Identidade
    id: str
    phone: str = ""
    display_name: str | None = None
    push_name: str | None = None

    # Apresentação
    profile_picture_url: str | None = None
    is_group: bool = False
    phone_formatted: str = ""
    country: str = "unknown"

    # Preferência
    language: str = DEFAULT_LANGUAGE

    # Engajamento
    status: str = "active"
    last_seen: datetime | None = None
    is_online: bool = False
    last_interaction_at: datetime
    conversation_started_at: datetime
    message_count: int = Field(default=0, ge=0)
    # Só mensagens do contato (fromMe=False)
    inbound_message_count: int = Field(default=0, ge=0)
    conversation_message_count: int = Field(default=0, ge=0)
    tags: frozenset[str] = Field(default_factory=frozenset)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        """Nome de exibição preferido (display_name > push_name > telefone)."""
        return self.display_name or self.push_name or self.phone_formatted or self.phone

    @property
    def opened_conversation(self) -> bool:
        """True quando a última mensagem do contato abriu a janela atual."""
        return self.conversation_message_count == 1

    def to_contact_data(self) -> dict[str, Any]:
        """Resumo entregue ao ticket store e ao sink de notificação."""
        return {
            "id": self.id,
            "phone": self.phone,
            "phone_formatted": self.phone_formatted,
            "name": self.name,
            "language": self.language,
            "is_group": self.is_group,
            "country": self.country,
            "message_count": self.message_count,
        }

    def to_snapshot(self) -> dict[str, Any]:
        """Serialização JSON-safe usada pelo endpoint de cache."""
        data = self.model_dump(mode="json")
        data["tags"] = sorted(self.tags)
        return data
