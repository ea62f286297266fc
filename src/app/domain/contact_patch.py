"""ContactPatch: atualização parcial de um ContactProfile.

Regras de merge:
- Campos None são ignorados (não apagam valor existente)
- Campos presentes sobrescrevem (last-write-wins por campo)
- tags: união de conjuntos
- metadata: merge chave a chave
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from app.domain.contact_profile import ContactProfile

_MERGED_FIELDS = frozenset({"tags", "metadata"})


class ContactPatch(BaseModel):
    """Patch parcial aplicado pelo diretório de contatos."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    phone: str | None = None
    phone_formatted: str | None = None
    country: str | None = None
    display_name: str | None = None
    push_name: str | None = None
    profile_picture_url: str | None = None
    is_group: bool | None = None
    language: str | None = None
    status: str | None = None
    last_seen: datetime | None = None
    is_online: bool | None = None
    tags: frozenset[str] | None = None
    metadata: dict[str, Any] | None = None

    def changes(self) -> dict[str, Any]:
        """Campos sobrescritos por este patch (sem tags/metadata)."""
        return {
            name: value
            for name, value in self
            if value is not None and name not in _MERGED_FIELDS
        }

    def apply_to(self, profile: ContactProfile) -> ContactProfile:
        """Retorna novo perfil com o patch aplicado. Não altera contadores."""
        update = self.changes()
        if self.tags:
            update["tags"] = profile.tags | self.tags
        if self.metadata:
            update["metadata"] = {**profile.metadata, **self.metadata}
        if not update:
            return profile
        return profile.model_copy(update=update)

    def merged_with(self, other: ContactPatch | None) -> ContactPatch:
        """Combina dois patches; `other` vence em conflitos de campo."""
        if other is None:
            return self
        data = {**self.changes(), **other.changes()}
        tags = (self.tags or frozenset()) | (other.tags or frozenset())
        metadata = {**(self.metadata or {}), **(other.metadata or {})}
        return ContactPatch(
            **data,
            tags=tags or None,
            metadata=metadata or None,
        )

    def new_profile(self, profile_id: str, now: datetime) -> ContactProfile:
        """Cria perfil inicial a partir deste patch usado como semente."""
        fields = self.changes()
        return ContactProfile(
            id=profile_id,
            last_interaction_at=now,
            conversation_started_at=now,
            message_count=0,
            tags=self.tags or frozenset(),
            metadata=dict(self.metadata or {}),
            **fields,
        )
