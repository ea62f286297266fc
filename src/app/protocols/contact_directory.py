"""Protocolo do diretório de contatos.

Interface leve (ABC) dependida por Application. O diretório é o único
recurso mutável compartilhado do pipeline inbound: toda mutação passa
por `upsert`, que serializa leitura-modificação-escrita por chave.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta
from typing import TypeAlias

from app.domain.contact_patch import ContactPatch
from app.domain.contact_profile import ContactProfile

PatchFactory: TypeAlias = Callable[
    [ContactProfile | None], ContactPatch | Awaitable[ContactPatch]
]


class ContactDirectoryProtocol(ABC):
    """Contrato do diretório de contatos (chave = `instance:remoteJid`).

    Métodos canônicos:
    - get(key) -> ContactProfile | None
    - upsert(key, patch, *, seed) -> ContactProfile
    - clear() -> int
    - snapshot() -> list[ContactProfile]
    """

    @abstractmethod
    async def get(self, key: str) -> ContactProfile | None:
        """Retorna o perfil atual da chave, se existir."""

    @abstractmethod
    async def upsert(
        self,
        key: str,
        patch: ContactPatch | PatchFactory | None = None,
        *,
        seed: ContactPatch | None = None,
        inbound: bool = True,
    ) -> ContactProfile:
        """Cria ou atualiza o perfil da chave.

        Na primeira vez cria a partir de `seed` + `patch`; depois aplica o
        patch ao perfil existente. Em ambos os casos incrementa
        `message_count` em exatamente 1 e renova `last_interaction_at`.

        Args:
            key: Chave do diretório.
            patch: Patch ou função (sync ou async) que recebe o perfil atual
                (ou None) e devolve o patch; a função roda sob o lock da chave.
            seed: Campos iniciais usados apenas na criação.
            inbound: False para mensagens enviadas pelo próprio negócio;
                elas não abrem nem avançam a janela de conversa.

        Returns:
            Novo valor imutável do perfil.
        """

    @abstractmethod
    async def clear(self) -> int:
        """Remove todas as entradas. Retorna quantas foram removidas."""

    @abstractmethod
    async def snapshot(self) -> list[ContactProfile]:
        """Cópia de todas as entradas (observabilidade)."""

    @abstractmethod
    def is_stale(self, profile: ContactProfile, now: datetime | None = None) -> bool:
        """True quando a última interação é mais antiga que a janela de staleness."""

    @abstractmethod
    async def evict_cold(self, older_than: timedelta | None = None) -> int:
        """Remove entradas sem interação há mais que `older_than`."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Número de entradas."""
