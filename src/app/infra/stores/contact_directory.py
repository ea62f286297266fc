"""Diretório de contatos em memória com lock por chave.

Substitui o mapa global de contatos por um serviço injetado com ciclo de
vida explícito (construção, varredura de entradas frias, `clear`).

Concorrência:
    Cada chave tem seu próprio `asyncio.Lock` (FIFO). Upserts da mesma
    chave são aplicados na ordem de chegada; chaves diferentes não se
    bloqueiam.

ATENÇÃO: estado por processo. Múltiplas réplicas mantêm diretórios
independentes.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from app.domain.contact_patch import ContactPatch
from app.domain.contact_profile import ContactProfile
from app.protocols.contact_directory import ContactDirectoryProtocol, PatchFactory

logger = logging.getLogger(__name__)

DEFAULT_STALENESS_WINDOW = timedelta(minutes=30)
DEFAULT_COLD_THRESHOLD = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class InMemoryContactDirectory(ContactDirectoryProtocol):
    """Diretório de contatos em memória.

    Args:
        staleness_window: Idade a partir da qual o perfil é stale (advisory).
        cold_threshold: Idade a partir da qual `evict_cold` remove a entrada.
        sweep_every: Upserts entre varreduras automáticas (0 desliga).
        clock: Fonte de tempo (injetável em testes); deve retornar datetime aware.
    """

    def __init__(
        self,
        *,
        staleness_window: timedelta = DEFAULT_STALENESS_WINDOW,
        cold_threshold: timedelta = DEFAULT_COLD_THRESHOLD,
        sweep_every: int = 0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._entries: dict[str, ContactProfile] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._staleness_window = staleness_window
        self._cold_threshold = cold_threshold
        self._sweep_every = sweep_every
        self._clock = clock or _utcnow
        self._upserts_since_sweep = 0

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def staleness_window(self) -> timedelta:
        return self._staleness_window

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def get(self, key: str) -> ContactProfile | None:
        return self._entries.get(key)

    async def upsert(
        self,
        key: str,
        patch: ContactPatch | PatchFactory | None = None,
        *,
        seed: ContactPatch | None = None,
        inbound: bool = True,
    ) -> ContactProfile:
        async with self._lock_for(key):
            existing = self._entries.get(key)
            resolved = patch if patch is None or isinstance(patch, ContactPatch) else patch(existing)
            if inspect.isawaitable(resolved):
                resolved = await resolved
            now = self._clock()

            if existing is None:
                base = (seed or ContactPatch()).new_profile(key, now)
                reopened = False
            else:
                base = existing
                reopened = self.is_stale(existing, now)

            merged = resolved.apply_to(base) if resolved is not None else base
            update: dict[str, object] = {
                "message_count": merged.message_count + 1,
                "last_interaction_at": now,
            }
            # fromMe renova a interação sem contar na janela de conversa
            step = 1 if inbound else 0
            if existing is None or reopened:
                update["conversation_started_at"] = now
                update["conversation_message_count"] = step
            else:
                update["conversation_message_count"] = merged.conversation_message_count + step
            update["inbound_message_count"] = merged.inbound_message_count + step

            profile = merged.model_copy(update=update)
            self._entries[key] = profile

        await self._maybe_sweep()
        return profile

    async def clear(self) -> int:
        removed = len(self._entries)
        self._entries.clear()
        self._drop_idle_locks()
        logger.info("contact_directory_cleared", extra={"removed": removed})
        return removed

    async def snapshot(self) -> list[ContactProfile]:
        return list(self._entries.values())

    def is_stale(self, profile: ContactProfile, now: datetime | None = None) -> bool:
        current = now or self._clock()
        return current - profile.last_interaction_at > self._staleness_window

    async def evict_cold(self, older_than: timedelta | None = None) -> int:
        threshold = older_than or self._cold_threshold
        now = self._clock()
        cold_keys = [
            key
            for key, profile in self._entries.items()
            if now - profile.last_interaction_at > threshold
            and not self._is_busy(key)
        ]
        for key in cold_keys:
            del self._entries[key]
        self._drop_idle_locks()
        if cold_keys:
            logger.info(
                "contact_directory_evicted",
                extra={"removed": len(cold_keys), "remaining": len(self._entries)},
            )
        return len(cold_keys)

    async def _maybe_sweep(self) -> None:
        if self._sweep_every <= 0:
            return
        self._upserts_since_sweep += 1
        if self._upserts_since_sweep < self._sweep_every:
            return
        self._upserts_since_sweep = 0
        await self.evict_cold()

    def _is_busy(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def _drop_idle_locks(self) -> None:
        idle = [
            key
            for key, lock in self._locks.items()
            if key not in self._entries and not lock.locked()
        ]
        for key in idle:
            del self._locks[key]
