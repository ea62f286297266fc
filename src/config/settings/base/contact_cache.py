"""Settings do diretório de contatos em memória."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache


@dataclass(frozen=True)
class ContactCacheSettings:
    """Configurações do cache de contatos.

    Attributes:
        staleness_minutes: Janela após a qual o perfil é considerado
            desatualizado (não remove a entrada)
        cold_hours: Idade a partir da qual a varredura remove a entrada
        sweep_every: Número de upserts entre varreduras oportunistas
            (0 desliga a varredura automática)
    """

    staleness_minutes: int = 30
    cold_hours: int = 24
    sweep_every: int = 500

    @property
    def staleness_window(self) -> timedelta:
        return timedelta(minutes=self.staleness_minutes)

    @property
    def cold_threshold(self) -> timedelta:
        return timedelta(hours=self.cold_hours)

    def validate(self) -> list[str]:
        """Valida configurações do cache.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.staleness_minutes <= 0:
            errors.append("CONTACT_CACHE_STALENESS_MINUTES deve ser > 0")

        if self.cold_hours * 60 <= self.staleness_minutes:
            errors.append(
                "CONTACT_CACHE_COLD_HOURS deve ser maior que a janela de staleness"
            )

        if self.sweep_every < 0:
            errors.append("CONTACT_CACHE_SWEEP_EVERY deve ser >= 0")

        return errors


def _load_contact_cache_from_env() -> ContactCacheSettings:
    """Carrega ContactCacheSettings de variáveis de ambiente."""
    return ContactCacheSettings(
        staleness_minutes=int(os.getenv("CONTACT_CACHE_STALENESS_MINUTES", "30")),
        cold_hours=int(os.getenv("CONTACT_CACHE_COLD_HOURS", "24")),
        sweep_every=int(os.getenv("CONTACT_CACHE_SWEEP_EVERY", "500")),
    )


@lru_cache(maxsize=1)
def get_contact_cache_settings() -> ContactCacheSettings:
    """Retorna instância cacheada de ContactCacheSettings."""
    return _load_contact_cache_from_env()
