"""Settings da resposta automática (idiomas, templates e horário comercial)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

SUPPORTED_LANGUAGES: frozenset[str] = frozenset({"pt", "en", "es"})
DEFAULT_LANGUAGE: str = "pt"


@dataclass(frozen=True)
class AutoReplySettings:
    """Configurações do motor de resposta automática.

    Attributes:
        enabled: Liga/desliga o envio automático
        languages: Idiomas com template disponível
        default_language: Idioma usado quando o do contato não tem template
        timezone: Fuso do horário comercial
        business_hours_start: Primeira hora comercial (inclusiva)
        business_hours_end: Última hora comercial (inclusiva)
    """

    enabled: bool = True
    languages: frozenset[str] = SUPPORTED_LANGUAGES
    default_language: str = DEFAULT_LANGUAGE
    timezone: str = "America/Sao_Paulo"
    business_hours_start: int = 9
    business_hours_end: int = 18

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def validate(self) -> list[str]:
        """Valida configurações de resposta automática.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        unknown = self.languages - SUPPORTED_LANGUAGES
        if unknown:
            errors.append(f"AUTO_REPLY_LANGUAGES sem template: {', '.join(sorted(unknown))}")

        if self.default_language not in self.languages:
            errors.append("AUTO_REPLY_DEFAULT_LANGUAGE deve estar em AUTO_REPLY_LANGUAGES")

        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"BUSINESS_TIMEZONE inválido: {self.timezone}")

        if not 0 <= self.business_hours_start <= self.business_hours_end <= 23:
            errors.append("BUSINESS_HOURS_START/END devem formar intervalo em 0..23")

        return errors


def _parse_languages(raw: str) -> frozenset[str]:
    languages = {item.strip().lower() for item in raw.split(",") if item.strip()}
    return frozenset(languages) or SUPPORTED_LANGUAGES


def _load_auto_reply_from_env() -> AutoReplySettings:
    """Carrega AutoReplySettings de variáveis de ambiente."""
    return AutoReplySettings(
        enabled=os.getenv("AUTO_REPLY_ENABLED", "true").lower() in ("true", "1", "yes"),
        languages=_parse_languages(os.getenv("AUTO_REPLY_LANGUAGES", "pt,en,es")),
        default_language=os.getenv("AUTO_REPLY_DEFAULT_LANGUAGE", DEFAULT_LANGUAGE).lower(),
        timezone=os.getenv("BUSINESS_TIMEZONE", "America/Sao_Paulo"),
        business_hours_start=int(os.getenv("BUSINESS_HOURS_START", "9")),
        business_hours_end=int(os.getenv("BUSINESS_HOURS_END", "18")),
    )


@lru_cache(maxsize=1)
def get_auto_reply_settings() -> AutoReplySettings:
    """Retorna instância cacheada de AutoReplySettings."""
    return _load_auto_reply_from_env()
