"""Detecção heurística de idioma por léxico de palavras-chave.

Não é um classificador: conta quantas expressões de cada léxico aparecem
como substring do texto (sem tokenização ou stemming). Só troca o idioma
quando um léxico vence com placar estritamente maior; empate ou placar
zerado mantém o idioma atual.
"""

from __future__ import annotations

import unicodedata
from types import MappingProxyType

LEXICONS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "pt": ("olá", "oi", "bom dia", "boa tarde", "obrigado", "por favor", "sim", "não"),
        "en": (
            "hello",
            "hi",
            "good morning",
            "good afternoon",
            "thank you",
            "please",
            "yes",
            "no",
        ),
        "es": ("hola", "buenos días", "buenas tardes", "gracias", "por favor", "sí", "no"),
    }
)


def _prepare(text: str) -> str:
    return unicodedata.normalize("NFC", text).lower()


def score_languages(text: str | None) -> dict[str, int]:
    """Retorna o placar por idioma (número de expressões encontradas)."""
    if not text:
        return dict.fromkeys(LEXICONS, 0)
    lowered = _prepare(text)
    return {
        language: sum(1 for phrase in phrases if phrase in lowered)
        for language, phrases in LEXICONS.items()
    }


def detect_language(text: str | None, current: str) -> str:
    """Detecta o idioma do texto.

    Args:
        text: Texto livre da mensagem.
        current: Idioma atual do contato (mantido em empate/placar zero).

    Returns:
        Código do idioma com placar estritamente maior, ou `current`.
    """
    scores = score_languages(text)
    best = max(scores.values())
    if best == 0:
        return current
    winners = [language for language, score in scores.items() if score == best]
    if len(winners) != 1:
        return current
    return winners[0]
