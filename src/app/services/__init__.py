"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.auto_reply import AutoReplyDecision, AutoReplyEngine
from app.services.language_detector import detect_language, score_languages

__all__ = [
    "AutoReplyDecision",
    "AutoReplyEngine",
    "detect_language",
    "score_languages",
]
