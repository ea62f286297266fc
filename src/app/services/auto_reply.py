"""Motor de resposta automática.

Decide, por mensagem inbound, se um template deve ser enviado e em qual
idioma. A entrega fica com o gateway client; o motor termina em
"enviar template X no idioma Y".

Matriz de decisão:
    {primeiro contato, contato recorrente} x {horário comercial, fora do horário}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from app.constants.auto_reply_templates import TEMPLATES_BY_KEY, TemplateKey
from app.domain.contact_profile import ContactProfile
from config.settings.auto_reply import AutoReplySettings

logger = logging.getLogger(__name__)

# Dias úteis: segunda (0) a sexta (4)
_WEEKDAYS = range(5)


@dataclass(frozen=True, slots=True)
class AutoReplyDecision:
    """Resultado da avaliação de resposta automática."""

    should_reply: bool
    language: str
    reason: str
    template_key: TemplateKey | None = None
    after_hours: bool = False

    @classmethod
    def skip(cls, reason: str, language: str) -> AutoReplyDecision:
        return cls(should_reply=False, language=language, reason=reason)

    def to_dict(self) -> dict[str, object]:
        return {
            "should_reply": self.should_reply,
            "template_key": self.template_key,
            "language": self.language,
            "reason": self.reason,
            "after_hours": self.after_hours,
        }


class AutoReplyEngine:
    """Seleciona template de boas-vindas por contato/idioma/horário."""

    def __init__(self, settings: AutoReplySettings) -> None:
        self._settings = settings
        self._tz = settings.tzinfo

    def resolve_language(self, language: str | None) -> str:
        """Idioma do contato se houver template, senão o idioma padrão."""
        if language and language in self._settings.languages:
            return language
        return self._settings.default_language

    def is_business_hours(self, now: datetime) -> bool:
        """Segunda a sexta, da hora inicial até o fim da hora final."""
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        local = now.astimezone(self._tz)
        return (
            local.weekday() in _WEEKDAYS
            and self._settings.business_hours_start
            <= local.hour
            <= self._settings.business_hours_end
        )

    def decide(
        self,
        profile: ContactProfile,
        content: str | None,
        *,
        from_me: bool,
        now: datetime,
    ) -> AutoReplyDecision:
        """Avalia se a mensagem deve disparar resposta automática.

        Nunca responde quando:
        - a mensagem foi enviada pelo próprio sistema (`from_me`)
        - o contato é grupo
        - não há conteúdo reconhecido (`content is None`)
        - a mensagem não abriu a janela de conversa atual
        """
        language = self.resolve_language(profile.language)

        if not self._settings.enabled:
            return AutoReplyDecision.skip("disabled", language)
        if from_me:
            return AutoReplyDecision.skip("from_me", language)
        if profile.is_group:
            return AutoReplyDecision.skip("group", language)
        if content is None:
            return AutoReplyDecision.skip("no_content", language)
        if not profile.opened_conversation:
            return AutoReplyDecision.skip("conversation_active", language)

        first_contact = profile.inbound_message_count <= 1
        template_key: TemplateKey = "welcome" if first_contact else "welcome_back"
        after_hours = not self.is_business_hours(now)
        return AutoReplyDecision(
            should_reply=True,
            language=language,
            reason="first_contact" if template_key == "welcome" else "returning_contact",
            template_key=template_key,
            after_hours=after_hours,
        )

    def render(self, decision: AutoReplyDecision, profile: ContactProfile) -> str:
        """Monta o corpo final da resposta.

        Raises:
            ValueError: Decisão sem template (should_reply=False).
        """
        if not decision.should_reply or decision.template_key is None:
            raise ValueError("decision has no template to render")

        fallback = self._settings.default_language
        body = TEMPLATES_BY_KEY[decision.template_key].body_for(decision.language, fallback)
        # Aviso de horário só acompanha o primeiro contato
        if decision.after_hours and decision.template_key == "welcome":
            notice = TEMPLATES_BY_KEY["business_hours"].body_for(decision.language, fallback)
            body = f"{body}\n\n{notice}"

        logger.debug(
            "auto_reply_rendered",
            extra={
                "template_key": decision.template_key,
                "language": decision.language,
                "after_hours": decision.after_hours,
                "contact_name_present": bool(profile.display_name or profile.push_name),
            },
        )
        return body
