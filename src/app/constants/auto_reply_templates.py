"""Templates fixos de resposta automática por idioma.

Cada template tem corpo para todos os idiomas suportados (pt, en, es).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

TemplateKey = Literal["welcome", "welcome_back", "business_hours"]


@dataclass(frozen=True, slots=True)
class AutoReplyTemplate:
    """Template de resposta automática.

    Atributos:
        key: Identificador simbólico do template.
        bodies: Corpo da mensagem por código de idioma.
        kind: greeting (abre conversa) ou notice (anexado a outro template).
    """

    key: TemplateKey
    bodies: MappingProxyType[str, str]
    kind: Literal["greeting", "notice"]

    def body_for(self, language: str, fallback: str = "pt") -> str:
        return self.bodies.get(language) or self.bodies[fallback]


AUTO_REPLY_TEMPLATES: tuple[AutoReplyTemplate, ...] = (
    AutoReplyTemplate(
        key="welcome",
        bodies=MappingProxyType(
            {
                "pt": (
                    "Olá! 👋 Obrigado por entrar em contato. "
                    "Em breve um de nossos atendentes irá te responder."
                ),
                "en": (
                    "Hello! 👋 Thank you for contacting us. "
                    "One of our agents will respond to you soon."
                ),
                "es": (
                    "¡Hola! 👋 Gracias por contactarnos. "
                    "Pronto uno de nuestros agentes te responderá."
                ),
            }
        ),
        kind="greeting",
    ),
    AutoReplyTemplate(
        key="welcome_back",
        bodies=MappingProxyType(
            {
                "pt": (
                    "🤖 Esta é uma resposta automática. "
                    "Sua mensagem foi recebida e será respondida em breve."
                ),
                "en": (
                    "🤖 This is an automatic reply. "
                    "Your message has been received and will be answered soon."
                ),
                "es": (
                    "🤖 Esta es una respuesta automática. "
                    "Su mensaje ha sido recibido y será respondido pronto."
                ),
            }
        ),
        kind="greeting",
    ),
    AutoReplyTemplate(
        key="business_hours",
        bodies=MappingProxyType(
            {
                "pt": (
                    "📅 Nosso horário de atendimento é de Segunda a Sexta, das 9h às 18h. "
                    "Retornaremos assim que possível!"
                ),
                "en": (
                    "📅 Our business hours are Monday to Friday, 9am to 6pm. "
                    "We'll get back to you as soon as possible!"
                ),
                "es": (
                    "📅 Nuestro horario de atención es de Lunes a Viernes, de 9h a 18h. "
                    "¡Te responderemos lo antes posible!"
                ),
            }
        ),
        kind="notice",
    ),
)

TEMPLATES_BY_KEY: MappingProxyType[str, AutoReplyTemplate] = MappingProxyType(
    {template.key: template for template in AUTO_REPLY_TEMPLATES}
)
