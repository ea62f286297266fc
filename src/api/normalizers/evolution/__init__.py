"""Normalizer Evolution API: validação de envelope e extração de conteúdo.

Responsabilidades:
- Validar o envelope do webhook (`data.key.id`, `remoteJid`)
- Decodificar o bloco `message` em MessageInfo

Tipos suportados: text, image, video, audio, document, sticker,
location, contact.
"""

from .envelope import EvolutionEnvelope, InvalidPayloadError, parse_envelope
from .extractor import extract_message_info

__all__ = [
    "EvolutionEnvelope",
    "InvalidPayloadError",
    "extract_message_info",
    "parse_envelope",
]
