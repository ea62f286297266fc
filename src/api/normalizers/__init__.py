"""Normalizers: conversão de payloads externos para modelos internos.

Estrutura:
- evolution/: envelope e conteúdo de mensagens da Evolution API
"""

from .evolution import extract_message_info, parse_envelope

__all__ = [
    "extract_message_info",
    "parse_envelope",
]
