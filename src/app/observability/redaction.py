"""Redação de PII para logs.

Telefones e JIDs nunca vão em claro para os logs; usar hash curto.
"""

from __future__ import annotations

import hashlib

_HASH_LENGTH = 12


def hash_identifier(value: str | None) -> str:
    """Hash SHA-256 truncado (12 hex) de um identificador sensível."""
    if not value:
        return ""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:_HASH_LENGTH]
