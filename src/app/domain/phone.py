"""Normalização de identificadores do gateway (JID) em telefone canônico.

Nunca levanta exceção: entradas malformadas retornam PhoneInfo com
`is_valid=False`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

GROUP_SUFFIX = "@g.us"
_KNOWN_SUFFIXES = ("@s.whatsapp.net", "@c.us")
_DIGITS_ONLY = re.compile(r"[0-9]+")
_NON_DIGITS = re.compile(r"\D")

MIN_PHONE_DIGITS = 10
BRAZIL_COUNTRY_CODE = "55"

PhoneFormat = Literal[
    "brazil_mobile",
    "brazil_landline",
    "north_america",
    "international",
    "group",
    "invalid",
]


@dataclass(frozen=True, slots=True)
class PhoneInfo:
    """Resultado do parse de um JID.

    Attributes:
        raw: Apenas dígitos (vazio quando não há telefone)
        formatted: Formato de exibição
        country: brazil | usa_canada | unknown (None quando inválido)
        format: Padrão reconhecido
        is_valid: Se o JID representa um telefone individual utilizável
    """

    raw: str
    formatted: str
    country: str | None
    format: PhoneFormat
    is_valid: bool

    @classmethod
    def invalid(cls, raw: str = "", fmt: PhoneFormat = "invalid") -> PhoneInfo:
        return cls(raw=raw, formatted=raw, country=None, format=fmt, is_valid=False)


def is_group_jid(jid: str | None) -> bool:
    """Retorna True quando o JID identifica um grupo."""
    return bool(jid and GROUP_SUFFIX in jid)


def normalize_jid(jid: str | None) -> PhoneInfo:
    """Converte um JID do gateway em PhoneInfo.

    Regras:
    - Grupos (`@g.us`) nunca geram telefone válido.
    - Sufixos conhecidos são removidos; sobra precisa ser só dígitos.
    - Menos de 10 dígitos é inválido.
    - Brasil (55 + 12 dígitos ou mais) e América do Norte (1 + 10 dígitos)
      recebem formato local; demais ficam como internacional sem formatação.

    Args:
        jid: Identificador nativo do gateway (ex: "5511999990001@s.whatsapp.net").

    Returns:
        PhoneInfo com `is_valid` indicando o resultado.
    """
    if not jid or not isinstance(jid, str):
        return PhoneInfo.invalid()

    if is_group_jid(jid):
        return PhoneInfo.invalid(fmt="group")

    cleaned = jid.strip()
    for suffix in _KNOWN_SUFFIXES:
        cleaned = cleaned.replace(suffix, "")

    if not _DIGITS_ONLY.fullmatch(cleaned):
        return PhoneInfo.invalid()

    if len(cleaned) < MIN_PHONE_DIGITS:
        return PhoneInfo.invalid(raw=cleaned)

    return _format_valid(cleaned)


def _format_valid(raw: str) -> PhoneInfo:
    if raw.startswith(BRAZIL_COUNTRY_CODE) and len(raw) >= 12:
        area_code = raw[2:4]
        subscriber = raw[4:]
        if len(subscriber) == 9:
            formatted = f"+55 ({area_code}) {subscriber[:5]}-{subscriber[5:]}"
            return PhoneInfo(raw, formatted, "brazil", "brazil_mobile", True)
        if len(subscriber) == 8:
            formatted = f"+55 ({area_code}) {subscriber[:4]}-{subscriber[4:]}"
            return PhoneInfo(raw, formatted, "brazil", "brazil_landline", True)
        return PhoneInfo(raw, raw, "brazil", "international", True)

    if raw.startswith("1") and len(raw) == 11:
        formatted = f"+1 ({raw[1:4]}) {raw[4:7]}-{raw[7:]}"
        return PhoneInfo(raw, formatted, "usa_canada", "north_america", True)

    return PhoneInfo(raw, raw, "unknown", "international", True)


def to_gateway_number(phone: str) -> str:
    """Reduz um telefone informado pelo usuário ao formato aceito pelo gateway.

    Remove sufixo de JID e qualquer caractere não numérico.
    """
    for suffix in _KNOWN_SUFFIXES:
        phone = phone.replace(suffix, "")
    return _NON_DIGITS.sub("", phone)
