"""Agregador de settings do Atende Evolution.

Re-exporta settings e getters de cada módulo. Organização por domínio para
isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.auto_reply import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    AutoReplySettings,
    get_auto_reply_settings,
)
from config.settings.base import (
    BaseSettings,
    ContactCacheSettings,
    Environment,
    get_base_settings,
    get_contact_cache_settings,
)
from config.settings.evolution import (
    DEFAULT_INSTANCE_NAME,
    EvolutionSettings,
    get_evolution_settings,
)
from config.settings.infra import (
    DownstreamSettings,
    FirestoreSettings,
    NotificationSinkBackend,
    TicketStoreBackend,
    get_downstream_settings,
    get_firestore_settings,
)

__all__ = [
    "DEFAULT_INSTANCE_NAME",
    "DEFAULT_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "AutoReplySettings",
    "BaseSettings",
    "ContactCacheSettings",
    "DownstreamSettings",
    "Environment",
    "EvolutionSettings",
    "FirestoreSettings",
    "NotificationSinkBackend",
    "TicketStoreBackend",
    "get_auto_reply_settings",
    "get_base_settings",
    "get_contact_cache_settings",
    "get_downstream_settings",
    "get_evolution_settings",
    "get_firestore_settings",
]
