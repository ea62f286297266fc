"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.contact_cache import (
    ContactCacheSettings,
    get_contact_cache_settings,
)
from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)

__all__ = [
    "BaseSettings",
    "ContactCacheSettings",
    "Environment",
    "get_base_settings",
    "get_contact_cache_settings",
]
