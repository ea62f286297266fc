"""Agregador de settings de infraestrutura."""

from __future__ import annotations

from config.settings.infra.firestore import FirestoreSettings, get_firestore_settings
from config.settings.infra.sinks import (
    DownstreamSettings,
    NotificationSinkBackend,
    TicketStoreBackend,
    get_downstream_settings,
)

__all__ = [
    "DownstreamSettings",
    "FirestoreSettings",
    "NotificationSinkBackend",
    "TicketStoreBackend",
    "get_downstream_settings",
    "get_firestore_settings",
]
