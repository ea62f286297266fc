"""Settings do Firestore: projeto, database e nomes de coleções."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class FirestoreSettings:
    """Layout do registro de conversas no Firestore.

    `{collection_conversations}/{conv_key}/{subcollection_messages}/{message_id}`
    guarda as mensagens; `{health_collection}/check` é lido pelo /ready.
    """

    project_id: str = ""
    database: str = "(default)"
    collection_conversations: str = "conversations"
    subcollection_messages: str = "messages"
    health_collection: str = "_health"

    def resolve_project(self, gcp_project: str) -> str | None:
        """Projeto efetivo; None deixa o SDK descobrir via ADC."""
        return self.project_id or gcp_project or None

    def validate(self, gcp_project: str) -> list[str]:
        errors: list[str] = []
        if self.resolve_project(gcp_project) is None:
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")
        for env_name, value in (
            ("FIRESTORE_COLLECTION_CONVERSATIONS", self.collection_conversations),
            ("FIRESTORE_SUBCOLLECTION_MESSAGES", self.subcollection_messages),
            ("FIRESTORE_HEALTH_COLLECTION", self.health_collection),
        ):
            if not value or "/" in value:
                errors.append(f"{env_name} inválido: {value!r}")
        return errors


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    """Lê FirestoreSettings do ambiente (cacheado)."""
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", ""),
        database=os.getenv("FIRESTORE_DATABASE", "(default)"),
        collection_conversations=os.getenv("FIRESTORE_COLLECTION_CONVERSATIONS", "conversations"),
        subcollection_messages=os.getenv("FIRESTORE_SUBCOLLECTION_MESSAGES", "messages"),
        health_collection=os.getenv("FIRESTORE_HEALTH_COLLECTION", "_health"),
    )
