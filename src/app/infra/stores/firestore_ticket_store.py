"""Firestore Ticket Store: registro de conversas recebidas.

Estrutura no Firestore:
    conversations/{instance}_{phone_hash}
    conversations/{instance}_{phone_hash}/messages/{message_id}

Nomes de coleção vêm de FirestoreSettings.

Usa asyncio.to_thread pois o SDK do Firestore não tem async nativo.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.domain.message_info import MessageInfo
from app.observability.redaction import hash_identifier
from app.protocols.ticket_store import TicketStoreProtocol
from utils.errors import FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)

CONVERSATIONS_COLLECTION = "conversations"
MESSAGES_SUBCOLLECTION = "messages"


class FirestoreTicketStore(TicketStoreProtocol):
    """Ticket store usando Firestore.

    Características:
        - Append-only para mensagens
        - Upsert (merge) para o documento da conversa
        - Telefone nunca usado em claro na chave do documento

    Args:
        firestore_client: Cliente Firestore
        collection: Nome da coleção raiz
        messages_subcollection: Subcoleção das mensagens de cada conversa
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection: str = CONVERSATIONS_COLLECTION,
        messages_subcollection: str = MESSAGES_SUBCOLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection
        self._messages = messages_subcollection

    def _conversation_key(self, contact_data: dict[str, Any]) -> str:
        contact_id = str(contact_data.get("id") or "")
        instance = contact_id.split(":", 1)[0] if ":" in contact_id else "default"
        return f"{instance}_{hash_identifier(contact_data.get('phone') or contact_id)}"

    async def record_conversation(
        self,
        contact_data: dict[str, Any],
        message_info: MessageInfo,
        *,
        message_id: str | None = None,
    ) -> None:
        await asyncio.to_thread(
            self._record_conversation_sync,
            contact_data,
            message_info,
            message_id or uuid.uuid4().hex,
        )

    def _record_conversation_sync(
        self,
        contact_data: dict[str, Any],
        message_info: MessageInfo,
        message_id: str,
    ) -> None:
        """Implementação síncrona de record_conversation."""
        conv_key = self._conversation_key(contact_data)
        now = datetime.now(UTC)

        conversation_doc = {
            "phone": contact_data.get("phone"),
            "name": contact_data.get("name"),
            "language": contact_data.get("language"),
            "is_group": contact_data.get("is_group", False),
            "message_count": contact_data.get("message_count"),
            "last_message_type": message_info.type,
            "updated_at": now,
        }
        message_doc = {
            "message_id": message_id,
            **message_info.to_dict(),
            "created_at": now,
        }

        try:
            conversation_ref = self._db.collection(self._collection).document(conv_key)
            conversation_ref.set(conversation_doc, merge=True)
            conversation_ref.collection(self._messages).document(message_id).set(message_doc)
        except Exception as e:
            logger.error(
                "ticket_store_record_error",
                extra={"error_type": type(e).__name__, "conv_key": conv_key},
            )
            raise FirestoreUnavailableError("Erro ao registrar conversa no Firestore") from e

        logger.debug(
            "ticket_store_recorded",
            extra={"conv_key": conv_key, "message_type": message_info.type},
        )
