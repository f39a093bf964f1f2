"""Firestore Tracking Store: rastreio de mensagens enviadas.

Um documento por message id do provedor, append-only.
Sem conteúdo da mensagem; telefones ficam apenas no documento persistido.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from app.protocols.tracking_store import TrackingStoreProtocol
from config.settings.infra.firestore import DEFAULT_TRACKING_COLLECTION

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.dispatch_result import TrackingRecord

logger = logging.getLogger(__name__)


class FirestoreTrackingStore(TrackingStoreProtocol):
    """Store de tracking usando Firestore.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: wa_template_dispatches)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = DEFAULT_TRACKING_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def append_sync(self, record: TrackingRecord) -> None:
        """Grava o registro (síncrono). Erros do Firestore propagam."""
        document = {
            **record.to_dict(),
            "created_at": datetime.now(UTC),  # Para TTL do Firestore
        }
        self._db.collection(self._collection).document(record.message_id).set(document)
        logger.debug(
            "tracking_record_appended",
            extra={"message_id": record.message_id, "collection": self._collection},
        )

    async def append(self, record: TrackingRecord) -> None:
        """Grava sem bloquear o event loop (SDK síncrono)."""
        await asyncio.to_thread(self.append_sync, record)
