"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - firestore_tracking_store: Tracking de mensagens enviadas (Firestore)
    - memory_stores: Stores em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.firestore_tracking_store import FirestoreTrackingStore
from app.infra.stores.memory_stores import MemoryTrackingStore

__all__ = [
    "FirestoreTrackingStore",
    "MemoryTrackingStore",
]
