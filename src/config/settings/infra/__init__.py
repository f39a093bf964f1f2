"""Settings de backends de persistência."""

from __future__ import annotations

from config.settings.infra.firestore import (
    DEFAULT_TRACKING_COLLECTION,
    FirestoreSettings,
    get_firestore_settings,
)

__all__ = [
    "DEFAULT_TRACKING_COLLECTION",
    "FirestoreSettings",
    "get_firestore_settings",
]
