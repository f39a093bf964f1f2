"""Settings do Firestore (store de tracking do dispatcher)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_TRACKING_COLLECTION = "wa_template_dispatches"


@dataclass(frozen=True)
class FirestoreSettings:
    """Destino dos registros de tracking.

    Attributes:
        project_id: Projeto GCP; vazio usa o projeto padrão do processo
        database: Database nomeado do Firestore ("(default)" quando vazio)
        collection_tracking: Collection dos envios bem-sucedidos
    """

    project_id: str = ""
    database: str = ""
    collection_tracking: str = DEFAULT_TRACKING_COLLECTION

    def effective_project(self, gcp_project: str) -> str:
        return self.project_id or gcp_project

    def validate(self, gcp_project: str) -> list[str]:
        errors: list[str] = []
        if not self.effective_project(gcp_project):
            errors.append("FIRESTORE_PROJECT_ID ou GCP_PROJECT deve estar configurado")
        if not self.collection_tracking.strip():
            errors.append("FIRESTORE_COLLECTION_TRACKING não pode ser vazio")
        return errors


def _load_firestore_from_env() -> FirestoreSettings:
    return FirestoreSettings(
        project_id=os.getenv("FIRESTORE_PROJECT_ID", "").strip(),
        database=os.getenv("FIRESTORE_DATABASE", "").strip(),
        collection_tracking=os.getenv(
            "FIRESTORE_COLLECTION_TRACKING", DEFAULT_TRACKING_COLLECTION
        ).strip(),
    )


@lru_cache(maxsize=1)
def get_firestore_settings() -> FirestoreSettings:
    return _load_firestore_from_env()
