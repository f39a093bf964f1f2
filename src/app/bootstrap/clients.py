"""Clientes de SDKs externos (Firestore e provedores de segredos)."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.infra.secrets import EnvSecretProvider, GCPSecretProvider
from config.settings import get_base_settings, get_firestore_settings

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_firestore_client() -> FirestoreClient:
    """Cliente Firestore do processo (um por processo)."""
    from google.cloud import firestore

    settings = get_firestore_settings()
    project_id = settings.effective_project(get_base_settings().gcp_project) or None
    client = firestore.Client(project=project_id, database=settings.database or None)
    logger.info("firestore_client_created", extra={"project": project_id})
    return client


def create_secret_store(project_id: str) -> GCPSecretProvider | None:
    """Secret Manager do projeto; None quando o projeto não foi configurado."""
    if not project_id:
        return None
    return GCPSecretProvider(project_id=project_id)


def create_env_secret_provider() -> EnvSecretProvider:
    return EnvSecretProvider()
