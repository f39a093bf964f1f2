"""Factories: criação das implementações concretas e dos use cases.

Centraliza a escolha de backends a partir das settings de ambiente.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from api.connectors.acs import AcsNotificationSender
from api.connectors.dispatcher import DispatchHttpClient, HttpClientConfig
from app.bootstrap.clients import (
    create_env_secret_provider,
    create_firestore_client,
    create_secret_store,
)
from app.infra.cache import OnceValue
from app.infra.crm import DataverseCrmClient, MemoryCrmClient
from app.infra.stores import FirestoreTrackingStore, MemoryTrackingStore
from app.protocols.crm_client import CrmClientProtocol
from app.protocols.tracking_store import TrackingStoreProtocol
from app.services.connection_string import ConnectionStringResolver
from app.services.dispatch_url import DispatchUrlResolver
from app.services.parameter_extraction import ParameterExtractor
from app.services.template_builder import TemplateBuilder
from app.use_cases.crm import ForwardOutboundMessageUseCase
from app.use_cases.dispatch import DispatchTemplateUseCase
from config.settings import (
    get_crm_settings,
    get_dispatcher_settings,
    get_firestore_settings,
    get_forwarder_settings,
)
from config.settings.base import parse_environment
from utils.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _warn_memory_backend(component: str) -> None:
    environment = parse_environment(os.getenv("ENVIRONMENT", "development"))
    if environment not in ("development", "test"):
        logger.warning(
            "memory_backend_in_non_dev",
            extra={"component": component, "environment": environment},
        )


# ──────────────────────────────────────────────────────────────────────────────
# Dispatcher
# ──────────────────────────────────────────────────────────────────────────────


def create_tracking_store() -> TrackingStoreProtocol:
    """Cria store de tracking conforme TRACKING_BACKEND (memory|firestore)."""
    backend = get_dispatcher_settings().tracking_backend

    if backend == "firestore":
        settings = get_firestore_settings()
        store = FirestoreTrackingStore(
            create_firestore_client(),
            collection_name=settings.collection_tracking,
        )
        logger.info("tracking_store_created", extra={"backend": "firestore"})
        return store

    if backend == "memory":
        _warn_memory_backend("tracking_store")
        logger.info("tracking_store_created", extra={"backend": "memory"})
        return MemoryTrackingStore()

    msg = f"TRACKING_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_connection_resolver() -> ConnectionStringResolver:
    settings = get_dispatcher_settings()
    return ConnectionStringResolver(
        settings,
        env_provider=create_env_secret_provider(),
        secret_store=create_secret_store(settings.secret_project),
    )


def create_dispatch_use_case() -> DispatchTemplateUseCase:
    settings = get_dispatcher_settings()
    return DispatchTemplateUseCase(
        settings=settings,
        connection_resolver=create_connection_resolver(),
        builder=TemplateBuilder(),
        sender=AcsNotificationSender(timeout_seconds=settings.send_timeout_seconds),
        tracking_store=create_tracking_store(),
    )


# ──────────────────────────────────────────────────────────────────────────────
# Forwarder
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_dispatch_url_cache() -> OnceValue:
    """Holder do valor da URL lida do CRM (um por processo)."""
    return OnceValue()


def create_crm_client() -> CrmClientProtocol:
    """Cria cliente CRM conforme CRM_BACKEND (memory|dataverse)."""
    settings = get_crm_settings()

    if settings.backend == "dataverse":
        secret_store = create_secret_store(get_dispatcher_settings().secret_project)
        token = secret_store.get(settings.access_token_secret) if secret_store else None
        token = token or create_env_secret_provider().get(settings.access_token_secret)
        if not token:
            raise ConfigurationError("CRM access token not configured")
        logger.info("crm_client_created", extra={"backend": "dataverse"})
        return DataverseCrmClient(settings, access_token=token)

    if settings.backend == "memory":
        _warn_memory_backend("crm_client")
        logger.info("crm_client_created", extra={"backend": "memory"})
        return MemoryCrmClient()

    msg = f"CRM_BACKEND inválido: {settings.backend}"
    raise ValueError(msg)


def create_forward_use_case() -> ForwardOutboundMessageUseCase:
    settings = get_forwarder_settings()
    crm_client = create_crm_client()
    return ForwardOutboundMessageUseCase(
        settings=settings,
        crm_client=crm_client,
        extractor=ParameterExtractor(crm_client, settings),
        url_resolver=DispatchUrlResolver(settings, crm_client, get_dispatch_url_cache()),
        dispatch_client=DispatchHttpClient(
            HttpClientConfig(timeout_seconds=settings.timeout_seconds)
        ),
    )
