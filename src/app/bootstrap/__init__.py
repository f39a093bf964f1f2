"""Composition root do bridge: logging, validação de settings e wiring.

    from app.bootstrap import initialize_app, validate_runtime_settings

    initialize_app()
    validate_runtime_settings()
"""

from __future__ import annotations

import logging
import os

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_crm_settings,
    get_dispatcher_settings,
    get_firestore_settings,
    get_forwarder_settings,
)
from config.settings.base import STRICT_ENVIRONMENTS, parse_environment

SERVICE_NAME = "wa_template_bridge"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura o logging JSON com o correlation id da requisição."""
    settings = get_base_settings()
    configure_logging(
        level=settings.log_level,
        service_name=settings.service_name or SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de todas as settings, prefixados pelo componente."""
    base = get_base_settings()
    dispatcher = get_dispatcher_settings()

    components: list[tuple[str, list[str]]] = [
        ("base", base.validate()),
        ("dispatcher", dispatcher.validate()),
        ("forwarder", get_forwarder_settings().validate()),
        ("crm", get_crm_settings().validate()),
    ]
    if dispatcher.tracking_backend == "firestore":
        components.append(("firestore", get_firestore_settings().validate(base.gcp_project)))

    return [f"{name}: {error}" for name, errors in components for error in errors]


def validate_runtime_settings() -> None:
    """Valida settings no startup.

    Staging/production: RuntimeError com a lista de erros.
    Development/test: apenas warning.
    """
    environment = parse_environment(os.getenv("ENVIRONMENT", "development"))
    errors = collect_settings_errors()

    if not errors:
        logger.info("settings_validated", extra={"environment": environment})
        return

    logger.warning(
        "settings_validation_failed",
        extra={"environment": environment, "error_count": len(errors), "errors": errors},
    )
    if environment in STRICT_ENVIRONMENTS:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")
