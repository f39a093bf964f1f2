"""Setup do logging JSON do serviço.

`configure_logging` roda uma vez no bootstrap e instala um único handler
em stdout com correlation_id, service e redação de dados sensíveis.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter, SensitiveDataFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "wa_template_bridge"

# Pipeline HTTP do SDK Azure e httpx logam headers em DEBUG
_NOISY_LOGGERS = ("azure.core.pipeline.policies.http_logging_policy", "httpx", "httpcore")


def _normalize_level(level: str) -> str:
    normalized = level.upper()
    if normalized not in VALID_LOG_LEVELS:
        valid = ", ".join(sorted(VALID_LOG_LEVELS))
        raise ValueError(f"Nível de log inválido: {level}. Válidos: {valid}")
    return normalized


def _build_handler(
    level: str,
    service_name: str,
    correlation_id_getter: Callable[[], str] | None,
) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))
    handler.addFilter(SensitiveDataFilter())
    return handler


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Instala o handler JSON no root logger, substituindo os existentes.

    Raises:
        ValueError: Nível de log desconhecido
    """
    normalized = _normalize_level(level)

    root = logging.getLogger()
    root.setLevel(normalized)
    root.handlers = [_build_handler(normalized, service_name, correlation_id_getter)]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """Registra que um valor padrão substituiu o valor esperado.

    Usado para corpo sintetizado, coordenadas padrão, tipo de mídia padrão
    e connection string lida do ambiente.
    """
    extra: dict[str, object] = {"fallback_used": True, "component": component}
    if reason:
        extra["reason"] = reason
    if elapsed_ms is not None:
        extra["elapsed_ms"] = elapsed_ms
    logger.info("Fallback applied for %s", component, extra=extra)
