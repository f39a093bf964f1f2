"""Logging estruturado JSON do bridge.

    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="wa_template_bridge")
    logger = get_logger(__name__)
    logger.info("dispatch_succeeded", extra={"template_name": "order_update"})
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter, SensitiveDataFilter, mask_address
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    BridgeJsonFormatter,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "BridgeJsonFormatter",
    "CorrelationIdFilter",
    "SensitiveDataFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "mask_address",
]
