"""Exceções compartilhadas."""

from .exceptions import (
    BridgeError,
    ConfigurationError,
    InternalError,
    NotFoundError,
    ProviderError,
    ValidationError,
    error_for_status,
    innermost_message,
)

__all__ = [
    "BridgeError",
    "ConfigurationError",
    "InternalError",
    "NotFoundError",
    "ProviderError",
    "ValidationError",
    "error_for_status",
    "innermost_message",
]
