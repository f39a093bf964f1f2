"""Settings do processo (ambiente, logging, projeto GCP)."""

from __future__ import annotations

from config.settings.base.core import (
    STRICT_ENVIRONMENTS,
    BaseSettings,
    Environment,
    get_base_settings,
    parse_environment,
)

__all__ = [
    "STRICT_ENVIRONMENTS",
    "BaseSettings",
    "Environment",
    "get_base_settings",
    "parse_environment",
]
