"""Agregador de settings do bridge.

Re-exporta todas as settings e funções de cada módulo.
Organização por componente para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)

# CRM
from config.settings.crm import (
    CrmSettings,
    get_crm_settings,
)

# Dispatcher (lado mensageria)
from config.settings.dispatcher import (
    DEFAULT_LANGUAGE,
    DispatcherSettings,
    get_dispatcher_settings,
)

# Forwarder (lado CRM)
from config.settings.forwarder import (
    ForwarderSettings,
    get_forwarder_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    get_firestore_settings,
)

__all__ = [
    # Constants
    "DEFAULT_LANGUAGE",
    # Base
    "BaseSettings",
    "CrmSettings",
    "DispatcherSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "ForwarderSettings",
    "get_base_settings",
    "get_crm_settings",
    "get_dispatcher_settings",
    "get_firestore_settings",
    "get_forwarder_settings",
]
