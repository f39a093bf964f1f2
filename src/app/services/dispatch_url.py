"""Resolução da URL do dispatcher para o forwarder.

Ordem: config explícita, config segura, variável de ambiente do CRM
(valor atual, senão valor padrão). O resultado da consulta ao CRM fica no
holder injetado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from app.protocols.crm_client import CrmClientProtocol
    from app.protocols.value_cache import OnceValueProtocol
    from config.settings.forwarder import ForwarderSettings

logger = logging.getLogger(__name__)


class DispatchUrlResolver:
    """Resolve a URL de destino do POST canônico.

    Args:
        settings: Settings do forwarder
        crm_client: Cliente CRM (consulta da variável de ambiente)
        cache: Holder do valor vindo do CRM
    """

    def __init__(
        self,
        settings: ForwarderSettings,
        crm_client: CrmClientProtocol,
        cache: OnceValueProtocol,
    ) -> None:
        self._settings = settings
        self._crm = crm_client
        self._cache = cache

    async def resolve(self) -> str:
        for configured in (self._settings.dispatch_url, self._settings.dispatch_url_secure):
            if configured and configured.strip():
                return configured.strip()

        schema_name = self._settings.dispatch_url_env_var
        if schema_name:
            url = await self._cache.get_or_load(
                lambda: self._crm.get_environment_variable(schema_name)
            )
            if url:
                logger.debug("dispatch_url_resolved", extra={"source": "crm_environment_variable"})
                return url

        raise ConfigurationError("Dispatch URL not configured")
