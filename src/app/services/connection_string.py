"""Resolução da connection string do provedor de mensageria.

Ordem: Secret Manager (quando configurado), depois variável de ambiente.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from config.logging import log_fallback
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from app.protocols.secret_provider import SecretProviderProtocol
    from config.settings.dispatcher import DispatcherSettings

logger = logging.getLogger(__name__)


class ConnectionStringResolver:
    """Resolve a credencial de envio do namespace configurado.

    Args:
        settings: Settings do dispatcher
        env_provider: Provedor de variáveis de ambiente
        secret_store: Secret Manager (None quando não configurado)
    """

    def __init__(
        self,
        settings: DispatcherSettings,
        env_provider: SecretProviderProtocol,
        secret_store: SecretProviderProtocol | None = None,
    ) -> None:
        self._settings = settings
        self._env = env_provider
        self._secret_store = secret_store

    def is_configured(self) -> bool:
        """Há ao menos uma fonte possível de credencial."""
        if self._secret_store is not None:
            return True
        return bool((self._env.get(self._settings.connection_string_env) or "").strip())

    async def resolve(self) -> str:
        """Retorna a connection string.

        Raises:
            ConfigurationError: Nenhuma fonte devolveu valor
        """
        if self._secret_store is not None:
            value = await asyncio.to_thread(self._secret_store.get, self._settings.secret_name)
            if value and value.strip():
                return value.strip()
            log_fallback(logger, "acs_connection_string", reason="secret_store_empty")

        value = self._env.get(self._settings.connection_string_env)
        if value and value.strip():
            return value.strip()

        logger.error(
            "connection_string_missing",
            extra={"namespace": self._settings.namespace},
        )
        raise ConfigurationError("ACS connection string not configured")
