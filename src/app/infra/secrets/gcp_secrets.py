"""Leitura de segredos no Google Cloud Secret Manager.

Fonte primária da connection string do ACS e do token do CRM. O SDK é
síncrono; quem está em contexto async chama `get` via asyncio.to_thread.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

if TYPE_CHECKING:
    from google.cloud.secretmanager import SecretManagerServiceClient

logger = logging.getLogger(__name__)


def secret_version_path(project_id: str, secret_id: str, version: str = "latest") -> str:
    return f"projects/{project_id}/secrets/{secret_id}/versions/{version}"


class GCPSecretProvider:
    """Lê a versão configurada de cada secret de um projeto.

    Falhas do Secret Manager (inexistente, sem permissão, indisponível) e
    de credencial, inclusive na criação do cliente, devolvem `default`;
    o chamador decide pelo fallback no ambiente.
    Valores lidos ficam em memória pela vida do provider.

    Args:
        project_id: Projeto GCP dono dos secrets
        environment: Sufixo opcional no nome ("wa-acs" -> "wa-acs-staging")
        version: Versão lida (default: latest)
        client: Cliente do Secret Manager (criado sob demanda)
    """

    def __init__(
        self,
        project_id: str,
        environment: str = "",
        version: str = "latest",
        client: SecretManagerServiceClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._suffix = f"-{environment}" if environment else ""
        self._version = version
        self._client = client
        self._values: dict[str, str] = {}

    def _get_client(self) -> SecretManagerServiceClient:
        if self._client is None:
            from google.cloud import secretmanager

            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def _access(self, secret_id: str) -> str:
        name = secret_version_path(self._project_id, secret_id, self._version)
        response = self._get_client().access_secret_version(request={"name": name})
        return response.payload.data.decode("utf-8")

    def get(self, key: str, default: str | None = None) -> str | None:
        secret_id = f"{key}{self._suffix}"
        if secret_id in self._values:
            return self._values[secret_id]

        try:
            value = self._access(secret_id)
        except (GoogleAPIError, GoogleAuthError) as exc:
            logger.warning(
                "secret_unavailable",
                extra={"secret_id": secret_id, "error_type": type(exc).__name__},
            )
            return default

        self._values[secret_id] = value
        logger.debug("secret_loaded", extra={"secret_id": secret_id})
        return value
