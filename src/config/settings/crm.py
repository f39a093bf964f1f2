"""Settings do cliente CRM (Dataverse Web API)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class CrmSettings:
    """Configurações do CRM.

    Attributes:
        backend: Implementação do cliente (memory|dataverse)
        base_url: URL da organização (ex: https://org.crm4.dynamics.com)
        api_version: Versão da Web API
        access_token_secret: Nome do secret com o bearer token
        extended_entity_set: Entity set da extensão do channel instance
        registration_field: Coluna com o channel registration id
        request_timeout_seconds: Timeout das consultas
    """

    backend: str = "memory"
    base_url: str = ""
    api_version: str = "v9.2"
    access_token_secret: str = "crm-access-token"
    extended_entity_set: str = "new_wachannelinstances"
    registration_field: str = "new_channelregistrationid"
    request_timeout_seconds: float = 30.0

    @property
    def api_endpoint(self) -> str:
        """URL base da Web API com versão."""
        return f"{self.base_url.rstrip('/')}/api/data/{self.api_version}"

    def validate(self) -> list[str]:
        """Valida configurações do CRM."""
        errors: list[str] = []

        if self.backend not in ("memory", "dataverse"):
            errors.append("CRM_BACKEND deve ser 'memory' ou 'dataverse'")

        if self.backend == "dataverse" and not self.base_url:
            errors.append("CRM_BASE_URL não configurado")

        return errors


def _load_crm_from_env() -> CrmSettings:
    """Carrega CrmSettings de variáveis de ambiente."""
    return CrmSettings(
        backend=os.getenv("CRM_BACKEND", "memory").lower(),
        base_url=os.getenv("CRM_BASE_URL", ""),
        api_version=os.getenv("CRM_API_VERSION", "v9.2"),
        access_token_secret=os.getenv("CRM_ACCESS_TOKEN_SECRET", "crm-access-token"),
        extended_entity_set=os.getenv("CRM_EXTENDED_ENTITY_SET", "new_wachannelinstances"),
        registration_field=os.getenv("CRM_REGISTRATION_FIELD", "new_channelregistrationid"),
        request_timeout_seconds=float(os.getenv("CRM_REQUEST_TIMEOUT_SECONDS", "30")),
    )


@lru_cache(maxsize=1)
def get_crm_settings() -> CrmSettings:
    """Retorna instância cacheada de CrmSettings."""
    return _load_crm_from_env()
