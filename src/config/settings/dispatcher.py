"""Settings do dispatcher de templates (lado mensageria).

O namespace (prefixo de env) separa as variantes de deploy: cada uma tem
seu próprio secret e sua própria variável de fallback.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_NAMESPACE: str = "WA"
DEFAULT_LANGUAGE: str = "he"


@dataclass(frozen=True)
class DispatcherSettings:
    """Configurações do dispatcher.

    Attributes:
        namespace: Prefixo de env da variante de deploy (ex: WA)
        secret_project: Projeto GCP do Secret Manager (vazio = sem secret store)
        secret_name: Nome do secret com a connection string do provedor
        connection_string_env: Variável de ambiente usada como fallback
        send_timeout_seconds: Timeout da chamada de envio ao provedor
        default_language: Idioma usado quando o template não informa
        tracking_backend: Backend do registro de tracking (memory|firestore)
    """

    namespace: str = DEFAULT_NAMESPACE
    secret_project: str = ""
    secret_name: str = "wa-acs-connection-string"
    connection_string_env: str = "WA_ACS_CONNECTION_STRING"
    send_timeout_seconds: float = 30.0
    default_language: str = DEFAULT_LANGUAGE
    tracking_backend: str = "memory"

    def validate(self) -> list[str]:
        """Valida configurações mínimas do dispatcher.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.secret_project and not os.getenv(self.connection_string_env):
            errors.append(
                f"{self.namespace}_SECRET_PROJECT ou {self.connection_string_env} deve estar configurado"
            )

        if self.send_timeout_seconds <= 0:
            errors.append("DISPATCHER_SEND_TIMEOUT_SECONDS deve ser > 0")

        if self.tracking_backend not in ("memory", "firestore"):
            errors.append("TRACKING_BACKEND deve ser 'memory' ou 'firestore'")

        return errors


def _load_dispatcher_from_env(namespace: str) -> DispatcherSettings:
    """Carrega DispatcherSettings do namespace informado."""
    prefix = namespace.upper().rstrip("_")
    return DispatcherSettings(
        namespace=prefix,
        secret_project=os.getenv(f"{prefix}_SECRET_PROJECT", ""),
        secret_name=os.getenv(f"{prefix}_SECRET_NAME", f"{prefix.lower()}-acs-connection-string"),
        connection_string_env=f"{prefix}_ACS_CONNECTION_STRING",
        send_timeout_seconds=float(os.getenv("DISPATCHER_SEND_TIMEOUT_SECONDS", "30")),
        default_language=os.getenv("DISPATCHER_DEFAULT_LANGUAGE", DEFAULT_LANGUAGE),
        tracking_backend=os.getenv("TRACKING_BACKEND", "memory").lower(),
    )


@lru_cache(maxsize=1)
def get_dispatcher_settings() -> DispatcherSettings:
    """Retorna instância cacheada de DispatcherSettings.

    O namespace vem de DISPATCHER_NAMESPACE (default: WA).
    """
    return _load_dispatcher_from_env(os.getenv("DISPATCHER_NAMESPACE", DEFAULT_NAMESPACE))
