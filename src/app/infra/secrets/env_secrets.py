"""Segredos lidos de variáveis de ambiente.

Fallback do Secret Manager e fonte única em desenvolvimento local.
"""

from __future__ import annotations

import os


def secret_env_name(key: str, prefix: str = "") -> str:
    """Nome da variável para um secret: "crm-access-token" -> "CRM_ACCESS_TOKEN".

    Nomes que já estão no formato de variável passam sem alteração.
    """
    name = key.strip().upper().replace("-", "_")
    if prefix:
        name = f"{prefix.strip().upper().rstrip('_')}_{name}"
    return name


class EnvSecretProvider:
    """Provedor de segredos em `os.environ`; valores em branco contam como ausentes."""

    def __init__(self, prefix: str = "") -> None:
        self._prefix = prefix

    def get(self, key: str, default: str | None = None) -> str | None:
        value = os.environ.get(secret_env_name(key, self._prefix), "")
        return value if value.strip() else default
