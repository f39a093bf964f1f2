"""Provedores de segredos (Secret Manager e variáveis de ambiente)."""

from __future__ import annotations

from app.infra.secrets.env_secrets import EnvSecretProvider, secret_env_name
from app.infra.secrets.gcp_secrets import GCPSecretProvider, secret_version_path

__all__ = [
    "EnvSecretProvider",
    "GCPSecretProvider",
    "secret_env_name",
    "secret_version_path",
]
