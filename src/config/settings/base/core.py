"""Settings comuns ao dispatcher e ao forwarder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "test", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "dev": "development",
    "development": "development",
    "local": "development",
    "test": "test",
    "testing": "test",
    "stage": "staging",
    "staging": "staging",
    "prod": "production",
    "production": "production",
}

# Ambientes onde configuração inválida impede o boot
STRICT_ENVIRONMENTS: frozenset[str] = frozenset({"staging", "production"})


@dataclass(frozen=True)
class BaseSettings:
    """Settings do processo.

    Attributes:
        environment: development|test|staging|production
        service_name: Campo `service` dos logs
        log_level: Nível do root logger
        gcp_project: Projeto padrão do Secret Manager e do Firestore
    """

    environment: Environment = "development"
    service_name: str = "wa_template_bridge"
    log_level: str = "INFO"
    gcp_project: str = ""

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def strict_validation(self) -> bool:
        return self.environment in STRICT_ENVIRONMENTS

    @property
    def allows_memory_backends(self) -> bool:
        return self.environment in ("development", "test")

    def validate(self) -> list[str]:
        if not self.service_name.strip():
            return ["SERVICE_NAME não pode ser vazio"]
        return []


def parse_environment(raw: str) -> Environment:
    """Aceita aliases comuns; valores desconhecidos caem em development."""
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


def _load_base_from_env() -> BaseSettings:
    gcp_project = ""
    for name in ("GCP_PROJECT", "GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT"):
        gcp_project = os.getenv(name, "").strip()
        if gcp_project:
            break

    return BaseSettings(
        environment=parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "wa_template_bridge"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        gcp_project=gcp_project,
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    return _load_base_from_env()
