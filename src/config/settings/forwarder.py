"""Settings do forwarder (lado CRM)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Ponto usado quando latitude/longitude faltam ou não são numéricas
DEFAULT_LATITUDE: str = "32.0853"
DEFAULT_LONGITUDE: str = "34.7818"
DEFAULT_LOCATION_LABEL: str = "מיקום"


@dataclass(frozen=True)
class ForwarderSettings:
    """Configurações do forwarder CRM → dispatcher.

    Attributes:
        message_name: Nome da operação CRM aceita pelo forwarder
        dispatch_url: URL do dispatcher (config explícita)
        dispatch_url_secure: URL do dispatcher (config segura, segunda opção)
        dispatch_url_env_var: Schema name da variável de ambiente no CRM
        timeout_seconds: Timeout do POST ao dispatcher
        default_latitude: Latitude de fallback para parâmetros de localização
        default_longitude: Longitude de fallback para parâmetros de localização
        default_location_label: Rótulo usado quando locationName falta
    """

    message_name: str = "wa_outboundapi"
    dispatch_url: str = ""
    dispatch_url_secure: str = ""
    dispatch_url_env_var: str = "wa_dispatch_url"
    timeout_seconds: float = 30.0
    default_latitude: str = DEFAULT_LATITUDE
    default_longitude: str = DEFAULT_LONGITUDE
    default_location_label: str = DEFAULT_LOCATION_LABEL

    def validate(self) -> list[str]:
        """Valida configurações do forwarder."""
        errors: list[str] = []

        if not self.message_name:
            errors.append("FORWARDER_MESSAGE_NAME não pode ser vazio")

        if not (self.dispatch_url or self.dispatch_url_secure or self.dispatch_url_env_var):
            errors.append(
                "FORWARDER_DISPATCH_URL ou FORWARDER_DISPATCH_URL_ENV_VAR deve estar configurado"
            )

        if self.timeout_seconds <= 0:
            errors.append("FORWARDER_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_forwarder_from_env() -> ForwarderSettings:
    """Carrega ForwarderSettings de variáveis de ambiente."""
    return ForwarderSettings(
        message_name=os.getenv("FORWARDER_MESSAGE_NAME", "wa_outboundapi"),
        dispatch_url=os.getenv("FORWARDER_DISPATCH_URL", "").strip(),
        dispatch_url_secure=os.getenv("FORWARDER_DISPATCH_URL_SECURE", "").strip(),
        dispatch_url_env_var=os.getenv("FORWARDER_DISPATCH_URL_ENV_VAR", "wa_dispatch_url"),
        timeout_seconds=float(os.getenv("FORWARDER_TIMEOUT_SECONDS", "30")),
        default_latitude=os.getenv("FORWARDER_DEFAULT_LATITUDE", DEFAULT_LATITUDE),
        default_longitude=os.getenv("FORWARDER_DEFAULT_LONGITUDE", DEFAULT_LONGITUDE),
        default_location_label=os.getenv("FORWARDER_DEFAULT_LOCATION_LABEL", DEFAULT_LOCATION_LABEL),
    )


@lru_cache(maxsize=1)
def get_forwarder_settings() -> ForwarderSettings:
    """Retorna instância cacheada de ForwarderSettings."""
    return _load_forwarder_from_env()
