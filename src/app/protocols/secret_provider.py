"""Protocolo de provedores de segredos."""

from __future__ import annotations

from typing import Protocol


class SecretProviderProtocol(Protocol):
    """Contrato mínimo para leitura de segredos por chave."""

    def get(self, key: str, default: str | None = None) -> str | None: ...
