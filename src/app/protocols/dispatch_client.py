"""Protocolo HTTP do forwarder para o dispatcher.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class DispatchHttpResponse:
    status_code: int
    body: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class DispatchClientProtocol(Protocol):
    """Contrato mínimo: um POST JSON, sem retries."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> DispatchHttpResponse: ...
