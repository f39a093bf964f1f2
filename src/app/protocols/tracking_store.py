"""Protocolo de store de rastreio de mensagens enviadas.

Interface leve (ABC) dependida pelo dispatcher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.dispatch_result import TrackingRecord


class TrackingStoreProtocol(ABC):
    """Contrato de gravação append-only de registros de envio.

    Falhas de escrita devem ser tratadas pelo chamador como não fatais.
    """

    @abstractmethod
    async def append(self, record: TrackingRecord) -> None:
        """Grava um registro de rastreio."""

    def is_available(self) -> bool:
        """Indica se o backend está acessível (usado pelo readiness)."""
        return True
