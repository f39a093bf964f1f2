"""Stores em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.protocols.tracking_store import TrackingStoreProtocol

if TYPE_CHECKING:
    from app.domain.dispatch_result import TrackingRecord


class MemoryTrackingStore(TrackingStoreProtocol):
    """Store de tracking em memória: apenas para dev/test."""

    def __init__(self) -> None:
        self._records: dict[str, TrackingRecord] = {}

    async def append(self, record: TrackingRecord) -> None:
        self._records[record.message_id] = record

    def get(self, message_id: str) -> TrackingRecord | None:
        return self._records.get(message_id)

    @property
    def records(self) -> list[TrackingRecord]:
        return list(self._records.values())
