"""Resultado normalizado do dispatcher (DispatchResult) e recibo do provedor."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class SendReceipt:
    """Recibo do primeiro destinatário retornado pelo provedor."""

    message_id: str
    to: str


class DispatchResult(BaseModel):
    """Resultado de um envio, serializado em camelCase.

    Sucesso omite `error`; falha carrega apenas success/error/timestamp.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    success: bool
    message_id: str | None = None
    status: str | None = None
    recipient: str | None = None
    template_name: str | None = None
    timestamp: datetime = Field(default_factory=_utcnow)
    error: str | None = None

    @classmethod
    def sent(
        cls,
        receipt: SendReceipt,
        *,
        recipient: str,
        template_name: str,
    ) -> DispatchResult:
        return cls(
            success=True,
            message_id=receipt.message_id,
            status=receipt.to,
            recipient=recipient,
            template_name=template_name,
        )

    @classmethod
    def failed(cls, error: str) -> DispatchResult:
        return cls(success=False, error=error)

    def to_response(self) -> dict[str, Any]:
        """Corpo JSON da resposta HTTP."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(frozen=True, slots=True)
class TrackingRecord:
    """Registro de rastreio gravado após envio bem-sucedido (sem conteúdo)."""

    message_id: str
    template_name: str
    to_address: str
    request_id: str | None = None
    channel_definition_id: str | None = None
    from_address: str | None = None
    sent_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "message_id": self.message_id,
            "request_id": self.request_id,
            "channel_definition_id": self.channel_definition_id,
            "from_address": self.from_address,
            "to_address": self.to_address,
            "template_name": self.template_name,
            "sent_at": (self.sent_at or _utcnow()).isoformat(),
        }
