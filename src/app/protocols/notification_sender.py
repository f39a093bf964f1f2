"""Protocolo de envio de template ao provedor de mensageria."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from uuid import UUID

    from app.domain.dispatch_result import SendReceipt
    from app.domain.template_binding import BuiltTemplate


class NotificationSenderProtocol(Protocol):
    """Contrato mínimo para uma única tentativa de envio.

    Implementações levantam ProviderError quando o provedor rejeita a
    chamada; qualquer outra exceção é tratada como falha interna.
    """

    async def send_template(
        self,
        connection_string: str,
        channel_registration_id: UUID,
        recipient: str,
        template: BuiltTemplate,
    ) -> SendReceipt: ...
