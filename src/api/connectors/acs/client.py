"""Sender de templates via Azure Communication Services (Advanced Messaging).

O SDK é síncrono: a chamada roda em worker thread (asyncio.to_thread).
Um cliente é criado por envio (connection string resolvida), sem retries,
e fechado ao final da chamada.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from azure.communication.messages import NotificationMessagesClient
from azure.communication.messages.models import TemplateNotificationContent
from azure.core.exceptions import HttpResponseError
from azure.core.pipeline.policies import RetryPolicy

from api.connectors.acs.mapping import to_sdk_template
from app.domain.dispatch_result import SendReceipt
from app.protocols.notification_sender import NotificationSenderProtocol
from utils.errors import ProviderError

if TYPE_CHECKING:
    from uuid import UUID

    from app.domain.template_binding import BuiltTemplate

logger = logging.getLogger(__name__)


def _provider_message(exc: HttpResponseError) -> str:
    error = getattr(exc, "error", None)
    message = getattr(error, "message", None) or exc.message or str(exc)
    return f"ACS Error: {message}"


class AcsNotificationSender(NotificationSenderProtocol):
    """Envia um template para um único destinatário.

    Args:
        timeout_seconds: Timeout de conexão/leitura da chamada
    """

    def __init__(self, timeout_seconds: float = 30.0) -> None:
        self._timeout_seconds = timeout_seconds

    def _create_client(self, connection_string: str) -> NotificationMessagesClient:
        return NotificationMessagesClient.from_connection_string(
            connection_string,
            retry_policy=RetryPolicy.no_retries(),
            connection_timeout=self._timeout_seconds,
            read_timeout=self._timeout_seconds,
        )

    def _send_sync(
        self,
        connection_string: str,
        channel_registration_id: UUID,
        recipient: str,
        template: BuiltTemplate,
    ) -> SendReceipt:
        client = self._create_client(connection_string)
        content = TemplateNotificationContent(
            channel_registration_id=str(channel_registration_id),
            to=[recipient],
            template=to_sdk_template(template),
        )
        with client:
            try:
                result = client.send(content)
            except HttpResponseError as exc:
                logger.warning(
                    "acs_send_rejected",
                    extra={"status_code": exc.status_code, "template_name": template.name},
                )
                raise ProviderError(_provider_message(exc)) from exc

        receipts = list(result.receipts or [])
        if not receipts:
            raise ProviderError("ACS Error: no receipt returned")
        receipt = receipts[0]
        return SendReceipt(message_id=receipt.message_id, to=receipt.to)

    async def send_template(
        self,
        connection_string: str,
        channel_registration_id: UUID,
        recipient: str,
        template: BuiltTemplate,
    ) -> SendReceipt:
        return await asyncio.to_thread(
            self._send_sync,
            connection_string,
            channel_registration_id,
            recipient,
            template,
        )
