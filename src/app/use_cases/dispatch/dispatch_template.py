"""Use case do dispatcher: JSON canônico -> envio único -> DispatchResult.

Fluxo:
    1. Parse/validação do TemplateRequest
    2. Connection string (Secret Manager, depois ambiente)
    3. Build do template (MediaUrlError -> ValidationError)
    4. Envio ao provedor (uma tentativa)
    5. Tracking best-effort
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, cast

from pydantic import ValidationError as PydanticValidationError

from app.domain.dispatch_result import DispatchResult, TrackingRecord
from app.domain.template_binding import BuiltTemplate
from app.domain.template_request import TemplateRequest, TemplateSection
from app.observability import get_correlation_id
from app.observability.metrics import record_latency, record_outcome
from config.logging import mask_address
from utils.errors import BridgeError, InternalError, ValidationError

if TYPE_CHECKING:
    from app.protocols.notification_sender import NotificationSenderProtocol
    from app.protocols.tracking_store import TrackingStoreProtocol
    from app.services.connection_string import ConnectionStringResolver
    from app.services.template_builder import TemplateBuilder
    from config.settings.dispatcher import DispatcherSettings

logger = logging.getLogger(__name__)


def parse_template_request(raw_body: bytes | str | dict[str, Any]) -> TemplateRequest:
    """Interpreta e valida o corpo recebido.

    Raises:
        ValidationError: JSON inválido, seção template ausente,
            nome do template ou destinatário vazios
    """
    if isinstance(raw_body, dict):
        data: Any = raw_body
    else:
        try:
            data = json.loads(raw_body or b"")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ValidationError("Invalid JSON body") from exc

    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    try:
        request = TemplateRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid request: {exc.errors()[0]['msg']}") from exc

    if request.template is None:
        raise ValidationError("Missing template section")
    if not request.template.name.strip():
        raise ValidationError("Template name is required")
    if not request.recipient.strip():
        raise ValidationError("Recipient is required")
    return request


class DispatchTemplateUseCase:
    """Orquestra build, envio e tracking de um template.

    Erros saem como exceções da hierarquia BridgeError; a rota converte
    para o corpo de falha com o status correspondente.
    """

    def __init__(
        self,
        settings: DispatcherSettings,
        connection_resolver: ConnectionStringResolver,
        builder: TemplateBuilder,
        sender: NotificationSenderProtocol,
        tracking_store: TrackingStoreProtocol | None = None,
    ) -> None:
        self._settings = settings
        self._connection_resolver = connection_resolver
        self._builder = builder
        self._sender = sender
        self._tracking_store = tracking_store

    async def execute(self, raw_body: bytes | str | dict[str, Any]) -> DispatchResult:
        start = time.perf_counter()
        try:
            result = await self._dispatch(raw_body)
        except BridgeError as exc:
            logger.warning(
                "dispatch_failed",
                extra={"error_code": exc.error_code, "status_code": exc.status_code},
            )
            record_outcome("dispatcher", success=False, error_code=exc.error_code)
            raise
        except Exception as exc:
            logger.exception("dispatch_unexpected_error", extra={"error_type": type(exc).__name__})
            record_outcome("dispatcher", success=False, error_code=InternalError.error_code)
            raise InternalError(str(exc) or type(exc).__name__) from exc
        finally:
            record_latency(
                "dispatcher",
                "send_template",
                (time.perf_counter() - start) * 1000,
                get_correlation_id(),
            )
        record_outcome("dispatcher", success=True)
        return result

    async def _dispatch(self, raw_body: bytes | str | dict[str, Any]) -> DispatchResult:
        request = parse_template_request(raw_body)
        template_section = cast(TemplateSection, request.template)

        connection_string = await self._connection_resolver.resolve()

        language = (template_section.language or "").strip() or self._settings.default_language
        build = self._builder.build(template_section.name, language, template_section.values)
        if build.error is not None:
            raise ValidationError(str(build.error))

        # id malformado sobe como erro interno (não pré-validado)
        channel_id = uuid.UUID(request.channel_registration_id)

        receipt = await self._sender.send_template(
            connection_string,
            channel_id,
            request.recipient,
            cast(BuiltTemplate, build.template),
        )
        logger.info(
            "dispatch_succeeded",
            extra={
                "message_id": receipt.message_id,
                "template_name": template_section.name,
                "recipient": mask_address(request.recipient),
            },
        )

        await self._track(request, receipt.message_id)
        return DispatchResult.sent(
            receipt,
            recipient=request.recipient,
            template_name=template_section.name,
        )

    async def _track(self, request: TemplateRequest, message_id: str) -> None:
        if self._tracking_store is None:
            return
        template_name = request.template.name if request.template else ""
        record = TrackingRecord(
            message_id=message_id,
            template_name=template_name,
            to_address=request.recipient,
            request_id=request.request_id,
            channel_definition_id=request.channel_definition_id,
            from_address=request.from_address,
            sent_at=datetime.now(UTC),
        )
        try:
            await self._tracking_store.append(record)
        except Exception as exc:
            logger.warning(
                "tracking_write_failed",
                extra={"message_id": message_id, "error_type": type(exc).__name__, "error": str(exc)},
            )
