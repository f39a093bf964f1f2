"""Use case do forwarder: evento outbound do CRM -> POST ao dispatcher.

Fluxo:
    1. Valida operação e parâmetro `payload`
    2. Lê template (nome/idioma/tipo) do objeto `Message`
    3. Resolve channel registration id (duas etapas no CRM)
    4. Extrai parâmetros (texto, mídia, localização)
    5. Resolve URL do dispatcher e envia o payload canônico
    6. Grava o envelope do CRM em output_parameters["response"]

Qualquer exceção grava um envelope de erro e é relançada para o host.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.domain.crm import (
    DEFAULT_ERROR_MESSAGE,
    CrmExecutionContext,
    CrmResponseEnvelope,
    SendStatus,
    read_field,
)
from app.domain.template_request import TemplateRequest, TemplateSection
from app.observability import get_correlation_id
from app.observability.metrics import record_latency, record_outcome
from app.services.channel_registration import resolve_channel_registration_id
from utils.errors import (
    BridgeError,
    InternalError,
    ValidationError,
    error_for_status,
    innermost_message,
)

if TYPE_CHECKING:
    from app.protocols.crm_client import CrmClientProtocol
    from app.protocols.dispatch_client import DispatchClientProtocol, DispatchHttpResponse
    from app.services.dispatch_url import DispatchUrlResolver
    from app.services.parameter_extraction import ParameterExtractor
    from config.settings.forwarder import ForwarderSettings

logger = logging.getLogger(__name__)

PAYLOAD_PARAMETER = "payload"
RESPONSE_PARAMETER = "response"
DEFAULT_TEMPLATE_LANGUAGE = "he"
DEFAULT_TEMPLATE_TYPE = "text"


def _load_payload(raw: Any) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        return dict(raw)
    if not isinstance(raw, str | bytes):
        raise ValidationError("Parameter payload must be a JSON string")
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError("Parameter payload is not valid JSON") from exc
    if not isinstance(data, dict):
        raise ValidationError("Parameter payload must be a JSON object")
    return data


def _message_object(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    message = payload.get("Message")
    if message is None:
        message = next((v for k, v in payload.items() if str(k).lower() == "message"), None)
    return message if isinstance(message, Mapping) else {}


def _serialize(envelope: CrmResponseEnvelope) -> str:
    return json.dumps(envelope.to_dict(), ensure_ascii=False, separators=(",", ":"))


class ForwardOutboundMessageUseCase:
    """Traduz o evento do CRM no payload canônico e chama o dispatcher.

    Args:
        settings: Settings do forwarder
        crm_client: Cliente CRM (lookup do registration id)
        extractor: Extrator de parâmetros
        url_resolver: Resolvedor da URL do dispatcher
        dispatch_client: Cliente HTTP do dispatcher
    """

    def __init__(
        self,
        settings: ForwarderSettings,
        crm_client: CrmClientProtocol,
        extractor: ParameterExtractor,
        url_resolver: DispatchUrlResolver,
        dispatch_client: DispatchClientProtocol,
    ) -> None:
        self._settings = settings
        self._crm = crm_client
        self._extractor = extractor
        self._url_resolver = url_resolver
        self._dispatch_client = dispatch_client

    async def execute(self, context: CrmExecutionContext) -> CrmResponseEnvelope:
        """Executa o forward e devolve o envelope gravado no contexto.

        Raises:
            BridgeError: Após gravar o envelope de erro no contexto
        """
        start = time.perf_counter()
        try:
            envelope = await self._forward(context)
        except Exception as exc:
            error_envelope = self._error_envelope(context, exc)
            context.output_parameters[RESPONSE_PARAMETER] = _serialize(error_envelope)
            error_code = exc.error_code if isinstance(exc, BridgeError) else InternalError.error_code
            logger.warning(
                "forward_failed",
                extra={"error_code": error_code, "error_type": type(exc).__name__},
            )
            record_outcome("forwarder", success=False, error_code=error_code)
            raise
        finally:
            record_latency(
                "forwarder",
                "forward_outbound",
                (time.perf_counter() - start) * 1000,
                get_correlation_id(),
            )

        record_outcome("forwarder", success=envelope.status is SendStatus.SENT)
        return envelope

    async def _forward(self, context: CrmExecutionContext) -> CrmResponseEnvelope:
        if context.message_name != self._settings.message_name:
            raise ValidationError(f"Unexpected message name: {context.message_name}")
        if PAYLOAD_PARAMETER not in context.input_parameters:
            raise ValidationError("Missing parameter: payload")

        original = _load_payload(context.input_parameters[PAYLOAD_PARAMETER])
        channel_definition_id = read_field(original, "ChannelDefinitionId")
        request_id = read_field(original, "RequestId")
        from_address = read_field(original, "From")

        message = _message_object(original)
        template_name = read_field(message, "templename")
        template_type = read_field(message, "templateType") or DEFAULT_TEMPLATE_TYPE
        language = read_field(message, "language") or DEFAULT_TEMPLATE_LANGUAGE
        if not template_name:
            raise ValidationError("templename missing in Message.")

        registration_id = await resolve_channel_registration_id(
            self._crm, channel_definition_id, from_address
        )
        values = await self._extractor.extract(message)

        canonical = self._canonical_request(
            original,
            registration_id=registration_id,
            template=TemplateSection(
                name=template_name,
                language=language,
                type=template_type,
                values=values,
            ),
        )
        logger.info(
            "canonical_payload_built",
            extra={
                "template_name": template_name,
                "template_type": template_type,
                "values_count": len(values),
            },
        )

        url = await self._url_resolver.resolve()
        response = await self._dispatch_client.post_json(url, canonical.to_wire())
        envelope = self._envelope_from_response(channel_definition_id, request_id, response)
        context.output_parameters[RESPONSE_PARAMETER] = _serialize(envelope)

        if not response.is_success:
            raise error_for_status(
                response.status_code,
                envelope.error_message or f"Dispatcher returned HTTP {response.status_code}",
            )

        logger.info("forward_completed", extra={"status": envelope.status.value})
        return envelope

    @staticmethod
    def _canonical_request(
        original: Mapping[str, Any],
        *,
        registration_id: str,
        template: TemplateSection,
    ) -> TemplateRequest:
        def optional(name: str) -> str | None:
            return read_field(original, name) or None

        return TemplateRequest(
            channel_registration_id=registration_id,
            recipient=read_field(original, "To"),
            template=template,
            channel_definition_id=optional("ChannelDefinitionId"),
            request_id=optional("RequestId"),
            organization_id=optional("OrganizationId"),
            from_address=optional("From"),
        )

    @staticmethod
    def _envelope_from_response(
        channel_definition_id: str,
        request_id: str,
        response: DispatchHttpResponse,
    ) -> CrmResponseEnvelope:
        try:
            body = json.loads(response.body)
        except json.JSONDecodeError as exc:
            raise InternalError(
                f"Dispatcher response is not valid JSON (HTTP {response.status_code})"
            ) from exc
        if not isinstance(body, dict):
            raise InternalError("Dispatcher response must be a JSON object")

        success = body.get("success") is True
        return CrmResponseEnvelope(
            channel_definition_id=channel_definition_id,
            request_id=request_id,
            status=SendStatus.SENT if success else SendStatus.NOT_SENT,
            message_id=str(body.get("messageId") or ""),
            error_message=None if success else str(body.get("error") or DEFAULT_ERROR_MESSAGE),
        )

    @staticmethod
    def _error_envelope(context: CrmExecutionContext, exc: BaseException) -> CrmResponseEnvelope:
        channel_definition_id = request_id = ""
        try:
            original = _load_payload(context.input_parameters.get(PAYLOAD_PARAMETER))
        except ValidationError:
            original = {}
        if original:
            channel_definition_id = read_field(original, "ChannelDefinitionId")
            request_id = read_field(original, "RequestId")

        return CrmResponseEnvelope(
            channel_definition_id=channel_definition_id,
            request_id=request_id,
            status=SendStatus.NOT_SENT,
            error_message=innermost_message(exc),
        )

