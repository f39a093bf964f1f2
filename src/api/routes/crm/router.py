"""Entrada HTTP do forwarder (lado CRM).

POST /api/v1/crm/outbound
    {"messageName": "...", "inputParameters": {"payload": "<json>" | {...}}}

Resposta: o envelope do CRM. 200 em sucesso; em falha, o status da
hierarquia de erros (exceções fora dela viram 500).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.domain.crm import CrmExecutionContext, CrmResponseEnvelope, SendStatus
from app.observability import CORRELATION_HEADER, correlation_scope
from app.use_cases.crm.forward_outbound_message import RESPONSE_PARAMETER
from utils.errors import BridgeError, InternalError, innermost_message

logger = logging.getLogger(__name__)

router = APIRouter()

# Lazy-loaded use case (inicializado na primeira requisição)
_forward_use_case = None


def _get_forward_use_case():
    """Obtém o use case do forwarder (lazy-loading)."""
    global _forward_use_case
    if _forward_use_case is None:
        from app.bootstrap.dependencies import create_forward_use_case

        _forward_use_case = create_forward_use_case()
    return _forward_use_case


def _build_context(body: bytes) -> CrmExecutionContext | None:
    try:
        data: Any = json.loads(body or b"")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    input_parameters = data.get("inputParameters")
    return CrmExecutionContext(
        message_name=str(data.get("messageName") or ""),
        input_parameters=input_parameters if isinstance(input_parameters, dict) else {},
    )


def _response_body(context: CrmExecutionContext, error: BaseException | None) -> dict[str, Any]:
    raw = context.output_parameters.get(RESPONSE_PARAMETER)
    if raw:
        return json.loads(raw)
    # Falha antes do use case gravar o envelope (ex: wiring do CRM)
    envelope = CrmResponseEnvelope(
        channel_definition_id="",
        request_id="",
        status=SendStatus.NOT_SENT,
        error_message=innermost_message(error) if error is not None else None,
    )
    return envelope.to_dict()


@router.post("/outbound")
async def forward_outbound(request: Request) -> JSONResponse:
    """Executa o forwarder e devolve o envelope do CRM."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        headers = {CORRELATION_HEADER: correlation_id}
        context = _build_context(await request.body())
        if context is None:
            invalid = CrmResponseEnvelope(
                channel_definition_id="",
                request_id="",
                status=SendStatus.NOT_SENT,
                error_message="Invalid JSON body",
            )
            return JSONResponse(
                content=invalid.to_dict(),
                status_code=400,
                headers=headers,
            )

        error: BaseException | None = None
        try:
            await _get_forward_use_case().execute(context)
        except BridgeError as exc:
            error, status_code = exc, exc.status_code
        except Exception as exc:
            logger.exception("forward_unexpected_error", extra={"error_type": type(exc).__name__})
            error, status_code = exc, InternalError.status_code
        else:
            status_code = 200

        return JSONResponse(
            content=_response_body(context, error),
            status_code=status_code,
            headers=headers,
        )
