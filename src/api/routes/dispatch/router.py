"""Endpoint do dispatcher.

POST /api/v1/templates/send: payload canônico -> DispatchResult.
Sucesso responde 200; falhas respondem {success:false, error, timestamp}
com o status da hierarquia de erros.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.domain.dispatch_result import DispatchResult
from app.observability import CORRELATION_HEADER, correlation_scope
from utils.errors import BridgeError, InternalError

logger = logging.getLogger(__name__)

router = APIRouter()

# Lazy-loaded use case (inicializado na primeira requisição)
_dispatch_use_case = None


def _get_dispatch_use_case():
    """Obtém o use case do dispatcher (lazy-loading)."""
    global _dispatch_use_case
    if _dispatch_use_case is None:
        from app.bootstrap.dependencies import create_dispatch_use_case

        _dispatch_use_case = create_dispatch_use_case()
    return _dispatch_use_case


@router.post("/send")
async def send_template(request: Request) -> JSONResponse:
    """Envia um template WhatsApp a partir do payload canônico."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        body = await request.body()
        headers = {CORRELATION_HEADER: correlation_id}
        try:
            result = await _get_dispatch_use_case().execute(body)
        except BridgeError as exc:
            failure = DispatchResult.failed(exc.message)
            return JSONResponse(
                content=failure.to_response(),
                status_code=exc.status_code,
                headers=headers,
            )
        except Exception as exc:
            # Falha de wiring (backend inválido, cliente do SDK) antes do use case
            logger.exception("dispatch_route_unexpected_error", extra={"error_type": type(exc).__name__})
            failure = DispatchResult.failed(str(exc) or type(exc).__name__)
            return JSONResponse(
                content=failure.to_response(),
                status_code=InternalError.status_code,
                headers=headers,
            )
        return JSONResponse(content=result.to_response(), status_code=200, headers=headers)
