"""Cliente HTTP do forwarder para o dispatcher.

Uma única tentativa por invocação: o host do CRM decide se reexecuta.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from app.observability import CORRELATION_HEADER, get_correlation_id
from app.protocols.dispatch_client import DispatchClientProtocol, DispatchHttpResponse

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de transporte HTTP sem dados sensíveis."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DispatchHttpClient(DispatchClientProtocol):
    """POST JSON ao dispatcher.

    Args:
        config: Timeout, headers padrão e verificação TLS
        transport: Transport httpx alternativo (testes)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    async def post_json(self, url: str, payload: dict[str, Any]) -> DispatchHttpResponse:
        headers = {**self._config.default_headers}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[CORRELATION_HEADER] = correlation_id

        try:
            async with httpx.AsyncClient(
                verify=self._config.verify_ssl,
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers=headers,
                    timeout=self._config.timeout_seconds,
                )
        except httpx.TimeoutException as exc:
            raise HttpError("Dispatcher request timed out") from exc
        except httpx.HTTPError as exc:
            raise HttpError(f"Dispatcher request failed: {type(exc).__name__}") from exc

        logger.info(
            "dispatcher_responded",
            extra={"status_code": response.status_code, "body_length": len(response.content)},
        )
        return DispatchHttpResponse(status_code=response.status_code, body=response.text)
