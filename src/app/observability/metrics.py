"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e agregadas depois
(log-based metrics do Cloud Logging, BigQuery).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Resultado: contador de envios por resultado e código de erro

Uso:
    start = time.perf_counter()
    # ... operação ...
    record_latency("dispatcher", "send_template", (time.perf_counter() - start) * 1000)
    record_outcome("forwarder", success=False, error_code="NOT_FOUND")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "dispatcher", "forwarder")
        operation: Nome da operação (ex: "send_template")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_outcome(
    component: str,
    *,
    success: bool,
    error_code: str | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado de um envio (counter)."""
    extra: dict[str, object] = {
        "metric_type": "outcome",
        "component": component,
        "success": success,
        "correlation_id": correlation_id,
    }
    if error_code:
        extra["error_code"] = error_code
    logger.info("metric_outcome", extra=extra)
