"""Testes do correlation_id e das métricas via log."""

from __future__ import annotations

import logging

import pytest

from app.observability import (
    correlation_scope,
    get_correlation_id,
    record_latency,
    record_outcome,
    reset_correlation_id,
    set_correlation_id,
)


def test_scope_sets_and_restores() -> None:
    assert get_correlation_id() == ""
    with correlation_scope("abc") as correlation_id:
        assert correlation_id == "abc"
        assert get_correlation_id() == "abc"
    assert get_correlation_id() == ""


def test_blank_id_generates_uuid() -> None:
    token = set_correlation_id("  ")
    try:
        assert len(get_correlation_id()) == 36
    finally:
        reset_correlation_id(token)


def test_record_outcome_logs_error_code(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
        record_outcome("dispatcher", success=False, error_code="PROVIDER_ERROR")

    record = caplog.records[-1]
    assert record.getMessage() == "metric_outcome"
    assert record.success is False
    assert record.error_code == "PROVIDER_ERROR"


def test_record_latency_rounds(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="app.observability.metrics"):
        record_latency("forwarder", "forward_outbound", 12.3456)

    assert caplog.records[-1].latency_ms == 12.35
