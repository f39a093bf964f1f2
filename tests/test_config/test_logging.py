"""Testes de config.logging (setup, filters, formatter e fallback)."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    BridgeJsonFormatter,
    CorrelationIdFilter,
    SensitiveDataFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
    mask_address,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS
from config.logging.filters import REDACTED


def _record(msg: str = "event", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [("INFO", logging.INFO), ("debug", logging.DEBUG), ("Warning", logging.WARNING)],
    )
    def test_sets_root_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_installs_single_handler_with_filters(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(correlation_id_getter=lambda: "corr-1")

        assert len(root.handlers) == 1
        filters = root.handlers[0].filters
        assert any(isinstance(f, CorrelationIdFilter) for f in filters)
        assert any(isinstance(f, SensitiveDataFilter) for f in filters)

    def test_noisy_loggers_are_raised_to_warning(self) -> None:
        configure_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "wa_template_bridge"

    def test_get_logger_returns_named_logger(self) -> None:
        assert get_logger("app.services") is logging.getLogger("app.services")


class TestLogFallback:
    def test_lazy_message_and_extra(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "synthetic_body", reason="media_without_text")

        args, kwargs = logger.info.call_args
        assert args == ("Fallback applied for %s", "synthetic_body")
        assert kwargs["extra"] == {
            "fallback_used": True,
            "component": "synthetic_body",
            "reason": "media_without_text",
        }

    def test_elapsed_ms_is_optional(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "acs_connection_string", elapsed_ms=12.5)

        extra = logger.info.call_args[1]["extra"]
        assert extra["elapsed_ms"] == 12.5
        assert "reason" not in extra


class TestCorrelationIdFilter:
    def test_adds_correlation_id_and_service(self) -> None:
        record = _record()
        assert CorrelationIdFilter("bridge", lambda: "corr-123").filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "bridge"

    def test_explicit_correlation_id_wins(self) -> None:
        record = _record(correlation_id="explicit")
        CorrelationIdFilter("bridge", lambda: "from-getter").filter(record)
        assert record.correlation_id == "explicit"

    def test_without_getter_uses_empty_string(self) -> None:
        record = _record()
        CorrelationIdFilter("bridge").filter(record)
        assert record.correlation_id == ""


class TestSensitiveDataFilter:
    def test_redacts_secrets(self) -> None:
        record = _record(connection_string="endpoint=https://x;accesskey=abc", access_token="t")
        assert SensitiveDataFilter().filter(record) is True
        assert record.connection_string == REDACTED
        assert record.access_token == REDACTED

    def test_masks_addresses(self) -> None:
        record = _record(recipient="+972501234567", from_address="+15550001111")
        SensitiveDataFilter().filter(record)
        assert record.recipient == "*********4567"
        assert record.from_address.endswith("1111")
        assert record.from_address.startswith("*")

    def test_already_masked_values_are_kept(self) -> None:
        record = _record(recipient="*********4567")
        SensitiveDataFilter().filter(record)
        assert record.recipient == "*********4567"


class TestJsonFormatter:
    def test_field_constants(self) -> None:
        assert {"asctime", "levelname", "name", "message", "correlation_id", "service"} == (
            REQUIRED_LOG_FIELDS
        )
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_formats_renamed_fields(self) -> None:
        formatter = create_json_formatter()
        assert isinstance(formatter, BridgeJsonFormatter)

        output = json.loads(
            formatter.format(
                _record("template_built", correlation_id="abc", service="bridge", template_name="t1")
            )
        )

        assert output["message"] == "template_built"
        assert output["level"] == "INFO"
        assert output["logger"] == "app.test"
        assert output["correlation_id"] == "abc"
        assert output["template_name"] == "t1"

    def test_drops_none_extras(self) -> None:
        output = json.loads(
            create_json_formatter().format(
                _record(correlation_id="", service="bridge", request_id=None)
            )
        )
        assert "request_id" not in output
        assert output["correlation_id"] == ""


class TestMaskAddress:
    def test_keeps_last_four_digits(self) -> None:
        assert mask_address("+972501234567") == "*********4567"

    def test_short_values_are_fully_masked(self) -> None:
        assert mask_address("123") == "***"
        assert mask_address("1234") == "****"

    def test_empty_values(self) -> None:
        assert mask_address(None) == ""
        assert mask_address("") == ""
