"""Testes do DispatchResult e TrackingRecord."""

from __future__ import annotations

from datetime import UTC, datetime

from app.domain.dispatch_result import DispatchResult, SendReceipt, TrackingRecord


def test_sent_result_serializes_camel_case_without_error() -> None:
    result = DispatchResult.sent(
        SendReceipt(message_id="msg-1", to="+972501234567"),
        recipient="+972501234567",
        template_name="order_update",
    )
    body = result.to_response()

    assert body["success"] is True
    assert body["messageId"] == "msg-1"
    assert body["status"] == "+972501234567"
    assert body["recipient"] == "+972501234567"
    assert body["templateName"] == "order_update"
    assert "error" not in body
    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None


def test_failed_result_only_carries_error_and_timestamp() -> None:
    body = DispatchResult.failed("Recipient is required").to_response()
    assert set(body) == {"success", "error", "timestamp"}
    assert body["success"] is False
    assert body["error"] == "Recipient is required"


def test_tracking_record_to_dict_has_no_content() -> None:
    sent_at = datetime(2026, 1, 1, tzinfo=UTC)
    record = TrackingRecord(
        message_id="msg-1",
        template_name="t",
        to_address="+1",
        request_id="req-1",
        sent_at=sent_at,
    )
    data = record.to_dict()
    assert data["message_id"] == "msg-1"
    assert data["sent_at"] == sent_at.isoformat()
    assert data["channel_definition_id"] is None
    assert "text" not in data
