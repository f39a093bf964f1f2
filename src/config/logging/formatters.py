"""Formatter JSON do bridge (python-json-logger)."""

from __future__ import annotations

from typing import Any

from pythonjsonlogger.json import JsonFormatter

# Campos presentes em toda linha, antes do rename
REQUIRED_LOG_FIELDS = frozenset(
    {"asctime", "levelname", "name", "message", "correlation_id", "service"}
)

FIELD_RENAME_MAP = {"levelname": "level", "name": "logger"}


class BridgeJsonFormatter(JsonFormatter):
    """JsonFormatter que descarta campos de `extra` com valor None.

    Exemplo de output:
        {"asctime": "...", "level": "INFO", "logger": "app.use_cases...",
         "message": "dispatch_succeeded", "correlation_id": "abc-123",
         "service": "wa_template_bridge", "template_name": "order_update"}
    """

    def add_fields(
        self,
        log_data: dict[str, Any],
        record: Any,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_data, record, message_dict)
        required = {FIELD_RENAME_MAP.get(f, f) for f in REQUIRED_LOG_FIELDS}
        for key in [k for k, v in log_data.items() if v is None and k not in required]:
            del log_data[key]


def create_json_formatter() -> JsonFormatter:
    fields = " ".join(f"%({name})s" for name in sorted(REQUIRED_LOG_FIELDS))
    return BridgeJsonFormatter(fields, rename_fields=FIELD_RENAME_MAP)
