"""Filters de logging: contexto da requisição e redação de dados sensíveis."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

# Atributos de `extra` nunca emitidos em claro
SECRET_ATTRIBUTES = frozenset(
    {"connection_string", "access_token", "authorization", "secret_value", "token"}
)
# Atributos com telefone/endereço do contato, emitidos mascarados
ADDRESS_ATTRIBUTES = frozenset({"recipient", "to_address", "from_address", "contact_point"})

REDACTED = "[REDACTED]"


def mask_address(address: str | None, visible: int = 4) -> str:
    """Mascara telefone/endereço para log, mantendo só os últimos dígitos.

    >>> mask_address("+972501234567")
    '*********4567'
    """
    if not address:
        return ""
    hidden = max(len(address) - visible, 0)
    if hidden == 0:
        return "*" * len(address)
    return "*" * hidden + address[hidden:]


class CorrelationIdFilter(logging.Filter):
    """Anexa correlation_id e service a cada record.

    Um correlation_id vindo de `extra` tem precedência sobre o getter.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._correlation_id_getter = correlation_id_getter

    def _current_correlation_id(self) -> str:
        if self._correlation_id_getter is None:
            return ""
        return self._correlation_id_getter() or ""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = self._current_correlation_id()
        record.service = self._service_name
        return True


class SensitiveDataFilter(logging.Filter):
    """Redige credenciais e mascara endereços passados via `extra`.

    Já mascarados (começando com "*") não são alterados.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for attribute in SECRET_ATTRIBUTES:
            if getattr(record, attribute, None):
                setattr(record, attribute, REDACTED)

        for attribute in ADDRESS_ATTRIBUTES:
            value = getattr(record, attribute, None)
            if isinstance(value, str) and value and not value.startswith("*"):
                setattr(record, attribute, mask_address(value))
        return True
