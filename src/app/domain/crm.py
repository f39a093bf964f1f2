"""Modelos do lado CRM: contexto de execução, anexos e envelope de resposta."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class SendStatus(StrEnum):
    SENT = "Sent"
    NOT_SENT = "NotSent"


DEFAULT_ERROR_MESSAGE = "Unknown error"


@dataclass(slots=True)
class CrmExecutionContext:
    """Contexto de uma execução da operação customizada do CRM.

    `output_parameters["response"]` recebe o envelope serializado, inclusive
    quando a execução falha.
    """

    message_name: str
    input_parameters: dict[str, Any] = field(default_factory=dict)
    output_parameters: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FileAttachment:
    """Metadados de um arquivo anexado no CRM."""

    url: str
    file_name: str = ""
    content_type: str = ""


@dataclass(frozen=True, slots=True)
class ChannelInstance:
    """Instância de canal ativa no CRM."""

    instance_id: str
    name: str = ""
    extended_entity_id: str | None = None


@dataclass(frozen=True, slots=True)
class CrmResponseEnvelope:
    """Envelope devolvido ao CRM (chaves em PascalCase)."""

    channel_definition_id: str
    request_id: str
    status: SendStatus
    message_id: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        envelope: dict[str, Any] = {
            "ChannelDefinitionId": self.channel_definition_id,
            "RequestId": self.request_id,
            "Status": self.status.value,
        }
        if self.message_id is not None:
            envelope["MessageId"] = self.message_id
        if self.status is SendStatus.NOT_SENT:
            envelope["ErrorMessage"] = self.error_message or DEFAULT_ERROR_MESSAGE
        return envelope


def read_field(data: Mapping[str, Any], name: str) -> str:
    """Lê campo escalar (chave case-insensitive) como string aparada.

    Objetos e listas contam como ausentes.
    """
    value = data.get(name)
    if value is None:
        lowered = name.lower()
        value = next((v for k, v in data.items() if str(k).lower() == lowered), None)
    if value is None or isinstance(value, dict | list):
        return ""
    return str(value).strip()
