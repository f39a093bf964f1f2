"""Modelo canônico de requisição de template (TemplateRequest).

Payload trocado entre o forwarder (lado CRM) e o dispatcher:

    {"channelRegistrationId": "<uuid>", "to": "<telefone>",
     "template": {"name": "...", "language": "he", "values": [...]}}

As chaves são casadas sem diferenciar maiúsculas/minúsculas: versões antigas
do forwarder enviavam PascalCase ("ChannelRegistrationId", "To").
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Nomes reservados de parâmetros especiais
HEADER_MEDIA = "headerMedia"
DOCUMENT_FILE = "documentfile"
LOCATION = "location"
BUTTON_URL_NAME = "buttonUrl1"

HEADER_SLOT_NAMES = frozenset({HEADER_MEDIA, DOCUMENT_FILE, LOCATION})


class ParameterKind(StrEnum):
    """Tipos de parâmetro de template, com fallback explícito UNKNOWN."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    LOCATION = "location"
    BUTTON_URL = "buttonUrl"
    QUICK_ACTION = "quickAction"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Any) -> ParameterKind:
        """Converte string livre em ParameterKind (case-insensitive).

        Valores desconhecidos ou não-string viram UNKNOWN.
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.UNKNOWN
        return _KIND_LOOKUP.get(raw.strip().lower(), cls.UNKNOWN)

    @property
    def is_button_action(self) -> bool:
        return self in (ParameterKind.BUTTON_URL, ParameterKind.QUICK_ACTION)


_KIND_LOOKUP: dict[str, ParameterKind] = {kind.value.lower(): kind for kind in ParameterKind}


def _normalize_keys(model_cls: type[BaseModel], data: Any) -> Any:
    """Reescreve as chaves de `data` para o alias/nome do campo correspondente."""
    if not isinstance(data, dict):
        return data

    lookup: dict[str, str] = {}
    for field_name, field_info in model_cls.model_fields.items():
        target = field_info.alias or field_name
        lookup[field_name.lower()] = target
        lookup[target.lower()] = target

    normalized: dict[str, Any] = {}
    for key, value in data.items():
        target = lookup.get(str(key).lower())
        if target is not None and target not in normalized:
            normalized[target] = value
    return normalized


def _coerce_text(value: Any) -> str:
    """None vira "", números viram string; demais valores passam intactos."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int | float):
        return str(value)
    return value


class _WireModel(BaseModel):
    """Base dos modelos de fio: ignora extras e aceita chaves em qualquer caixa."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        return _normalize_keys(cls, data)


class Parameter(_WireModel):
    """Um slot do template.

    `name` é a posição ("1", "2") para texto, ou um nome reservado
    (headerMedia, documentfile, location) para slots especiais.
    """

    name: str = ""
    kind: ParameterKind = ParameterKind.TEXT
    kind_raw: str = Field(default="text", exclude=True)
    text: str = ""
    url: str = ""
    address: str = ""
    latitude: str = ""
    longitude: str = ""

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        data = _normalize_keys(cls, data)
        if isinstance(data, dict) and "kind" in data:
            raw = data["kind"]
            data["kind_raw"] = raw if isinstance(raw, str) else ""
            data["kind"] = ParameterKind.parse(raw)
        return data

    @field_validator("name", "text", "url", "address", "latitude", "longitude", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> Any:
        return _coerce_text(value)

    @property
    def has_text(self) -> bool:
        return bool(self.text)

    @property
    def is_text(self) -> bool:
        return self.kind is ParameterKind.TEXT

    def to_wire(self) -> dict[str, str]:
        """Serializa no formato canônico (camelCase, só campos relevantes)."""
        kind = self.kind_raw if self.kind is ParameterKind.UNKNOWN else self.kind.value
        wire: dict[str, str] = {"name": self.name, "kind": kind, "text": self.text}
        if self.url:
            wire["url"] = self.url
        if self.kind is ParameterKind.LOCATION:
            wire["address"] = self.address
            wire["latitude"] = self.latitude
            wire["longitude"] = self.longitude
        return wire


class TemplateSection(_WireModel):
    """Seção `template` do payload canônico."""

    name: str = ""
    language: str | None = None
    type: str | None = None
    values: list[Parameter] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class TemplateRequest(_WireModel):
    """Requisição canônica de envio de template.

    channel_registration_id é opaco aqui; o parse para UUID acontece no
    momento do envio.
    """

    channel_registration_id: str = Field(default="", alias="channelRegistrationId")
    recipient: str = Field(default="", alias="to")
    template: TemplateSection | None = None

    # Campos de rastreio repassados pelo forwarder
    channel_definition_id: str | None = Field(default=None, alias="channelDefinitionId")
    request_id: str | None = Field(default=None, alias="requestId")
    organization_id: str | None = Field(default=None, alias="organizationId")
    from_address: str | None = Field(default=None, alias="from")

    @field_validator("channel_registration_id", "recipient", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> Any:
        return _coerce_text(value)

    def to_wire(self) -> dict[str, Any]:
        """Serializa no formato canônico enviado ao dispatcher."""
        wire: dict[str, Any] = {
            "channelRegistrationId": self.channel_registration_id,
            "to": self.recipient,
        }
        for key, value in (
            ("channelDefinitionId", self.channel_definition_id),
            ("requestId", self.request_id),
            ("organizationId", self.organization_id),
            ("from", self.from_address),
        ):
            if value is not None:
                wire[key] = value

        if self.template is not None:
            template: dict[str, Any] = {
                "name": self.template.name,
                "language": self.template.language,
            }
            if self.template.type is not None:
                template["type"] = self.template.type
            template["values"] = [value.to_wire() for value in self.template.values]
            wire["template"] = template
        return wire
