"""Modelo de binding/valores do template no formato do provedor.

Estrutura intermediária entre o TemplateRequest canônico e os modelos do SDK.
Imutável para garantir que construir duas vezes a partir da mesma entrada
produza saídas comparáveis por igualdade.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

HEADER_POSITION = "header"
BODY_POSITION = "1"
BUTTON_POSITION = "2"


class ValueVariant(StrEnum):
    """Variantes de valor aceitas pelo provedor."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    LOCATION = "location"
    QUICK_ACTION = "quick_action"


class ButtonSubType(StrEnum):
    URL = "url"
    QUICK_REPLY = "quick_reply"


@dataclass(frozen=True, slots=True)
class BindingComponent:
    """Referência de um componente (body/header) a uma posição de valor."""

    ref_value: str


@dataclass(frozen=True, slots=True)
class ButtonBinding:
    sub_type: ButtonSubType
    ref_value: str


@dataclass(frozen=True, slots=True)
class BoundValue:
    """Valor associado a uma posição do template.

    Só os campos da variante são preenchidos; latitude/longitude ficam None
    quando a coordenada não pôde ser interpretada.
    """

    name: str
    variant: ValueVariant
    text: str | None = None
    url: str | None = None
    location_name: str | None = None
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def has_point(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True, slots=True)
class TemplateBindings:
    body: tuple[BindingComponent, ...] = ()
    header: tuple[BindingComponent, ...] = ()
    buttons: tuple[ButtonBinding, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.body or self.header or self.buttons)


@dataclass(frozen=True, slots=True)
class BuiltTemplate:
    """Template pronto para envio.

    `bindings` é None quando nenhum valor foi produzido; o provedor rejeita
    coleções de binding vazias.
    """

    name: str
    language: str
    values: tuple[BoundValue, ...] = ()
    bindings: TemplateBindings | None = None


@dataclass(frozen=True, slots=True)
class MediaUrlError:
    """URL de mídia inválida no header (resultado tipado, não exceção)."""

    url: str
    reason: str

    def __str__(self) -> str:
        return f"Invalid media URL '{self.url}': {self.reason}"


@dataclass(frozen=True, slots=True)
class TemplateBuildResult:
    """Resultado da construção: template ou erro de URL de mídia."""

    template: BuiltTemplate | None = None
    error: MediaUrlError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.template is not None


@dataclass(slots=True)
class BindingsAccumulator:
    """Acumulador mutável usado durante a construção."""

    body: list[BindingComponent] = field(default_factory=list)
    header: list[BindingComponent] = field(default_factory=list)
    buttons: list[ButtonBinding] = field(default_factory=list)
    values: list[BoundValue] = field(default_factory=list)

    def freeze(self) -> tuple[tuple[BoundValue, ...], TemplateBindings | None]:
        bindings = TemplateBindings(
            body=tuple(self.body),
            header=tuple(self.header),
            buttons=tuple(self.buttons),
        )
        return tuple(self.values), (None if bindings.is_empty else bindings)
