"""Construção do modelo de binding/valores a partir do TemplateRequest.

Transformação pura (sem IO): recebe nome, idioma e parâmetros e devolve um
TemplateBuildResult. URL de mídia inválida volta como MediaUrlError tipado,
nunca como exceção.

Regras:
    1. Template de botão (política nomeada) -> body "1" + quick-action "2"
    2. Demais templates -> um body por parâmetro de texto não vazio
    3. Header -> primeiro slot reservado com URL (ou location)
    4. Bindings só são anexados se algum foi produzido
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Protocol

from pydantic import AnyUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.domain.template_binding import (
    BODY_POSITION,
    BUTTON_POSITION,
    HEADER_POSITION,
    BindingComponent,
    BindingsAccumulator,
    BoundValue,
    BuiltTemplate,
    ButtonBinding,
    ButtonSubType,
    MediaUrlError,
    TemplateBuildResult,
    ValueVariant,
)
from app.domain.template_request import (
    BUTTON_URL_NAME,
    HEADER_MEDIA,
    HEADER_SLOT_NAMES,
    Parameter,
    ParameterKind,
)

logger = logging.getLogger(__name__)

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)

_MEDIA_VARIANTS: dict[ParameterKind, ValueVariant] = {
    ParameterKind.VIDEO: ValueVariant.VIDEO,
    ParameterKind.DOCUMENT: ValueVariant.DOCUMENT,
}


class ButtonTemplatePolicy(Protocol):
    """Decide se o template usa o fluxo de botão URL."""

    def is_button_template(self, template_name: str) -> bool: ...


class NameContainsLinkPolicy:
    """Convenção legada: templates de botão têm "link" no nome."""

    marker = "link"

    def is_button_template(self, template_name: str) -> bool:
        return self.marker in template_name.lower()


def _parse_coordinate(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except (AttributeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def _validate_media_url(url: str) -> MediaUrlError | None:
    try:
        _URL_ADAPTER.validate_python(url)
    except PydanticValidationError as exc:
        errors = exc.errors()
        reason = errors[0]["msg"] if errors else "invalid URL"
        return MediaUrlError(url=url, reason=reason)
    return None


class TemplateBuilder:
    """Monta BuiltTemplate a partir dos parâmetros canônicos.

    Args:
        button_policy: Estratégia de detecção de template de botão
    """

    def __init__(self, button_policy: ButtonTemplatePolicy | None = None) -> None:
        self._button_policy = button_policy or NameContainsLinkPolicy()

    def build(
        self,
        template_name: str,
        language: str,
        parameters: Sequence[Parameter],
    ) -> TemplateBuildResult:
        """Constrói o template.

        Args:
            template_name: Nome registrado no provedor
            language: Código de idioma
            parameters: Parâmetros na ordem recebida

        Returns:
            TemplateBuildResult com template ou MediaUrlError
        """
        acc = BindingsAccumulator()
        is_button = self._button_policy.is_button_template(template_name)

        if is_button:
            self._assemble_button_body(parameters, acc)
        else:
            self._assemble_body(parameters, acc)

        error = self._assemble_header(parameters, acc)
        if error is not None:
            logger.warning(
                "template_media_url_invalid",
                extra={"template_name": template_name, "reason": error.reason},
            )
            return TemplateBuildResult(error=error)

        values, bindings = acc.freeze()
        logger.info(
            "template_built",
            extra={
                "template_name": template_name,
                "is_button_template": is_button,
                "body_bindings": len(acc.body),
                "header_bindings": len(acc.header),
                "button_bindings": len(acc.buttons),
            },
        )
        return TemplateBuildResult(
            template=BuiltTemplate(
                name=template_name,
                language=language,
                values=values,
                bindings=bindings,
            )
        )

    @staticmethod
    def _assemble_button_body(parameters: Sequence[Parameter], acc: BindingsAccumulator) -> None:
        texts = [p for p in parameters if p.is_text and p.has_text]

        if texts:
            acc.body.append(BindingComponent(ref_value=BODY_POSITION))
            acc.values.append(
                BoundValue(name=BODY_POSITION, variant=ValueVariant.TEXT, text=texts[0].text)
            )

        button_param = next(
            (p for p in parameters if p.kind.is_button_action or p.name == BUTTON_URL_NAME),
            None,
        )
        if button_param is None and len(texts) > 1:
            button_param = texts[1]

        if button_param is None:
            logger.warning("button_template_without_button_value")
            return

        acc.buttons.append(ButtonBinding(sub_type=ButtonSubType.URL, ref_value=BUTTON_POSITION))
        acc.values.append(
            BoundValue(
                name=BUTTON_POSITION,
                variant=ValueVariant.QUICK_ACTION,
                text=button_param.text,
            )
        )

    @staticmethod
    def _assemble_body(parameters: Sequence[Parameter], acc: BindingsAccumulator) -> None:
        for param in parameters:
            if not (param.is_text and param.has_text) or param.name == HEADER_MEDIA:
                continue
            acc.body.append(BindingComponent(ref_value=param.name))
            acc.values.append(
                BoundValue(name=param.name, variant=ValueVariant.TEXT, text=param.text)
            )

    @staticmethod
    def _assemble_header(
        parameters: Sequence[Parameter],
        acc: BindingsAccumulator,
    ) -> MediaUrlError | None:
        media = next(
            (
                p
                for p in parameters
                if p.name in HEADER_SLOT_NAMES and (p.url or p.kind is ParameterKind.LOCATION)
            ),
            None,
        )
        if media is None:
            return None

        if media.kind is ParameterKind.LOCATION:
            latitude = _parse_coordinate(media.latitude)
            longitude = _parse_coordinate(media.longitude)
            if latitude is None or longitude is None:
                latitude = longitude = None
                logger.info("location_point_omitted")
            acc.header.append(BindingComponent(ref_value=HEADER_POSITION))
            acc.values.append(
                BoundValue(
                    name=HEADER_POSITION,
                    variant=ValueVariant.LOCATION,
                    location_name=media.text,
                    address=media.address or "",
                    latitude=latitude,
                    longitude=longitude,
                )
            )
            return None

        error = _validate_media_url(media.url)
        if error is not None:
            return error

        variant = _MEDIA_VARIANTS.get(media.kind, ValueVariant.IMAGE)
        acc.header.append(BindingComponent(ref_value=HEADER_POSITION))
        acc.values.append(BoundValue(name=HEADER_POSITION, variant=variant, url=media.url))
        return None
