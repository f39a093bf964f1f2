"""Mapeamento do BuiltTemplate para os modelos do SDK de Advanced Messaging."""

from __future__ import annotations

from azure.communication.messages.models import (
    MessageTemplate,
    MessageTemplateDocument,
    MessageTemplateImage,
    MessageTemplateLocation,
    MessageTemplateQuickAction,
    MessageTemplateText,
    MessageTemplateValue,
    MessageTemplateVideo,
    WhatsAppMessageButtonSubType,
    WhatsAppMessageTemplateBindings,
    WhatsAppMessageTemplateBindingsButton,
    WhatsAppMessageTemplateBindingsComponent,
)

from app.domain.template_binding import (
    BoundValue,
    BuiltTemplate,
    ButtonSubType,
    TemplateBindings,
    ValueVariant,
)

_BUTTON_SUB_TYPES = {
    ButtonSubType.URL: WhatsAppMessageButtonSubType.URL,
    ButtonSubType.QUICK_REPLY: WhatsAppMessageButtonSubType.QUICK_REPLY,
}


def to_sdk_value(value: BoundValue) -> MessageTemplateValue:
    """Converte um BoundValue na variante correspondente do SDK."""
    if value.variant is ValueVariant.TEXT:
        return MessageTemplateText(name=value.name, text=value.text or "")
    if value.variant is ValueVariant.IMAGE:
        return MessageTemplateImage(name=value.name, url=value.url)
    if value.variant is ValueVariant.VIDEO:
        return MessageTemplateVideo(name=value.name, url=value.url)
    if value.variant is ValueVariant.DOCUMENT:
        return MessageTemplateDocument(name=value.name, url=value.url)
    if value.variant is ValueVariant.QUICK_ACTION:
        return MessageTemplateQuickAction(name=value.name, text=value.text)
    if value.variant is ValueVariant.LOCATION:
        location = MessageTemplateLocation(
            name=value.name,
            location_name=value.location_name,
            address=value.address,
        )
        if value.has_point:
            location.latitude = value.latitude
            location.longitude = value.longitude
        return location
    msg = f"Unsupported value variant: {value.variant}"
    raise ValueError(msg)


def to_sdk_bindings(bindings: TemplateBindings) -> WhatsAppMessageTemplateBindings:
    return WhatsAppMessageTemplateBindings(
        body=[WhatsAppMessageTemplateBindingsComponent(ref_value=b.ref_value) for b in bindings.body],
        header=[
            WhatsAppMessageTemplateBindingsComponent(ref_value=b.ref_value) for b in bindings.header
        ],
        buttons=[
            WhatsAppMessageTemplateBindingsButton(
                sub_type=_BUTTON_SUB_TYPES[b.sub_type],
                ref_value=b.ref_value,
            )
            for b in bindings.buttons
        ],
    )


def to_sdk_template(template: BuiltTemplate) -> MessageTemplate:
    """Monta o MessageTemplate; bindings só quando há algum."""
    sdk_template = MessageTemplate(name=template.name, language=template.language)
    if template.bindings is not None:
        sdk_template.template_values = [to_sdk_value(v) for v in template.values]
        sdk_template.bindings = to_sdk_bindings(template.bindings)
    return sdk_template
