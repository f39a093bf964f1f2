"""Testes do modelo canônico TemplateRequest."""

from __future__ import annotations

from app.domain.template_request import Parameter, ParameterKind, TemplateRequest


class TestParameterKind:
    def test_parse_is_case_insensitive(self) -> None:
        assert ParameterKind.parse("TEXT") is ParameterKind.TEXT
        assert ParameterKind.parse("buttonurl") is ParameterKind.BUTTON_URL
        assert ParameterKind.parse(" QuickAction ") is ParameterKind.QUICK_ACTION

    def test_unknown_values_become_unknown(self) -> None:
        assert ParameterKind.parse("sticker") is ParameterKind.UNKNOWN
        assert ParameterKind.parse(None) is ParameterKind.UNKNOWN
        assert ParameterKind.parse(3) is ParameterKind.UNKNOWN

    def test_button_action_kinds(self) -> None:
        assert ParameterKind.BUTTON_URL.is_button_action
        assert ParameterKind.QUICK_ACTION.is_button_action
        assert not ParameterKind.TEXT.is_button_action


class TestParameter:
    def test_missing_kind_defaults_to_text(self) -> None:
        param = Parameter.model_validate({"name": "1", "text": "Olá"})
        assert param.kind is ParameterKind.TEXT
        assert param.is_text
        assert param.has_text

    def test_explicit_null_kind_is_unknown(self) -> None:
        param = Parameter.model_validate({"name": "1", "kind": None, "text": "x"})
        assert param.kind is ParameterKind.UNKNOWN
        assert not param.is_text

    def test_keys_are_matched_case_insensitively(self) -> None:
        param = Parameter.model_validate({"Name": "headerMedia", "KIND": "image", "Url": "https://x/a.png"})
        assert param.name == "headerMedia"
        assert param.kind is ParameterKind.IMAGE
        assert param.url == "https://x/a.png"

    def test_null_text_becomes_empty(self) -> None:
        param = Parameter.model_validate({"name": "1", "kind": "text", "text": None})
        assert param.text == ""
        assert not param.has_text

    def test_numeric_fields_are_coerced_to_string(self) -> None:
        param = Parameter.model_validate(
            {"name": 1, "kind": "location", "latitude": 32.1, "longitude": 34}
        )
        assert param.name == "1"
        assert param.latitude == "32.1"
        assert param.longitude == "34"

    def test_to_wire_keeps_unknown_kind_verbatim(self) -> None:
        param = Parameter.model_validate({"name": "1", "kind": "sticker", "text": "x"})
        assert param.to_wire() == {"name": "1", "kind": "sticker", "text": "x"}

    def test_to_wire_location_carries_point(self) -> None:
        param = Parameter(
            name="location",
            kind=ParameterKind.LOCATION,
            text="Loja",
            address="Rua 1",
            latitude="32.0",
            longitude="34.7",
        )
        assert param.to_wire() == {
            "name": "location",
            "kind": "location",
            "text": "Loja",
            "address": "Rua 1",
            "latitude": "32.0",
            "longitude": "34.7",
        }


class TestTemplateRequest:
    def test_accepts_pascal_case_keys(self) -> None:
        request = TemplateRequest.model_validate(
            {
                "ChannelRegistrationId": "11111111-1111-1111-1111-111111111111",
                "To": "+972501234567",
                "Template": {"Name": "order_update", "Language": "he", "Values": None},
            }
        )
        assert request.channel_registration_id == "11111111-1111-1111-1111-111111111111"
        assert request.recipient == "+972501234567"
        assert request.template is not None
        assert request.template.name == "order_update"
        assert request.template.values == []

    def test_ignores_unknown_fields(self) -> None:
        request = TemplateRequest.model_validate(
            {"to": "+1", "template": {"name": "t"}, "extra": {"nested": True}}
        )
        assert request.recipient == "+1"

    def test_to_wire_uses_camel_case_and_skips_missing_optionals(self) -> None:
        request = TemplateRequest.model_validate(
            {
                "channelRegistrationId": "abc",
                "to": "+1",
                "requestId": "req-1",
                "from": "+2",
                "template": {
                    "name": "t",
                    "language": "en",
                    "values": [{"name": "1", "kind": "text", "text": "a"}],
                },
            }
        )
        assert request.to_wire() == {
            "channelRegistrationId": "abc",
            "to": "+1",
            "requestId": "req-1",
            "from": "+2",
            "template": {
                "name": "t",
                "language": "en",
                "values": [{"name": "1", "kind": "text", "text": "a"}],
            },
        }
