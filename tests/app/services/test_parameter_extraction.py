"""Testes do ParameterExtractor (mensagem do CRM -> parâmetros canônicos)."""

from __future__ import annotations

import pytest

from app.domain.crm import FileAttachment
from app.domain.template_request import ParameterKind
from app.infra.crm import MemoryCrmClient
from app.services.parameter_extraction import ParameterExtractor
from config.settings.forwarder import ForwarderSettings

FILE_ID = "0a0b0c0d-0000-4000-8000-000000000001"
DOC_ID = "0a0b0c0d-0000-4000-8000-000000000002"


class _FailingFileCrm(MemoryCrmClient):
    async def get_file(self, file_id: str) -> FileAttachment | None:
        raise RuntimeError("crm unavailable")


@pytest.fixture
def settings() -> ForwarderSettings:
    return ForwarderSettings(default_latitude="1.5", default_longitude="2.5", default_location_label="Pin")


@pytest.fixture
def crm() -> MemoryCrmClient:
    client = MemoryCrmClient()
    client.add_file(FILE_ID, FileAttachment(url="https://cdn/x/banner.png", file_name="banner.png", content_type="image/png"))
    client.add_file(DOC_ID, FileAttachment(url="https://cdn/x/file", file_name="invoice.pdf", content_type="application/pdf"))
    return client


@pytest.mark.asyncio
async def test_param_fields_become_text_parameters(crm: MemoryCrmClient, settings: ForwarderSettings) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract(
        {"templename": "t", "param1": "Olá", "Param2": 42, "param3": "  ", "param4": None}
    )

    assert [(p.name, p.kind, p.text) for p in params] == [
        ("1", ParameterKind.TEXT, "Olá"),
        ("2", ParameterKind.TEXT, "42"),
    ]


@pytest.mark.asyncio
async def test_header_media_without_text_synthesizes_body(crm: MemoryCrmClient, settings: ForwarderSettings) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract({"templename": "t", "headerMedia": FILE_ID})

    wire = [p.to_wire() for p in params]
    assert {"name": "headerMedia", "kind": "image", "text": "", "url": "https://cdn/x/banner.png"} in wire
    assert {"name": "1", "kind": "text", "text": " "} in wire


@pytest.mark.asyncio
async def test_no_synthetic_body_when_text_exists(crm: MemoryCrmClient, settings: ForwarderSettings) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract({"param1": "hi", "headerMedia": FILE_ID})

    assert [p.name for p in params] == ["1", "headerMedia"]


@pytest.mark.asyncio
async def test_document_uses_file_name_as_text(crm: MemoryCrmClient, settings: ForwarderSettings) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract({"param1": "hi", "documentfile": DOC_ID})

    document = params[-1]
    assert document.name == "documentfile"
    assert document.kind is ParameterKind.DOCUMENT
    assert document.text == "invoice.pdf"
    assert document.url == "https://cdn/x/file"


@pytest.mark.asyncio
async def test_document_is_ignored_when_header_media_is_present(
    crm: MemoryCrmClient, settings: ForwarderSettings
) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract({"param1": "hi", "headerMedia": FILE_ID, "documentfile": DOC_ID})

    assert [p.name for p in params] == ["1", "headerMedia"]


@pytest.mark.asyncio
async def test_unresolvable_header_media_does_not_fall_back_to_document(
    crm: MemoryCrmClient, settings: ForwarderSettings
) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract({"param1": "hi", "headerMedia": "not-a-uuid", "documentfile": DOC_ID})

    assert [p.name for p in params] == ["1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("file_id", ["not-a-guid", "0a0b0c0d-0000-4000-8000-00000000ffff"])
async def test_unresolvable_attachment_is_skipped(
    file_id: str, crm: MemoryCrmClient, settings: ForwarderSettings
) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract({"headerMedia": file_id})

    assert params == []


@pytest.mark.asyncio
async def test_attachment_lookup_failure_degrades_to_no_media(settings: ForwarderSettings) -> None:
    extractor = ParameterExtractor(_FailingFileCrm(), settings)

    params = await extractor.extract({"param1": "hi", "headerMedia": FILE_ID})

    assert [p.name for p in params] == ["1"]


@pytest.mark.asyncio
async def test_attachment_with_blank_url_is_skipped(settings: ForwarderSettings) -> None:
    crm = MemoryCrmClient()
    crm.add_file(FILE_ID, FileAttachment(url="  "))
    extractor = ParameterExtractor(crm, settings)

    assert await extractor.extract({"headerMedia": FILE_ID}) == []


@pytest.mark.asyncio
async def test_location_fields_build_location_parameter(crm: MemoryCrmClient, settings: ForwarderSettings) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract(
        {"locationName": "Loja", "locationAddress": "Rua 1", "latitude": "32.1", "longitude": "34.8"}
    )

    location, synthetic = params
    assert location.kind is ParameterKind.LOCATION
    assert (location.name, location.text, location.address) == ("location", "Loja", "Rua 1")
    assert (location.latitude, location.longitude) == ("32.1", "34.8")
    assert (synthetic.name, synthetic.text) == ("1", " ")


@pytest.mark.asyncio
async def test_location_invalid_coordinates_use_defaults(crm: MemoryCrmClient, settings: ForwarderSettings) -> None:
    extractor = ParameterExtractor(crm, settings)

    params = await extractor.extract({"param1": "x", "locationAddress": "Rua 1", "latitude": "north"})

    location = params[-1]
    assert location.text == "Pin"
    assert (location.latitude, location.longitude) == ("1.5", "2.5")


@pytest.mark.asyncio
async def test_message_without_parameters_yields_empty_list(
    crm: MemoryCrmClient, settings: ForwarderSettings
) -> None:
    extractor = ParameterExtractor(crm, settings)

    assert await extractor.extract({"templename": "t", "language": "he"}) == []
