"""Extração dos parâmetros canônicos a partir da mensagem do CRM.

Ordem de extração:
    1. Campos `param<N>` -> texto na posição <N>
    2. `headerMedia` -> mídia resolvida via CRM (text vazio)
    3. Sem `headerMedia`: `documentfile` -> mídia (text = nome do arquivo)
    4. Campos de localização -> um parâmetro `location`
    5. Mídia/location sem texto -> corpo sintético {"1", text, " "}

Falhas na resolução de anexos degradam para "sem mídia" com warning.
"""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from app.domain.crm import read_field
from app.domain.template_request import (
    DOCUMENT_FILE,
    HEADER_MEDIA,
    LOCATION,
    Parameter,
    ParameterKind,
)
from app.services.media_type import infer_media_kind
from config.logging import log_fallback

if TYPE_CHECKING:
    from app.domain.crm import FileAttachment
    from app.protocols.crm_client import CrmClientProtocol
    from config.settings.forwarder import ForwarderSettings

logger = logging.getLogger(__name__)

PARAM_PREFIX = "param"
SYNTHETIC_BODY_TEXT = " "


def _is_coordinate(raw: str) -> bool:
    try:
        return math.isfinite(float(raw))
    except ValueError:
        return False


class ParameterExtractor:
    """Monta a lista de Parameter a partir do objeto `Message` do CRM.

    Args:
        crm_client: Cliente CRM para metadados de arquivos
        settings: Settings do forwarder (coordenadas e rótulo padrão)
    """

    def __init__(self, crm_client: CrmClientProtocol, settings: ForwarderSettings) -> None:
        self._crm = crm_client
        self._settings = settings

    async def extract(self, message: Mapping[str, Any]) -> list[Parameter]:
        params = self._text_parameters(message)
        added_attachment = False

        # documentfile só é lido quando a mensagem não traz headerMedia
        if read_field(message, HEADER_MEDIA):
            media = await self._media_parameter(message, HEADER_MEDIA, use_file_name=False)
        else:
            media = await self._media_parameter(message, DOCUMENT_FILE, use_file_name=True)
        if media is not None:
            params.append(media)
            added_attachment = True

        location = self._location_parameter(message)
        if location is not None:
            params.append(location)
            added_attachment = True

        if added_attachment and not any(p.is_text for p in params):
            log_fallback(logger, "synthetic_body", reason="media_without_text")
            params.append(
                Parameter(name="1", kind=ParameterKind.TEXT, text=SYNTHETIC_BODY_TEXT)
            )

        logger.debug("parameters_extracted", extra={"count": len(params)})
        return params

    @staticmethod
    def _text_parameters(message: Mapping[str, Any]) -> list[Parameter]:
        params: list[Parameter] = []
        for key, value in message.items():
            key = str(key)
            if not key.lower().startswith(PARAM_PREFIX):
                continue
            if value is None or isinstance(value, dict | list | bool):
                continue
            text = str(value)
            if not text.strip():
                continue
            params.append(
                Parameter(name=key[len(PARAM_PREFIX):], kind=ParameterKind.TEXT, text=text)
            )
        return params

    async def _media_parameter(
        self,
        message: Mapping[str, Any],
        field_name: str,
        *,
        use_file_name: bool,
    ) -> Parameter | None:
        file_id = read_field(message, field_name)
        if not file_id:
            return None

        attachment = await self._resolve_file(file_id, field_name)
        if attachment is None:
            return None

        kind = infer_media_kind(attachment.content_type, attachment.url)
        logger.info("media_parameter_added", extra={"slot": field_name, "kind": kind.value})
        return Parameter(
            name=field_name,
            kind=kind,
            text=attachment.file_name if use_file_name else "",
            url=attachment.url,
        )

    async def _resolve_file(self, file_id: str, field_name: str) -> FileAttachment | None:
        try:
            uuid.UUID(file_id)
        except ValueError:
            logger.warning("attachment_id_invalid", extra={"slot": field_name})
            return None

        try:
            attachment = await self._crm.get_file(file_id)
        except Exception as exc:
            logger.warning(
                "attachment_lookup_failed",
                extra={"slot": field_name, "error_type": type(exc).__name__, "error": str(exc)},
            )
            return None

        if attachment is None or not attachment.url.strip():
            logger.warning("attachment_url_missing", extra={"slot": field_name})
            return None
        return attachment

    def _location_parameter(self, message: Mapping[str, Any]) -> Parameter | None:
        label = read_field(message, "locationName")
        address = read_field(message, "locationAddress")
        latitude = read_field(message, "latitude")
        longitude = read_field(message, "longitude")

        if not any((label, address, latitude, longitude)):
            return None

        if not (_is_coordinate(latitude) and _is_coordinate(longitude)):
            log_fallback(logger, "location_coordinates", reason="missing_or_invalid")
            latitude = self._settings.default_latitude
            longitude = self._settings.default_longitude

        return Parameter(
            name=LOCATION,
            kind=ParameterKind.LOCATION,
            text=label or self._settings.default_location_label,
            address=address,
            latitude=latitude,
            longitude=longitude,
        )
