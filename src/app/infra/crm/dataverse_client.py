"""Cliente CRM sobre a Dataverse Web API (OData v4) usando httpx.

Consultas:
    - msdyn_channelinstances: instância ativa por definição + contact point
    - <extended_entity_set>: registration id do registro estendido
    - msdyncrm_files: URL, nome e content type de anexos
    - environmentvariabledefinitions: valor atual ou padrão de variável
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Any

import httpx

from app.domain.crm import ChannelInstance, FileAttachment
from app.protocols.crm_client import CrmClientProtocol

if TYPE_CHECKING:
    from config.settings.crm import CrmSettings

logger = logging.getLogger(__name__)

_COMPONENT = "dataverse_client"
_ODATA_HEADERS = {
    "Accept": "application/json",
    "OData-MaxVersion": "4.0",
    "OData-Version": "4.0",
}
_STATE_ACTIVE = 0


def _odata_literal(value: str) -> str:
    """Literal string OData com aspas simples escapadas."""
    return "'" + value.replace("'", "''") + "'"


def _as_guid(value: str) -> str | None:
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError):
        return None


class DataverseCrmClient(CrmClientProtocol):
    """Implementação do CrmClientProtocol via Web API.

    Args:
        settings: Settings do CRM (URL, versão, nomes de entidade)
        access_token: Bearer token já obtido (sem fluxo de autenticação aqui)
        transport: Transport httpx alternativo (testes)
    """

    def __init__(
        self,
        settings: CrmSettings,
        access_token: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._headers = {**_ODATA_HEADERS, "Authorization": f"Bearer {access_token}"}
        self._transport = transport

    async def _get(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any] | None:
        """GET relativo à Web API; 404 vira None, demais erros propagam."""
        async with httpx.AsyncClient(
            base_url=self._settings.api_endpoint + "/",
            headers=self._headers,
            timeout=self._settings.request_timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.get(path, params=params)

        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if response.is_error:
            logger.warning(
                "dataverse_request_failed",
                extra={"component": _COMPONENT, "status_code": response.status_code},
            )
        response.raise_for_status()
        return response.json()

    async def find_active_channel_instance(
        self,
        channel_definition_id: str,
        contact_point: str,
    ) -> ChannelInstance | None:
        definition_guid = _as_guid(channel_definition_id)
        if definition_guid is None or not contact_point:
            return None

        filters = " and ".join(
            (
                f"msdyn_channeldefinitionid eq {definition_guid}",
                f"msdyn_contactpoint eq {_odata_literal(contact_point)}",
                f"statecode eq {_STATE_ACTIVE}",
            )
        )
        data = await self._get(
            "msdyn_channelinstances",
            params={
                "$select": "msdyn_channelinstanceid,msdyn_name,_msdyn_extendedentityid_value",
                "$filter": filters,
                "$top": "1",
            },
        )
        rows = (data or {}).get("value") or []
        if not rows:
            return None

        row = rows[0]
        return ChannelInstance(
            instance_id=str(row.get("msdyn_channelinstanceid") or ""),
            name=str(row.get("msdyn_name") or ""),
            extended_entity_id=row.get("_msdyn_extendedentityid_value"),
        )

    async def get_channel_registration_id(self, extended_entity_id: str) -> str | None:
        entity_guid = _as_guid(extended_entity_id)
        if entity_guid is None:
            return None
        field = self._settings.registration_field
        data = await self._get(
            f"{self._settings.extended_entity_set}({entity_guid})",
            params={"$select": field},
        )
        if data is None:
            return None
        value = data.get(field)
        return str(value) if value else None

    async def get_file(self, file_id: str) -> FileAttachment | None:
        file_guid = _as_guid(file_id)
        if file_guid is None:
            return None
        data = await self._get(
            f"msdyncrm_files({file_guid})",
            params={"$select": "msdyncrm_blobcdnuri,msdyncrm_name,msdyncrm_contenttype"},
        )
        if data is None:
            return None
        return FileAttachment(
            url=str(data.get("msdyncrm_blobcdnuri") or ""),
            file_name=str(data.get("msdyncrm_name") or ""),
            content_type=str(data.get("msdyncrm_contenttype") or ""),
        )

    async def get_environment_variable(self, schema_name: str) -> str | None:
        data = await self._get(
            "environmentvariabledefinitions",
            params={
                "$select": "defaultvalue",
                "$filter": f"schemaname eq {_odata_literal(schema_name)}",
                "$expand": "environmentvariabledefinition_environmentvariablevalue($select=value)",
                "$top": "1",
            },
        )
        rows = (data or {}).get("value") or []
        if not rows:
            return None

        definition = rows[0]
        current_values = definition.get("environmentvariabledefinition_environmentvariablevalue") or []
        for candidate in [*(v.get("value") for v in current_values), definition.get("defaultvalue")]:
            if isinstance(candidate, str) and candidate.strip():
                return candidate.strip()
        return None
