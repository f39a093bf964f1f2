"""Protocolo do cliente CRM usado pelo forwarder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.crm import ChannelInstance, FileAttachment


class CrmClientProtocol(Protocol):
    """Consultas ao CRM necessárias para montar o payload canônico.

    Retornos None significam "registro não encontrado"; exceções indicam
    falha de transporte.
    """

    async def find_active_channel_instance(
        self,
        channel_definition_id: str,
        contact_point: str,
    ) -> ChannelInstance | None: ...

    async def get_channel_registration_id(self, extended_entity_id: str) -> str | None: ...

    async def get_file(self, file_id: str) -> FileAttachment | None: ...

    async def get_environment_variable(self, schema_name: str) -> str | None: ...
