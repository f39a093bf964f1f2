"""Cliente CRM em memória: apenas para desenvolvimento e testes."""

from __future__ import annotations

from app.domain.crm import ChannelInstance, FileAttachment
from app.protocols.crm_client import CrmClientProtocol


class MemoryCrmClient(CrmClientProtocol):
    """Registros mantidos em dicionários; todas as consultas são exatas."""

    def __init__(self) -> None:
        self._instances: dict[tuple[str, str], ChannelInstance] = {}
        self._registrations: dict[str, str] = {}
        self._files: dict[str, FileAttachment] = {}
        self._environment: dict[str, str] = {}
        self.environment_lookups = 0

    def add_channel_instance(
        self,
        channel_definition_id: str,
        contact_point: str,
        instance: ChannelInstance,
    ) -> None:
        self._instances[(channel_definition_id.lower(), contact_point)] = instance

    def add_registration(self, extended_entity_id: str, registration_id: str) -> None:
        self._registrations[extended_entity_id.lower()] = registration_id

    def add_file(self, file_id: str, attachment: FileAttachment) -> None:
        self._files[file_id.lower()] = attachment

    def set_environment_variable(self, schema_name: str, value: str) -> None:
        self._environment[schema_name] = value

    async def find_active_channel_instance(
        self,
        channel_definition_id: str,
        contact_point: str,
    ) -> ChannelInstance | None:
        return self._instances.get((channel_definition_id.lower(), contact_point))

    async def get_channel_registration_id(self, extended_entity_id: str) -> str | None:
        return self._registrations.get(extended_entity_id.lower())

    async def get_file(self, file_id: str) -> FileAttachment | None:
        return self._files.get(file_id.lower())

    async def get_environment_variable(self, schema_name: str) -> str | None:
        self.environment_lookups += 1
        return self._environment.get(schema_name)
