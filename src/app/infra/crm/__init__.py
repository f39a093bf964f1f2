"""CRM: clientes concretos do CRM usados pelo forwarder.

Módulos disponíveis:
    - dataverse_client: Dataverse Web API (OData) via httpx
    - memory_crm: Cliente em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.crm.dataverse_client import DataverseCrmClient
from app.infra.crm.memory_crm import MemoryCrmClient

__all__ = ["DataverseCrmClient", "MemoryCrmClient"]
