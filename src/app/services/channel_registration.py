"""Lookup do channel registration id em duas etapas.

1. Channel instance ativa por (definition id, contact point)
2. Registro estendido vinculado -> registration id
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging import mask_address
from utils.errors import NotFoundError

if TYPE_CHECKING:
    from app.protocols.crm_client import CrmClientProtocol

logger = logging.getLogger(__name__)


async def resolve_channel_registration_id(
    crm_client: CrmClientProtocol,
    channel_definition_id: str,
    from_address: str,
) -> str:
    """Retorna o registration id do canal de envio.

    Raises:
        NotFoundError: Instância, registro estendido ou id ausentes
    """
    instance = await crm_client.find_active_channel_instance(channel_definition_id, from_address)
    if instance is None:
        logger.warning(
            "channel_instance_not_found",
            extra={
                "channel_definition_id": channel_definition_id,
                "contact_point": mask_address(from_address),
            },
        )
        raise NotFoundError(
            f"Channel Registration ID not found for channel instance: {mask_address(from_address)}"
        )

    if not instance.extended_entity_id:
        logger.warning("channel_instance_without_extension", extra={"instance_id": instance.instance_id})
        raise NotFoundError(
            f"Channel instance {instance.instance_id} has no linked extended record"
        )

    registration_id = await crm_client.get_channel_registration_id(instance.extended_entity_id)
    if not registration_id or not registration_id.strip():
        raise NotFoundError(
            f"Channel Registration ID not found for channel instance: {mask_address(from_address)}"
        )

    logger.info("channel_registration_resolved", extra={"instance_id": instance.instance_id})
    return registration_id.strip()
