"""Use cases do lado CRM (forwarder)."""

from app.use_cases.crm.forward_outbound_message import ForwardOutboundMessageUseCase

__all__ = ["ForwardOutboundMessageUseCase"]
