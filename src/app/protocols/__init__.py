"""Protocolos e contratos do core da aplicação."""

from .crm_client import CrmClientProtocol
from .dispatch_client import DispatchClientProtocol, DispatchHttpResponse
from .notification_sender import NotificationSenderProtocol
from .secret_provider import SecretProviderProtocol
from .tracking_store import TrackingStoreProtocol
from .value_cache import OnceValueProtocol

__all__ = [
    "CrmClientProtocol",
    "DispatchClientProtocol",
    "DispatchHttpResponse",
    "NotificationSenderProtocol",
    "OnceValueProtocol",
    "SecretProviderProtocol",
    "TrackingStoreProtocol",
]
