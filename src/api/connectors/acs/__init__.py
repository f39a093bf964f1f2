"""Conector Azure Communication Services (WhatsApp Advanced Messaging)."""

from api.connectors.acs.client import AcsNotificationSender

__all__ = ["AcsNotificationSender"]
