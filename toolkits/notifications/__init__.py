"""Notification service utilities."""

from .email_service import (
    EmailDeliveryError,
    EmailMessageOptions,
    EmailNotificationService,
    EmailRecipients,
    EmailSettings,
)
from .recipient_config import RecipientConfig, load_recipient_config, resolve_recipients

__all__ = [
    "EmailDeliveryError",
    "EmailNotificationService",
    "EmailSettings",
    "EmailRecipients",
    "EmailMessageOptions",
    "RecipientConfig",
    "load_recipient_config",
    "resolve_recipients",
]
