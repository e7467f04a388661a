"""Subscription email classes and the registries that list them.

This module handles:
- Plain-text rendering of subscription and notification emails
- The subscription and notification email registries
- Mapping each email kind to how preview data attaches to it
"""

from subscriptions_preview.emails.models import (
    Email,
    NotificationEmail,
    SubscriptionEmail,
    SwitchOrderEmail,
)
from subscriptions_preview.emails.registry import (
    ATTACHMENT_STRATEGIES,
    AttachmentStrategy,
    EmailDescriptor,
    EmailKind,
    EmailRegistry,
    attachment_strategy,
    get_email_registry,
)

__all__ = [
    "ATTACHMENT_STRATEGIES",
    "AttachmentStrategy",
    "Email",
    "EmailDescriptor",
    "EmailKind",
    "EmailRegistry",
    "NotificationEmail",
    "SubscriptionEmail",
    "SwitchOrderEmail",
    "attachment_strategy",
    "get_email_registry",
]
