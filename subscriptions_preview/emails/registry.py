"""Registries of subscription email classes.

Two registries are kept, as the store keeps them: one for the transactional
subscription emails and one for the customer notification (reminder) emails.
Both map an email type (the email class name) to its class.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from subscriptions_preview.core.exceptions import UnknownEmailTypeError
from subscriptions_preview.emails.models import (
    AutoRenewalNotificationEmail,
    AutoTrialExpirationNotificationEmail,
    CancelledSubscriptionEmail,
    CompletedRenewalOrderEmail,
    CompletedSwitchOrderEmail,
    CustomerOnHoldRenewalOrderEmail,
    CustomerRenewalInvoiceEmail,
    Email,
    ExpiredSubscriptionEmail,
    ManualRenewalNotificationEmail,
    ManualTrialExpirationNotificationEmail,
    NewRenewalOrderEmail,
    NewSwitchOrderEmail,
    OnHoldSubscriptionEmail,
    ProcessingRenewalOrderEmail,
    SubscriptionExpirationNotificationEmail,
)


class EmailKind(str, Enum):
    """Every email type shipped with the subscriptions extension."""

    NEW_RENEWAL_ORDER = "NewRenewalOrderEmail"
    CUSTOMER_RENEWAL_INVOICE = "CustomerRenewalInvoiceEmail"
    PROCESSING_RENEWAL_ORDER = "ProcessingRenewalOrderEmail"
    COMPLETED_RENEWAL_ORDER = "CompletedRenewalOrderEmail"
    CUSTOMER_ON_HOLD_RENEWAL_ORDER = "CustomerOnHoldRenewalOrderEmail"
    NEW_SWITCH_ORDER = "NewSwitchOrderEmail"
    COMPLETED_SWITCH_ORDER = "CompletedSwitchOrderEmail"
    CANCELLED_SUBSCRIPTION = "CancelledSubscriptionEmail"
    EXPIRED_SUBSCRIPTION = "ExpiredSubscriptionEmail"
    ON_HOLD_SUBSCRIPTION = "OnHoldSubscriptionEmail"
    AUTO_TRIAL_EXPIRATION = "AutoTrialExpirationNotificationEmail"
    MANUAL_TRIAL_EXPIRATION = "ManualTrialExpirationNotificationEmail"
    SUBSCRIPTION_EXPIRATION = "SubscriptionExpirationNotificationEmail"
    MANUAL_RENEWAL = "ManualRenewalNotificationEmail"
    AUTO_RENEWAL = "AutoRenewalNotificationEmail"


class AttachmentStrategy(str, Enum):
    """How a preview subscription is attached to an email."""

    AS_LIST = "as_list"  # email.subscriptions = [subscription]
    AS_SUBJECT = "as_subject"  # email.set_object(subscription)


# Renewal order emails render around an order, so they have no entry here.
ATTACHMENT_STRATEGIES: dict[EmailKind, AttachmentStrategy] = {
    EmailKind.NEW_SWITCH_ORDER: AttachmentStrategy.AS_LIST,
    EmailKind.COMPLETED_SWITCH_ORDER: AttachmentStrategy.AS_LIST,
    EmailKind.CANCELLED_SUBSCRIPTION: AttachmentStrategy.AS_SUBJECT,
    EmailKind.EXPIRED_SUBSCRIPTION: AttachmentStrategy.AS_SUBJECT,
    EmailKind.ON_HOLD_SUBSCRIPTION: AttachmentStrategy.AS_SUBJECT,
    EmailKind.AUTO_TRIAL_EXPIRATION: AttachmentStrategy.AS_SUBJECT,
    EmailKind.MANUAL_TRIAL_EXPIRATION: AttachmentStrategy.AS_SUBJECT,
    EmailKind.SUBSCRIPTION_EXPIRATION: AttachmentStrategy.AS_SUBJECT,
    EmailKind.MANUAL_RENEWAL: AttachmentStrategy.AS_SUBJECT,
    EmailKind.AUTO_RENEWAL: AttachmentStrategy.AS_SUBJECT,
}


def _by_class_name(*classes: type[Email]) -> dict[str, type[Email]]:
    return {cls.__name__: cls for cls in classes}


SUBSCRIPTION_EMAIL_CLASSES: dict[str, type[Email]] = _by_class_name(
    NewRenewalOrderEmail,
    CustomerRenewalInvoiceEmail,
    ProcessingRenewalOrderEmail,
    CompletedRenewalOrderEmail,
    CustomerOnHoldRenewalOrderEmail,
    NewSwitchOrderEmail,
    CompletedSwitchOrderEmail,
    CancelledSubscriptionEmail,
    ExpiredSubscriptionEmail,
    OnHoldSubscriptionEmail,
)

NOTIFICATION_EMAIL_CLASSES: dict[str, type[Email]] = _by_class_name(
    AutoTrialExpirationNotificationEmail,
    ManualTrialExpirationNotificationEmail,
    SubscriptionExpirationNotificationEmail,
    ManualRenewalNotificationEmail,
    AutoRenewalNotificationEmail,
)


def attachment_strategy(email_type: str) -> Optional[AttachmentStrategy]:
    """Return how a preview subscription attaches to ``email_type``, if at all."""
    try:
        kind = EmailKind(email_type)
    except ValueError:
        return None
    return ATTACHMENT_STRATEGIES.get(kind)


class EmailDescriptor(BaseModel):
    """Public description of a registered email."""

    email_type: str = Field(..., description="Email class name")
    id: str = Field(..., description="Email ID used in settings")
    title: str = Field(..., description="Title shown in the email settings list")
    description: str = Field(default="", description="When the email is sent")
    customer_email: bool = Field(default=False, description="Sent to the customer")
    notification: bool = Field(default=False, description="Customer reminder email")
    attachment: Optional[AttachmentStrategy] = Field(
        default=None, description="How preview data is attached"
    )


class EmailRegistry:
    """Merged view over the subscription and notification email registries."""

    def __init__(
        self,
        subscription_emails: Optional[Mapping[str, type[Email]]] = None,
        notification_emails: Optional[Mapping[str, type[Email]]] = None,
    ):
        """Initialize registry.

        Args:
            subscription_emails: Transactional subscription emails by type
            notification_emails: Customer notification emails by type
        """
        self.subscription_emails: dict[str, type[Email]] = dict(
            SUBSCRIPTION_EMAIL_CLASSES if subscription_emails is None else subscription_emails
        )
        self.notification_emails: dict[str, type[Email]] = dict(
            NOTIFICATION_EMAIL_CLASSES if notification_emails is None else notification_emails
        )

    def register(self, email_class: type[Email], notification: bool = False) -> None:
        """Add an email class under its class name."""
        target = self.notification_emails if notification else self.subscription_emails
        target[email_class.__name__] = email_class

    def is_registered(self, email_type: str) -> bool:
        return email_type in self.subscription_emails or email_type in self.notification_emails

    def recognized_kinds(self) -> frozenset[str]:
        return frozenset(self.subscription_emails) | frozenset(self.notification_emails)

    def get_email_class(self, email_type: str) -> type[Email]:
        email_class = self.subscription_emails.get(email_type) or self.notification_emails.get(
            email_type
        )
        if email_class is None:
            raise UnknownEmailTypeError(email_type)
        return email_class

    def create_email(self, email_type: str, recipient: Optional[str] = None) -> Email:
        return self.get_email_class(email_type)(recipient=recipient)

    def descriptor(self, email_type: str) -> EmailDescriptor:
        email_class = self.get_email_class(email_type)
        return EmailDescriptor(
            email_type=email_type,
            id=email_class.id,
            title=email_class.title,
            description=email_class.description,
            customer_email=email_class.customer_email,
            notification=email_type in self.notification_emails,
            attachment=attachment_strategy(email_type),
        )

    def descriptors(self) -> list[EmailDescriptor]:
        """Describe every registered email, ordered by title."""
        return sorted(
            (self.descriptor(email_type) for email_type in self.recognized_kinds()),
            key=lambda d: d.title,
        )


# Process-wide registry
_registry: Optional[EmailRegistry] = None


def get_email_registry() -> EmailRegistry:
    """Get or create the process-wide email registry."""
    global _registry
    if _registry is None:
        _registry = EmailRegistry()
    return _registry
