"""Subscription email classes.

Each class is one transactional email. The class name is the email type the
preview pipeline and the registries key on. Bodies are plain-text
``str.format`` templates filled from :meth:`Email.get_context`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from subscriptions_preview.core.config import Settings, get_settings
from subscriptions_preview.hooks import HookRegistry
from subscriptions_preview.subscriptions.lifecycle import (
    can_user_renew_early,
    get_last_order_date_created,
)
from subscriptions_preview.subscriptions.models import Subscription, format_money


# (label, date name, skipped when unset)
SUMMARY_DATES = [
    ("Start date", "start", False),
    ("Trial end", "trial_end", True),
    ("Next payment", "next_payment", False),
    ("End date", "end", True),
]


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "N/A"
    return f"{value:%B} {value.day}, {value.year}"


def render_subscription_summary(subscription: Subscription) -> str:
    """Plain-text block describing a subscription's items, total and dates."""
    lines = [f"Subscription #{subscription.id}"]
    for item in subscription.line_items:
        subtotal = format_money(item.subtotal, subscription.currency)
        lines.append(f"  {item.name} × {item.quantity}    {subtotal}")
    lines.append(f"  Items: {subscription.item_count}")
    lines.append(
        f"  Recurring total: {subscription.formatted_total} {subscription.billing_schedule}"
    )
    for label, date_type, optional in SUMMARY_DATES:
        date = subscription.get_date(date_type)
        if date is None and optional:
            continue
        lines.append(f"  {label}: {format_date(date)}")
    return "\n".join(lines)


class Email:
    """Base class for every transactional email."""

    id = "email"
    title = ""
    description = ""
    heading = ""
    subject = ""
    customer_email = False
    template = ""

    def __init__(self, recipient: Optional[str] = None):
        self.recipient = recipient
        self.object: Any = None

    @property
    def email_type(self) -> str:
        return type(self).__name__

    def set_object(self, obj: Any) -> None:
        """Set the primary entity the email renders around."""
        self.object = obj

    def get_subject(self, settings: Optional[Settings] = None) -> str:
        settings = settings or get_settings()
        return self.subject.format(site_title=settings.STORE_NAME)

    def get_context(self, hooks: HookRegistry, settings: Settings) -> dict[str, Any]:
        return {"site_title": settings.STORE_NAME}

    def get_content(
        self, hooks: HookRegistry, settings: Optional[Settings] = None
    ) -> str:
        """Render the email as plain text."""
        settings = settings or get_settings()
        context = self.get_context(hooks, settings)
        body = self.template.format(**context)
        footer = f"-- \n{settings.STORE_NAME}"
        return "\n\n".join(part for part in (self.heading, body, footer) if part)


class SubscriptionEmail(Email):
    """An email rendered around a single subscription."""

    def _subscription(self) -> Subscription:
        if not isinstance(self.object, Subscription):
            raise ValueError(f"{self.email_type} has no subscription to render")
        return self.object

    def get_context(self, hooks: HookRegistry, settings: Settings) -> dict[str, Any]:
        context = super().get_context(hooks, settings)
        subscription = self._subscription()
        address = subscription.billing_address
        context.update(
            {
                "customer_name": address.full_name or "Customer",
                "first_name": address.first_name or "there",
                "subscription_id": subscription.id,
                "summary": render_subscription_summary(subscription),
                "billing_address": address.formatted(),
                "total": subscription.formatted_total,
                "schedule": subscription.billing_schedule,
                "next_payment": format_date(subscription.next_payment_date),
                "trial_end": format_date(subscription.trial_end_date),
                "end_date": format_date(subscription.end_date),
            }
        )
        return context


class CancelledSubscriptionEmail(SubscriptionEmail):
    id = "cancelled_subscription"
    title = "Cancelled Subscription"
    description = "Sent to the store manager when a subscription is cancelled."
    heading = "Subscription Cancelled"
    subject = "[{site_title}] Subscription Cancelled"
    template = (
        "A subscription belonging to {customer_name} has been cancelled. "
        "Their subscription's details are as follows:\n\n"
        "{summary}\n\n"
        "Last order date: {last_order_date}\n"
        "End of prepaid term: {end_date}\n\n"
        "Billing address:\n{billing_address}"
    )

    def get_context(self, hooks: HookRegistry, settings: Settings) -> dict[str, Any]:
        context = super().get_context(hooks, settings)
        last_order = get_last_order_date_created(self._subscription(), hooks)
        context["last_order_date"] = format_date(last_order)
        return context


class ExpiredSubscriptionEmail(SubscriptionEmail):
    id = "expired_subscription"
    title = "Expired Subscription"
    description = "Sent to the store manager when a subscription expires."
    heading = "Subscription Expired"
    subject = "[{site_title}] Subscription Expired"
    template = (
        "A subscription belonging to {customer_name} has expired. "
        "Their subscription's details are as follows:\n\n"
        "{summary}\n\n"
        "Billing address:\n{billing_address}"
    )


class OnHoldSubscriptionEmail(SubscriptionEmail):
    id = "suspended_subscription"
    title = "Suspended Subscription"
    description = "Sent to the store manager when a customer suspends a subscription."
    heading = "Subscription Suspended"
    subject = "[{site_title}] Subscription Suspended"
    template = (
        "A subscription belonging to {customer_name} has been suspended by the user. "
        "Their subscription's details are as follows:\n\n"
        "{summary}\n\n"
        "Billing address:\n{billing_address}"
    )


class NotificationEmail(SubscriptionEmail):
    """Reminder sent to the customer ahead of a subscription event."""

    customer_email = True

    def get_context(self, hooks: HookRegistry, settings: Settings) -> dict[str, Any]:
        context = super().get_context(hooks, settings)
        subscription = self._subscription()
        if can_user_renew_early(subscription, subscription.customer_id, hooks, settings):
            context["early_renewal"] = (
                "\n\nWant to renew now? You can renew early from your account: "
                f"/my-account/subscriptions/{subscription.id}/renew-early"
            )
        else:
            context["early_renewal"] = ""
        return context


class AutoTrialExpirationNotificationEmail(NotificationEmail):
    id = "customer_notification_auto_trial_expiry"
    title = "Customer Notification: Free trial expiration: automatic payment notice"
    description = "Sent to the customer before a free trial ends on an automatically renewing subscription."
    heading = "Free trial expiration: automatic payment notice"
    subject = "[{site_title}] Your free trial is ending soon"
    template = (
        "Hi {first_name},\n\n"
        "Your free trial ends on {trial_end}. After that you will be charged "
        "{total} {schedule} automatically.\n\n"
        "{summary}"
    )


class ManualTrialExpirationNotificationEmail(NotificationEmail):
    id = "customer_notification_manual_trial_expiry"
    title = "Customer Notification: Free trial expiration: manual payment required"
    description = "Sent to the customer before a free trial ends on a manually renewing subscription."
    heading = "Free trial expiration: manual payment required"
    subject = "[{site_title}] Your free trial is ending soon"
    template = (
        "Hi {first_name},\n\n"
        "Your free trial ends on {trial_end}. To keep your subscription, "
        "please pay {total} before then.{early_renewal}\n\n"
        "{summary}"
    )


class SubscriptionExpirationNotificationEmail(NotificationEmail):
    id = "customer_notification_subscription_expiry"
    title = "Customer Notification: Subscription expiration notice"
    description = "Sent to the customer before a subscription reaches its end date."
    heading = "Subscription expiration notice"
    subject = "[{site_title}] Your subscription is about to expire"
    template = (
        "Hi {first_name},\n\n"
        "Your subscription will expire on {end_date}.\n\n"
        "{summary}"
    )


class ManualRenewalNotificationEmail(NotificationEmail):
    id = "customer_notification_manual_renewal"
    title = "Customer Notification: Manual renewal notice"
    description = "Sent to the customer before a manual renewal payment is due."
    heading = "Manual renewal notice"
    subject = "[{site_title}] Time to renew your subscription"
    template = (
        "Hi {first_name},\n\n"
        "Your subscription renews on {next_payment}. Please pay {total} "
        "by then to keep it active.{early_renewal}\n\n"
        "{summary}"
    )


class AutoRenewalNotificationEmail(NotificationEmail):
    id = "customer_notification_auto_renewal"
    title = "Customer Notification: Automatic renewal notice"
    description = "Sent to the customer before an automatic renewal payment is taken."
    heading = "Automatic renewal notice"
    subject = "[{site_title}] Your subscription will renew soon"
    template = (
        "Hi {first_name},\n\n"
        "Your subscription will renew automatically on {next_payment} and "
        "you will be charged {total}.{early_renewal}\n\n"
        "{summary}"
    )


class SwitchOrderEmail(Email):
    """Email about an order that switched one or more subscriptions."""

    template = "{intro}\n\n{summaries}"
    intro = ""

    def __init__(self, recipient: Optional[str] = None):
        super().__init__(recipient)
        self.subscriptions: list[Subscription] = []

    def get_context(self, hooks: HookRegistry, settings: Settings) -> dict[str, Any]:
        context = super().get_context(hooks, settings)
        customer = "Customer"
        if self.subscriptions:
            customer = self.subscriptions[0].billing_address.full_name or customer
        context["intro"] = self.intro.format(customer_name=customer)
        context["summaries"] = "\n\n".join(
            render_subscription_summary(s) for s in self.subscriptions
        ) or "No subscriptions were switched."
        return context


class NewSwitchOrderEmail(SwitchOrderEmail):
    id = "new_switch_order"
    title = "Subscription Switched"
    description = "Sent to the store manager when a customer switches subscription items."
    heading = "Subscription Switched"
    subject = "[{site_title}] Subscription Switched"
    intro = "Customer {customer_name} has switched their subscription. The details of their new subscription are as follows:"


class CompletedSwitchOrderEmail(SwitchOrderEmail):
    id = "customer_completed_switch_order"
    title = "Subscription Switch Complete"
    description = "Sent to the customer when their subscription switch order is completed."
    heading = "Your subscription change is complete"
    subject = "[{site_title}] Your subscription change is complete"
    customer_email = True
    intro = "Hi {customer_name}, you have successfully changed your subscription items. Your new subscription details are below."


class RenewalOrderEmail(Email):
    """Email rendered around a renewal order rather than a subscription."""

    template = "{order_details}"

    def get_context(self, hooks: HookRegistry, settings: Settings) -> dict[str, Any]:
        context = super().get_context(hooks, settings)
        if self.object is None:
            context["order_details"] = "Order details will appear here."
        else:
            context["order_details"] = f"Order #{getattr(self.object, 'id', self.object)}"
        return context


class NewRenewalOrderEmail(RenewalOrderEmail):
    id = "new_renewal_order"
    title = "New Renewal Order"
    description = "Sent to the store manager when a renewal order is created."
    heading = "New subscription renewal order"
    subject = "[{site_title}] New subscription renewal order"


class CustomerRenewalInvoiceEmail(RenewalOrderEmail):
    id = "customer_renewal_invoice"
    title = "Customer Renewal Invoice"
    description = "Sent to the customer when a manual renewal order needs payment."
    heading = "Invoice for renewal order"
    subject = "[{site_title}] Invoice for renewal order"
    customer_email = True


class ProcessingRenewalOrderEmail(RenewalOrderEmail):
    id = "customer_processing_renewal_order"
    title = "Processing Renewal order"
    description = "Sent to the customer after a renewal payment is received."
    heading = "Thank you for your order"
    subject = "[{site_title}] Subscription renewal order received"
    customer_email = True


class CompletedRenewalOrderEmail(RenewalOrderEmail):
    id = "customer_completed_renewal_order"
    title = "Completed Renewal Order"
    description = "Sent to the customer when a renewal order is marked complete."
    heading = "Your renewal order is complete"
    subject = "[{site_title}] Your renewal order is complete"
    customer_email = True


class CustomerOnHoldRenewalOrderEmail(RenewalOrderEmail):
    id = "customer_on_hold_renewal_order"
    title = "On-hold Renewal Order"
    description = "Sent to the customer when a renewal order is placed on hold."
    heading = "Thank you for your order"
    subject = "[{site_title}] Your renewal order has been received"
    customer_email = True
