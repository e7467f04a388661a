"""Populate subscription emails with dummy data for previews.

Subscription emails need a subscription to render. When the store renders an
email preview there is none, so this adapter listens on the preview filter,
fabricates a subscription (with a product and an address) and attaches it to
the email. While the preview renders, two extra filters make the dummy
subscription look recently ordered and renewable early; both are removed
again once the mail content has been produced.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

import structlog
from dateutil.relativedelta import relativedelta

from subscriptions_preview.emails.models import Email
from subscriptions_preview.emails.registry import (
    AttachmentStrategy,
    EmailRegistry,
    attachment_strategy,
    get_email_registry,
)
from subscriptions_preview.hooks import HookName, HookRegistry, get_hook_registry
from subscriptions_preview.preview.config import DummyDataConfig
from subscriptions_preview.subscriptions.models import Product, Subscription

logger = structlog.get_logger("preview")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SubscriptionEmailPreview:
    """Dummy subscription data for subscription email previews."""

    def __init__(
        self,
        hooks: Optional[HookRegistry] = None,
        registry: Optional[EmailRegistry] = None,
        config: Optional[DummyDataConfig] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the adapter and attach it to the preview filter.

        Args:
            hooks: Hook registry to listen on (defaults to the process registry)
            registry: Registry of recognized subscription emails
            config: Values for the fabricated data
            clock: Returns the current UTC time
        """
        self.hooks = hooks or get_hook_registry()
        self.registry = registry or get_email_registry()
        self.config = config or DummyDataConfig()
        self.clock = clock

        # The email being previewed
        self.email_type: Optional[str] = None

        self.hooks.add_filter(
            HookName.PREPARE_EMAIL_FOR_PREVIEW, self.prepare_email_for_preview
        )

    def prepare_email_for_preview(self, email: Email) -> Email:
        """Attach a dummy subscription to subscription emails.

        Emails that are not subscription emails are returned untouched.
        """
        self.email_type = type(email).__name__

        if not self.is_subscription_email():
            return email

        self.set_up_filters()

        strategy = attachment_strategy(self.email_type)
        if strategy is AttachmentStrategy.AS_LIST:
            email.subscriptions = [self.get_dummy_subscription()]  # type: ignore[attr-defined]
        elif strategy is AttachmentStrategy.AS_SUBJECT:
            email.set_object(self.get_dummy_subscription())

        self.hooks.add_filter(HookName.MAIL_CONTENT, self.clean_up_filters)

        logger.info(
            "preview.prepared",
            email_type=self.email_type,
            attachment=strategy.value if strategy else None,
        )
        return email

    def is_subscription_email(self) -> bool:
        """Check if the email being previewed is a subscription email."""
        return self.email_type is not None and self.registry.is_registered(self.email_type)

    def get_dummy_subscription(self) -> Subscription:
        """Build the dummy subscription, then let integrators replace it."""
        config = self.config
        now = self.clock()
        month_ago = now - relativedelta(months=1)
        week_ahead = now + relativedelta(weeks=1)

        subscription = Subscription()
        product = self.get_dummy_product()

        subscription.add_product(product, config.product_quantity)
        subscription.set_id(config.subscription_id)
        subscription.set_customer_id(config.customer_id)
        subscription.set_date_created(month_ago)
        subscription.set_currency(config.currency)
        subscription.set_total(config.total)
        subscription.set_billing_period(config.billing_period)
        subscription.set_billing_interval(config.billing_interval)
        subscription.set_start_date(month_ago)
        subscription.set_trial_end_date(week_ahead)
        subscription.set_next_payment_date(week_ahead)
        subscription.set_end_date(now + relativedelta(months=1))

        address = self.get_dummy_address()

        subscription.set_billing_address(address)
        subscription.set_shipping_address(address)

        return self.hooks.apply_filters(
            HookName.DUMMY_SUBSCRIPTION, subscription, self.email_type
        )

    def get_dummy_product(self) -> Product:
        """Build the dummy product, then let integrators replace it."""
        product = Product()
        product.set_name(self.config.product_name)
        product.set_price(self.config.product_price)

        return self.hooks.apply_filters(HookName.DUMMY_PRODUCT, product, self.email_type)

    def get_dummy_address(self) -> dict[str, Any]:
        """Build the dummy address, then let integrators replace it."""
        address = dict(self.config.address)

        return self.hooks.apply_filters(HookName.DUMMY_ADDRESS, address, self.email_type)

    def set_up_filters(self) -> None:
        # Cancelled subscription emails show the last order date.
        self.hooks.add_filter(
            HookName.LAST_ORDER_DATE_CREATED,
            self.mock_last_order_date_created,
            accepted_args=2,
        )
        # Renewal notices only offer early renewal when it is allowed.
        self.hooks.add_filter(
            HookName.CAN_USER_RENEW_EARLY,
            self.allow_early_renewals_during_preview,
            accepted_args=3,
        )

    def clean_up_filters(self, preview_content: str) -> str:
        """Remove the preview-only filters once the content is rendered."""
        self.hooks.remove_filter(
            HookName.LAST_ORDER_DATE_CREATED, self.mock_last_order_date_created
        )
        self.hooks.remove_filter(
            HookName.CAN_USER_RENEW_EARLY, self.allow_early_renewals_during_preview
        )
        self.hooks.remove_filter(HookName.MAIL_CONTENT, self.clean_up_filters)

        logger.debug("preview.filters_removed", email_type=self.email_type)
        return preview_content

    def mock_last_order_date_created(
        self, date: Optional[datetime], subscription: Any
    ) -> Optional[datetime]:
        """Report the dummy subscription's last order as created just now."""
        if (
            isinstance(subscription, Subscription)
            and subscription.id == self.config.subscription_id
            and subscription.customer_id == self.config.customer_id
        ):
            return self.clock()

        return date

    def allow_early_renewals_during_preview(
        self, can_renew_early: bool, subscription: Any, user_id: int
    ) -> bool:
        """Let the dummy customer renew early while previewing."""
        if user_id == self.config.customer_id:
            return True

        return can_renew_early
