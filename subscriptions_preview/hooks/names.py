"""Hook names used across the preview pipeline."""

from __future__ import annotations

from enum import Enum


class HookName(str, Enum):
    """Filters dispatched through the hook registry."""

    # Host preview pipeline
    PREPARE_EMAIL_FOR_PREVIEW = "woocommerce_prepare_email_for_preview"
    MAIL_CONTENT = "woocommerce_mail_content"

    # Integrator overrides for the fabricated preview data
    DUMMY_SUBSCRIPTION = "woocommerce_subscriptions_email_preview_dummy_subscription"
    DUMMY_PRODUCT = "woocommerce_subscriptions_email_preview_dummy_product"
    DUMMY_ADDRESS = "woocommerce_subscriptions_email_preview_dummy_address"

    # Subscription behaviour overridden while a preview renders
    LAST_ORDER_DATE_CREATED = "woocommerce_subscription_get_last_order_date_created_date"
    CAN_USER_RENEW_EARLY = "woocommerce_subscriptions_can_user_renew_early"
