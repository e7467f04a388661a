"""Subscription behaviour that email templates depend on.

Both lookups run their result through a filter so the preview adapter (or any
integrator) can adjust them without touching the subscription itself.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from subscriptions_preview.core.config import Settings, get_settings
from subscriptions_preview.hooks import HookName, HookRegistry
from subscriptions_preview.subscriptions.models import Subscription

logger = logging.getLogger(__name__)


def get_last_order_date_created(
    subscription: Subscription, hooks: HookRegistry
) -> Optional[datetime]:
    """Return when the most recent order for ``subscription`` was created.

    Falls back to the subscription's own creation date when no parent or
    renewal orders are recorded.
    """
    if subscription.related_order_dates:
        date = max(subscription.related_order_dates)
    else:
        date = subscription.date_created

    return hooks.apply_filters(HookName.LAST_ORDER_DATE_CREATED, date, subscription)


def can_user_renew_early(
    subscription: Subscription,
    user_id: int,
    hooks: HookRegistry,
    settings: Optional[Settings] = None,
) -> bool:
    """Check whether ``user_id`` may renew ``subscription`` before it is due.

    When the feature is switched off nobody can renew early, and the filter is
    not consulted.
    """
    settings = settings or get_settings()

    if not settings.EARLY_RENEWAL_ENABLED:
        return False

    reason = None
    if subscription.status != "active":
        reason = "not_active"
    elif subscription.customer_id != user_id:
        reason = "not_owner"
    elif subscription.next_payment_date is None:
        reason = "no_next_payment"

    can_renew_early = reason is None
    if reason:
        logger.debug(
            f"Early renewal not available for subscription {subscription.id}: {reason}"
        )

    return bool(
        hooks.apply_filters(
            HookName.CAN_USER_RENEW_EARLY, can_renew_early, subscription, user_id
        )
    )
