"""Subscription domain: products, addresses and subscriptions."""

from subscriptions_preview.subscriptions.lifecycle import (
    can_user_renew_early,
    get_last_order_date_created,
)
from subscriptions_preview.subscriptions.models import (
    Address,
    LineItem,
    Product,
    Subscription,
)

__all__ = [
    # Models
    "Address",
    "LineItem",
    "Product",
    "Subscription",
    # Functions
    "can_user_renew_early",
    "get_last_order_date_created",
]
