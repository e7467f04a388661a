"""Dummy subscription data for subscription email previews."""

from subscriptions_preview.preview.adapter import SubscriptionEmailPreview
from subscriptions_preview.preview.config import DUMMY_ADDRESS, DummyDataConfig
from subscriptions_preview.preview.service import (
    PreviewOverrides,
    PreviewResult,
    PreviewService,
)

__all__ = [
    "DUMMY_ADDRESS",
    "DummyDataConfig",
    "PreviewOverrides",
    "PreviewResult",
    "PreviewService",
    "SubscriptionEmailPreview",
]
