"""Tests for subscription email classes and registries."""

from __future__ import annotations

import pytest

from subscriptions_preview.core.exceptions import UnknownEmailTypeError
from subscriptions_preview.emails import (
    ATTACHMENT_STRATEGIES,
    AttachmentStrategy,
    Email,
    EmailKind,
    EmailRegistry,
    attachment_strategy,
)
from subscriptions_preview.emails.models import (
    CancelledSubscriptionEmail,
    ManualRenewalNotificationEmail,
    NewSwitchOrderEmail,
    NewRenewalOrderEmail,
    format_date,
    render_subscription_summary,
)
from subscriptions_preview.emails.registry import (
    NOTIFICATION_EMAIL_CLASSES,
    SUBSCRIPTION_EMAIL_CLASSES,
)
from tests.fixtures.sample_subscriptions import FIXED_NOW, make_subscription


class TestEmailRegistry:
    """Tests for the merged email registry."""

    def test_every_kind_is_registered(self, email_registry):
        """Test that each email kind has a registered class."""
        for kind in EmailKind:
            assert email_registry.is_registered(kind.value), kind

    def test_recognized_kinds_merges_both_registries(self, email_registry):
        """Test that recognition covers subscription and notification emails."""
        kinds = email_registry.recognized_kinds()

        assert kinds == set(SUBSCRIPTION_EMAIL_CLASSES) | set(NOTIFICATION_EMAIL_CLASSES)
        assert len(kinds) == 15
        assert "AutoRenewalNotificationEmail" in kinds
        assert "CancelledSubscriptionEmail" in kinds

    def test_unknown_type(self, email_registry):
        """Test that unknown types are not recognized."""
        assert email_registry.is_registered("CustomerInvoiceEmail") is False

        with pytest.raises(UnknownEmailTypeError) as exc_info:
            email_registry.get_email_class("CustomerInvoiceEmail")

        assert exc_info.value.email_type == "CustomerInvoiceEmail"

    def test_create_email(self, email_registry):
        """Test that emails are created from their type."""
        email = email_registry.create_email("NewSwitchOrderEmail", recipient="shop@example.com")

        assert isinstance(email, NewSwitchOrderEmail)
        assert email.email_type == "NewSwitchOrderEmail"
        assert email.recipient == "shop@example.com"
        assert email.subscriptions == []

    def test_descriptor(self, email_registry):
        """Test email descriptors for both registries."""
        cancelled = email_registry.descriptor("CancelledSubscriptionEmail")
        reminder = email_registry.descriptor("ManualRenewalNotificationEmail")
        renewal = email_registry.descriptor("NewRenewalOrderEmail")

        assert cancelled.id == "cancelled_subscription"
        assert cancelled.notification is False
        assert cancelled.attachment == AttachmentStrategy.AS_SUBJECT
        assert reminder.notification is True
        assert reminder.customer_email is True
        assert renewal.attachment is None

    def test_descriptors_sorted_by_title(self, email_registry):
        titles = [d.title for d in email_registry.descriptors()]

        assert titles == sorted(titles)
        assert len(titles) == 15

    def test_register_custom_email(self):
        """Test registering an extra notification email."""

        class WelcomeBackEmail(Email):
            id = "welcome_back"
            title = "Welcome back"

        registry = EmailRegistry()
        registry.register(WelcomeBackEmail, notification=True)

        assert registry.is_registered("WelcomeBackEmail")
        assert registry.descriptor("WelcomeBackEmail").notification is True

    def test_registries_are_not_shared(self):
        """Test that registering on one registry leaves the defaults alone."""

        class ScratchEmail(Email):
            pass

        EmailRegistry().register(ScratchEmail)

        assert "ScratchEmail" not in SUBSCRIPTION_EMAIL_CLASSES
        assert EmailRegistry().is_registered("ScratchEmail") is False


class TestAttachmentStrategy:
    """Tests for how preview data attaches to each kind."""

    @pytest.mark.parametrize(
        "email_type",
        ["NewSwitchOrderEmail", "CompletedSwitchOrderEmail"],
    )
    def test_switch_orders_attach_as_list(self, email_type):
        assert attachment_strategy(email_type) is AttachmentStrategy.AS_LIST

    def test_subject_kinds(self):
        subject_kinds = [
            kind for kind, strategy in ATTACHMENT_STRATEGIES.items()
            if strategy is AttachmentStrategy.AS_SUBJECT
        ]

        assert len(subject_kinds) == 8
        assert EmailKind.ON_HOLD_SUBSCRIPTION in subject_kinds

    def test_unknown_and_order_kinds_have_no_strategy(self):
        assert attachment_strategy("CustomerInvoiceEmail") is None
        assert attachment_strategy("CustomerRenewalInvoiceEmail") is None


class TestEmailRendering:
    """Tests for plain-text email bodies."""

    def test_format_date(self):
        assert format_date(FIXED_NOW) == "March 31, 2026"
        assert format_date(None) == "N/A"

    def test_cancelled_email_shows_last_order_and_prepaid_term(self, hooks, settings):
        """Test the cancelled subscription body."""
        subscription = make_subscription(end_date=FIXED_NOW, related_order_dates=[FIXED_NOW])
        email = CancelledSubscriptionEmail()
        email.set_object(subscription)

        content = email.get_content(hooks, settings)

        assert content.startswith("Subscription Cancelled")
        assert "A subscription belonging to Ada Lovelace has been cancelled." in content
        assert "Subscription #501" in content
        assert "Coffee Beans × 2    £30.00" in content
        assert "Recurring total: £30.00 every month" in content
        assert "Last order date: March 31, 2026" in content
        assert "End of prepaid term: March 31, 2026" in content
        assert content.endswith("Test Store")

    def test_summary_lists_item_count_and_set_dates(self):
        """Test that the summary counts items and skips unset optional dates."""
        summary = render_subscription_summary(make_subscription())

        assert "  Items: 2" in summary
        assert "  Next payment: April 3, 2026" in summary
        assert "  Start date: December 31, 2025" in summary
        assert "Trial end" not in summary
        assert "End date" not in summary

    def test_subscription_email_requires_subscription(self, hooks, settings):
        """Test that a subscription email without a subscription cannot render."""
        with pytest.raises(ValueError, match="no subscription"):
            CancelledSubscriptionEmail().get_content(hooks, settings)

    def test_renewal_notice_offers_early_renewal_when_allowed(self, hooks, settings):
        email = ManualRenewalNotificationEmail()
        email.set_object(make_subscription())

        content = email.get_content(hooks, settings)

        assert "Hi Ada," in content
        assert "/my-account/subscriptions/501/renew-early" in content

    def test_renewal_notice_hides_early_renewal_when_not_allowed(self, hooks, settings):
        email = ManualRenewalNotificationEmail()
        email.set_object(make_subscription(status="on-hold"))

        content = email.get_content(hooks, settings)

        assert "renew-early" not in content

    def test_switch_email_lists_subscriptions(self, hooks, settings):
        email = NewSwitchOrderEmail()
        email.subscriptions = [make_subscription(), make_subscription(id=502)]

        content = email.get_content(hooks, settings)

        assert "Customer Ada Lovelace has switched their subscription." in content
        assert "Subscription #501" in content
        assert "Subscription #502" in content

    def test_switch_email_without_subscriptions(self, hooks, settings):
        content = NewSwitchOrderEmail().get_content(hooks, settings)

        assert "No subscriptions were switched." in content

    def test_renewal_order_email_without_order(self, hooks, settings):
        content = NewRenewalOrderEmail().get_content(hooks, settings)

        assert "Order details will appear here." in content

    def test_subject_uses_store_name(self, settings):
        assert CancelledSubscriptionEmail().get_subject(settings) == "[Test Store] Subscription Cancelled"
