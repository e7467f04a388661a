"""Values used to fabricate preview data."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from subscriptions_preview.subscriptions.models import BillingPeriod

DUMMY_ADDRESS: dict[str, str] = {
    "first_name": "John",
    "last_name": "Doe",
    "company": "Company",
    "email": "john@company.com",
    "phone": "555-555-5555",
    "address_1": "123 Fake Street",
    "city": "Faketown",
    "postcode": "12345",
    "country": "US",
    "state": "CA",
}


class DummyDataConfig(BaseModel):
    """Fixed values for the fabricated subscription, product and address.

    The subscription and customer IDs double as the identity check that keeps
    preview-only overrides away from real subscriptions.
    """

    subscription_id: int = Field(default=12346, description="ID of the dummy subscription")
    customer_id: int = Field(default=1, description="Customer/user ID owning the dummy subscription")
    currency: str = Field(default="USD", description="Currency code")
    total: Decimal = Field(default=Decimal("100"), description="Recurring total")
    billing_period: BillingPeriod = Field(default="month", description="Billing period unit")
    billing_interval: int = Field(default=1, ge=1, description="Periods between payments")

    product_name: str = Field(default="Dummy Subscription", description="Dummy product name")
    product_price: Decimal = Field(default=Decimal("25"), description="Dummy product price")
    product_quantity: int = Field(default=2, ge=1, description="Quantity of the dummy product")

    address: dict[str, str] = Field(
        default_factory=lambda: dict(DUMMY_ADDRESS),
        description="Billing and shipping address",
    )
