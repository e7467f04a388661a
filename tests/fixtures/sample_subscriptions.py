"""Sample subscription data for testing."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from subscriptions_preview.subscriptions.models import Product, Subscription

# Last day of a 31-day month, so month arithmetic has to clamp.
FIXED_NOW = datetime(2026, 3, 31, 12, 0, 0, tzinfo=timezone.utc)

SAMPLE_ADDRESS = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "company": "Analytical Engines Ltd",
    "email": "ada@example.com",
    "phone": "020-7946-0000",
    "address_1": "12 St James's Square",
    "city": "London",
    "postcode": "SW1Y 4JH",
    "country": "GB",
}


def make_subscription(**overrides) -> Subscription:
    """Build an active monthly subscription owned by customer 7."""
    subscription = Subscription(
        id=501,
        customer_id=7,
        status="active",
        currency="GBP",
        total=Decimal("30"),
        date_created=FIXED_NOW - timedelta(days=90),
        start_date=FIXED_NOW - timedelta(days=90),
        next_payment_date=FIXED_NOW + timedelta(days=3),
    )
    subscription.add_product(Product(id=42, name="Coffee Beans", price=Decimal("15")), 2)
    subscription.set_billing_address(SAMPLE_ADDRESS)
    subscription.set_shipping_address(SAMPLE_ADDRESS)

    for key, value in overrides.items():
        setattr(subscription, key, value)
    return subscription
