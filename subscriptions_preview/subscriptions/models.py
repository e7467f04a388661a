"""Data models for subscriptions and the products they bill for."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

BillingPeriod = Literal["day", "week", "month", "year"]
SubscriptionStatus = Literal[
    "pending", "active", "on-hold", "cancelled", "pending-cancel", "expired"
]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "GBP": "£",
    "EUR": "€",
    "JPY": "¥",
    "NGN": "₦",
}

# Public date names -> model field
DATE_FIELDS = {
    "date_created": "date_created",
    "start": "start_date",
    "trial_end": "trial_end_date",
    "next_payment": "next_payment_date",
    "end": "end_date",
}


class Product(BaseModel):
    """A purchasable product."""

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(default=0, ge=0, description="Product ID (0 for unsaved products)")
    name: str = Field(default="", description="Product name")
    price: Decimal = Field(default=Decimal("0"), ge=0, description="Unit price")

    def set_name(self, name: str) -> None:
        self.name = name

    def set_price(self, price: Decimal | int | float | str) -> None:
        self.price = Decimal(str(price))


class LineItem(BaseModel):
    """A product line on a subscription."""

    product: Product
    quantity: int = Field(default=1, ge=1)

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity


class Address(BaseModel):
    """Postal and contact details for billing or shipping."""

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    address_1: str | None = None
    address_2: str | None = None
    city: str | None = None
    postcode: str | None = None
    country: str | None = None
    state: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def formatted(self) -> str:
        """Render the address as a postal block, skipping empty lines."""
        locality = " ".join(part for part in (self.city, self.state, self.postcode) if part)
        lines = [
            self.full_name,
            self.company,
            self.address_1,
            self.address_2,
            locality,
            self.country,
        ]
        return "\n".join(line for line in lines if line)


class Subscription(BaseModel):
    """A recurring billing agreement between a customer and the store.

    Setters mirror the store's object API so data builders read the same way
    whether they target a saved subscription or an in-memory one.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(default=0, ge=0, description="Subscription ID (0 when unsaved)")
    customer_id: int = Field(default=0, ge=0, description="Owning customer/user ID")
    status: SubscriptionStatus = Field(default="pending", description="Lifecycle status")
    currency: str = Field(default="USD", min_length=3, max_length=3, description="ISO currency code")
    total: Decimal = Field(default=Decimal("0"), description="Recurring total")
    billing_period: BillingPeriod = Field(default="month", description="Billing period unit")
    billing_interval: int = Field(default=1, ge=1, description="Periods between payments")

    date_created: datetime | None = None
    start_date: datetime | None = None
    trial_end_date: datetime | None = None
    next_payment_date: datetime | None = None
    end_date: datetime | None = None

    line_items: list[LineItem] = Field(default_factory=list)
    billing_address: Address = Field(default_factory=Address)
    shipping_address: Address = Field(default_factory=Address)
    related_order_dates: list[datetime] = Field(
        default_factory=list, description="Creation dates of parent/renewal orders"
    )

    def add_product(self, product: Product, quantity: int = 1) -> LineItem:
        item = LineItem(product=product, quantity=quantity)
        self.line_items = [*self.line_items, item]
        return item

    def set_id(self, subscription_id: int) -> None:
        self.id = subscription_id

    def set_customer_id(self, customer_id: int) -> None:
        self.customer_id = customer_id

    def set_currency(self, currency: str) -> None:
        self.currency = currency.upper()

    def set_total(self, total: Decimal | int | float | str) -> None:
        self.total = Decimal(str(total))

    def set_billing_period(self, period: BillingPeriod) -> None:
        self.billing_period = period

    def set_billing_interval(self, interval: int) -> None:
        self.billing_interval = interval

    def set_date_created(self, date: datetime) -> None:
        self.date_created = date

    def set_start_date(self, date: datetime) -> None:
        self.start_date = date

    def set_trial_end_date(self, date: datetime) -> None:
        self.trial_end_date = date

    def set_next_payment_date(self, date: datetime) -> None:
        self.next_payment_date = date

    def set_end_date(self, date: datetime) -> None:
        self.end_date = date

    def set_billing_address(self, address: Address | Mapping[str, Any]) -> None:
        self.billing_address = _to_address(address)

    def set_shipping_address(self, address: Address | Mapping[str, Any]) -> None:
        self.shipping_address = _to_address(address)

    def get_date(self, date_type: str) -> datetime | None:
        """Look up a date by its public name (``start``, ``next_payment``, ...)."""
        try:
            field = DATE_FIELDS[date_type]
        except KeyError:
            raise ValueError(f"Unknown subscription date: {date_type}") from None
        return getattr(self, field)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.line_items)

    @property
    def formatted_total(self) -> str:
        return format_money(self.total, self.currency)

    @property
    def billing_schedule(self) -> str:
        """Human readable schedule, e.g. ``every month`` or ``every 2 weeks``."""
        if self.billing_interval == 1:
            return f"every {self.billing_period}"
        return f"every {self.billing_interval} {self.billing_period}s"


def format_money(amount: Decimal, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency)
    if symbol:
        return f"{symbol}{amount:,.2f}"
    return f"{currency} {amount:,.2f}"


def _to_address(address: Address | Mapping[str, Any]) -> Address:
    if isinstance(address, Address):
        return address.model_copy()
    return Address.model_validate(dict(address))
