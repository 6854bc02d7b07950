from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from motoin.domain.errors import ValidationError
from motoin.domain.users import Address

ORDER_NUMBER_PREFIX = "MO"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class ShippingMethod(str, Enum):
    PREMIUM = "premium"
    PICKUP = "pickup"


class OrderValidationError(ValidationError):
    """Raised when an order cannot be placed as submitted."""

    pass


@dataclass(frozen=True, slots=True)
class OrderItem:
    name: str
    price: Decimal
    quantity: int
    product_id: str | None = None
    image: str | None = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class Order:
    id: str
    order_number: str
    customer_email: str
    items: list[OrderItem]
    subtotal: Decimal
    total: Decimal
    user_id: str | None = None
    customer_phone: str | None = None
    billing_address: Address | None = None
    shipping_address: Address | None = None
    shipping_method: ShippingMethod = ShippingMethod.PREMIUM
    shipping_cost: Decimal = Decimal("0")
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str | None = None
    payment_id: str | None = None
    notes: str | None = None
    admin_notes: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class OrderDraft:
    """An order as submitted by a customer, before totals and numbering."""

    items: list[OrderItem]
    billing_address: Address | None = None
    shipping_address: Address | None = None
    shipping_method: ShippingMethod = ShippingMethod.PREMIUM
    shipping_cost: Decimal = Decimal("0")
    notes: str | None = None

    def validate(self) -> None:
        """
        Raises:
            OrderValidationError: If there are no items, a quantity is below 1
                or a price/shipping cost is negative
        """
        if not self.items:
            raise OrderValidationError(
                errors=[{"field": "items", "message": "Order has no items", "code": "REQUIRED"}]
            )
        errors = []
        for index, item in enumerate(self.items):
            if item.quantity < 1:
                errors.append(
                    {
                        "field": f"items.{index}.quantity",
                        "message": "Must be greater than or equal to 1",
                        "code": "INVALID_VALUE",
                    }
                )
            if item.price < 0:
                errors.append(
                    {
                        "field": f"items.{index}.price",
                        "message": "Must be greater than or equal to 0",
                        "code": "INVALID_VALUE",
                    }
                )
        if self.shipping_cost < 0:
            errors.append(
                {
                    "field": "shipping_cost",
                    "message": "Must be greater than or equal to 0",
                    "code": "INVALID_VALUE",
                }
            )
        if errors:
            raise OrderValidationError(errors=errors)

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.shipping_cost


@dataclass(frozen=True, slots=True)
class OrderChanges:
    """Admin-editable order fields. None means "leave unchanged"."""

    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
    admin_notes: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class OrderFilters:
    """
    user_id restricts the listing to one customer's orders; search is a
    case-insensitive substring of the order number or customer e-mail.
    """

    user_id: str | None = None
    status: OrderStatus | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class OrderStats:
    total: int
    pending: int
    processing: int
    shipped: int
    delivered: int
    cancelled: int
    revenue: Decimal = field(default=Decimal("0"))


def format_order_number(sequence: int, now: datetime) -> str:
    """MO + two-digit year + two-digit month + "-" + five-digit sequence."""
    return f"{ORDER_NUMBER_PREFIX}{now:%y%m}-{sequence:05d}"
