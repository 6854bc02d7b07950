from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from motoin.domain.errors import NotFoundError, ValidationError
from motoin.domain.identifiers import new_id

MIN_PASSWORD_LENGTH = 6
DEFAULT_COUNTRY = "Italy"


class Role(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class ThemePreference(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class PaymentMethodType(str, Enum):
    CARD = "card"
    PAYPAL = "paypal"
    BANK = "bank"


class UserValidationError(ValidationError):
    """Raised when account data is invalid."""

    pass


@dataclass(frozen=True, slots=True)
class Address:
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    street: str | None = None
    street_number: str | None = None
    postal_code: str | None = None
    city: str | None = None
    province: str | None = None
    country: str = DEFAULT_COUNTRY


@dataclass(frozen=True, slots=True)
class PaymentMethod:
    """A saved payment method. Only display data is kept, never full card numbers."""

    id: str
    type: PaymentMethodType
    name: str | None = None
    last_four: str | None = None
    expiry_month: str | None = None
    expiry_year: str | None = None
    card_brand: str | None = None
    email: str | None = None
    iban: str | None = None
    is_default: bool = False


@dataclass(frozen=True)
class User:
    id: str
    email: str
    password_hash: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role = Role.CUSTOMER
    phone: str | None = None
    tax_code: str | None = None
    vat_number: str | None = None
    certified_email: str | None = None
    recipient_code: str | None = None
    billing_address: Address | None = None
    shipping_address: Address | None = None
    use_shipping_as_billing: bool = True
    payment_methods: list[PaymentMethod] = field(default_factory=list)
    is_active: bool = True
    avatar: str | None = None
    theme_preference: ThemePreference | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def display_name(self) -> str:
        """Full name, falling back to the e-mail address."""
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.email


@dataclass(frozen=True, slots=True)
class UserFilters:
    role: Role | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class UserStats:
    total: int
    customers: int
    admins: int
    active: int
    inactive: int


# ==============================================================================
# Field normalization
# ==============================================================================

PROFILE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "phone",
        "tax_code",
        "vat_number",
        "certified_email",
        "recipient_code",
        "billing_address",
        "shipping_address",
        "use_shipping_as_billing",
        "theme_preference",
    }
)

ADMIN_FIELDS = PROFILE_FIELDS | {"role", "is_active"}


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _strip(value: Any) -> Any:
    # str enums (Role, ThemePreference) pass through unchanged
    if isinstance(value, str) and not isinstance(value, Enum):
        return value.strip()
    return value


def clean_profile(changes: Mapping[str, Any]) -> dict[str, Any]:
    """
    Trim text fields and apply the casing rules of the Italian invoicing fields.

    tax_code and recipient_code are upper-cased, certified_email lower-cased.
    """
    cleaned: dict[str, Any] = {}
    for name, value in changes.items():
        value = _strip(value)
        if name in ("tax_code", "recipient_code") and value:
            value = value.upper()
        elif name == "certified_email" and value:
            value = value.lower()
        cleaned[name] = value
    return cleaned


def validate_password(password: str | None, field_name: str = "password") -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise UserValidationError(
            errors=[
                {
                    "field": field_name,
                    "message": f"Must be at least {MIN_PASSWORD_LENGTH} characters",
                    "code": "TOO_SHORT",
                }
            ]
        )


def validate_email(email: str | None) -> None:
    if not email or "@" not in email.strip():
        raise UserValidationError(
            errors=[{"field": "email", "message": "Must be a valid e-mail address", "code": "INVALID_EMAIL"}]
        )


# ==============================================================================
# Payment methods
# ==============================================================================


def _clear_defaults(methods: list[PaymentMethod]) -> list[PaymentMethod]:
    return [replace(method, is_default=False) for method in methods]


def add_payment_method(
    methods: list[PaymentMethod], method: PaymentMethod
) -> list[PaymentMethod]:
    """
    Append a method keeping at most one default.

    The first method added always becomes the default; a new default clears
    the flag on every other method.
    """
    make_default = method.is_default or not methods
    current = _clear_defaults(methods) if make_default else list(methods)
    return [*current, replace(method, is_default=make_default)]


def update_payment_method(
    methods: list[PaymentMethod], method_id: str, changes: Mapping[str, Any]
) -> list[PaymentMethod]:
    """
    Raises:
        NotFoundError: If no method has method_id
    """
    if not any(method.id == method_id for method in methods):
        raise NotFoundError("PaymentMethod", method_id)

    current = _clear_defaults(methods) if changes.get("is_default") else list(methods)
    return [
        replace(method, **clean_profile(changes)) if method.id == method_id else method
        for method in current
    ]


def remove_payment_method(methods: list[PaymentMethod], method_id: str) -> list[PaymentMethod]:
    """
    Remove a method; if it was the default, the first remaining one takes over.

    Raises:
        NotFoundError: If no method has method_id
    """
    removed = next((method for method in methods if method.id == method_id), None)
    if removed is None:
        raise NotFoundError("PaymentMethod", method_id)

    remaining = [method for method in methods if method.id != method_id]
    if removed.is_default and remaining:
        remaining[0] = replace(remaining[0], is_default=True)
    return remaining


def new_payment_method(type: PaymentMethodType, **fields: Any) -> PaymentMethod:
    return PaymentMethod(id=new_id(), type=type, **clean_profile(fields))
