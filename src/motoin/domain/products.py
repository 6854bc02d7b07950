from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from motoin.domain.errors import ValidationError


class ProductValidationError(ValidationError):
    """Raised when product data or product filters are invalid."""

    pass


class ProductSort(str, Enum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


@dataclass(frozen=True, slots=True)
class Compatibility:
    """A motorcycle a product fits. position is front/rear for brake parts."""

    brand: str | None = None
    model: str | None = None
    displacement: int | None = None
    years: list[int] = field(default_factory=list)
    frame: str | None = None
    position: str | None = None


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    wc_id: int | None = None
    sku: str | None = None
    short_description: str | None = None
    description: str | None = None
    price: Decimal | None = None
    regular_price: Decimal | None = None
    sale_price: Decimal | None = None
    mechanical_price: Decimal | None = None
    wholesale_price: Decimal | None = None
    stock: int = 0
    in_stock: bool = False
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    published: bool = False
    type: str | None = None
    compatibility: list[Compatibility] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ProductDraft:
    """Full set of writable product fields, used for create and update."""

    name: str
    wc_id: int | None = None
    sku: str | None = None
    short_description: str | None = None
    description: str | None = None
    price: Decimal | None = None
    regular_price: Decimal | None = None
    sale_price: Decimal | None = None
    mechanical_price: Decimal | None = None
    wholesale_price: Decimal | None = None
    stock: int = 0
    in_stock: bool = False
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    published: bool = False
    type: str | None = None
    compatibility: list[Compatibility] = field(default_factory=list)

    def validate(self) -> None:
        """
        Raises:
            ProductValidationError: If name is blank, stock is negative or a price is negative
        """
        errors = []
        if not self.name or not self.name.strip():
            errors.append({"field": "name", "message": "Name is required", "code": "REQUIRED"})
        if self.stock < 0:
            errors.append(
                {"field": "stock", "message": "Must be greater than or equal to 0", "code": "INVALID_VALUE"}
            )
        for name in ("price", "regular_price", "sale_price", "mechanical_price", "wholesale_price"):
            value = getattr(self, name)
            if value is not None and value < 0:
                errors.append(
                    {"field": name, "message": "Must be greater than or equal to 0", "code": "INVALID_VALUE"}
                )
        if errors:
            raise ProductValidationError(errors=errors)


@dataclass(frozen=True, slots=True)
class ProductFilters:
    """
    Filters for the product listing. All combine with AND semantics.

    - category: case-insensitive substring of any category
    - search: case-insensitive substring of name, short description or SKU
    - include_unpublished: False restricts results to published products
    """

    category: str | None = None
    in_stock: bool | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    search: str | None = None
    include_unpublished: bool = False
    sort: ProductSort = ProductSort.NEWEST

    def validate(self) -> None:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ProductValidationError(
                errors=[
                    {
                        "field": "min_price",
                        "message": "Must be less than or equal to max_price",
                        "code": "INVALID_RANGE",
                    },
                    {
                        "field": "max_price",
                        "message": "Must be greater than or equal to min_price",
                        "code": "INVALID_RANGE",
                    },
                ]
            )
