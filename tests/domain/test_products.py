from __future__ import annotations

from decimal import Decimal

import pytest

from motoin.domain.products import ProductDraft, ProductFilters, ProductValidationError


def test_draft_requires_name() -> None:
    with pytest.raises(ProductValidationError) as exc_info:
        ProductDraft(name="  ").validate()

    assert exc_info.value.errors[0]["field"] == "name"


def test_draft_rejects_negative_stock_and_prices() -> None:
    draft = ProductDraft(name="Chain kit", stock=-1, price=Decimal("-5"), sale_price=Decimal("-1"))

    with pytest.raises(ProductValidationError) as exc_info:
        draft.validate()

    assert [error["field"] for error in exc_info.value.errors] == ["stock", "price", "sale_price"]


def test_valid_draft_passes() -> None:
    ProductDraft(name="Chain kit", price=Decimal("89.90"), stock=3).validate()


def test_filters_reject_inverted_price_range() -> None:
    with pytest.raises(ProductValidationError) as exc_info:
        ProductFilters(min_price=Decimal("50"), max_price=Decimal("10")).validate()

    assert {error["code"] for error in exc_info.value.errors} == {"INVALID_RANGE"}


def test_filters_accept_equal_bounds() -> None:
    ProductFilters(min_price=Decimal("10"), max_price=Decimal("10")).validate()
