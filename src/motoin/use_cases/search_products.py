from __future__ import annotations

from dataclasses import dataclass

from motoin.domain.paging import Paging
from motoin.domain.products import Product, ProductFilters
from motoin.ports.product_repository import ProductRepository

DEFAULT_QUICK_SEARCH_LIMIT = 50
MAX_QUICK_SEARCH_LIMIT = 100


@dataclass(frozen=True, slots=True)
class SearchProductsRequest:
    filters: ProductFilters
    paging: Paging


@dataclass(frozen=True, slots=True)
class SearchProductsResponse:
    products: list[Product]
    total_count: int


@dataclass(frozen=True, slots=True)
class QuickSearchRequest:
    query: str | None
    limit: int = DEFAULT_QUICK_SEARCH_LIMIT


class SearchProducts:
    """
    Product listing with filters, sorting and pagination.

    Validates filters and paging, then delegates to the repository adapter.
    """

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: SearchProductsRequest) -> SearchProductsResponse:
        """
        Raises:
            PagingValidationError: If paging parameters are invalid
            ProductValidationError: If min_price > max_price
        """
        request.filters.validate()
        request.paging.validate()

        result = self._repository.search(filters=request.filters, paging=request.paging)

        return SearchProductsResponse(products=result.items, total_count=result.total_count)


class QuickSearchProducts:
    """Search-as-you-type over published products. Limit is clamped to 1..100."""

    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self, request: QuickSearchRequest) -> list[Product]:
        if request.query is None or not request.query.strip():
            return []
        limit = min(max(request.limit, 1), MAX_QUICK_SEARCH_LIMIT)
        return self._repository.quick_search(request.query.strip(), limit=limit)


class ListProductCategories:
    def __init__(self, product_repository: ProductRepository) -> None:
        self._repository = product_repository

    def execute(self) -> list[str]:
        return self._repository.list_categories()
