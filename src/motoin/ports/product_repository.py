from __future__ import annotations

from abc import ABC, abstractmethod

from motoin.domain.paging import Paging, SearchResult
from motoin.domain.products import Product, ProductDraft, ProductFilters


class ProductRepository(ABC):
    """
    Port for product data access.

    Contract (Preconditions):
        - filters and paging are pre-validated by the caller (UseCase)
        - product ids are valid UUID strings
    """

    @abstractmethod
    def search(self, filters: ProductFilters, paging: Paging) -> SearchResult[Product]:
        """Filtered, sorted page of products plus the total before paging."""
        ...

    @abstractmethod
    def quick_search(self, term: str, limit: int) -> list[Product]:
        """Published products whose name, short description or SKU contains term."""
        ...

    @abstractmethod
    def list_categories(self) -> list[str]:
        """Distinct non-empty categories, sorted."""
        ...

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None: ...

    @abstractmethod
    def get_by_wc_id(self, wc_id: int) -> Product | None: ...

    @abstractmethod
    def add(self, draft: ProductDraft) -> Product: ...

    @abstractmethod
    def update(self, product_id: str, draft: ProductDraft) -> Product | None: ...

    @abstractmethod
    def delete(self, product_id: str) -> bool: ...
