from __future__ import annotations

from dataclasses import dataclass

from motoin.domain.catalog import CatalogEntry, CatalogFilters
from motoin.domain.paging import Paging
from motoin.ports.catalog_repository import CatalogRepository


@dataclass(frozen=True, slots=True)
class SearchCatalogRequest:
    filters: CatalogFilters
    paging: Paging


@dataclass(frozen=True, slots=True)
class SearchCatalogResponse:
    entries: list[CatalogEntry]
    total_count: int


class SearchCatalog:
    """
    Paginated admin listing of the motorcycle catalog.

    Validates paging and delegates filtering and sorting (make, then model)
    to the repository adapter.
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: SearchCatalogRequest) -> SearchCatalogResponse:
        """
        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        request.paging.validate()

        result = self._repository.search(filters=request.filters, paging=request.paging)

        return SearchCatalogResponse(entries=result.items, total_count=result.total_count)
