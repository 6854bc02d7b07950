"""Public compatibility lookups over the motorcycle catalog."""

from __future__ import annotations

from dataclasses import dataclass

from motoin.domain.catalog import CatalogEntry, FilterSummary, LookupFilters
from motoin.ports.catalog_repository import CatalogRepository

SEARCH_MODELS_LIMIT = 50


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True, slots=True)
class ListDisplacementsRequest:
    make: str | None = None


@dataclass(frozen=True, slots=True)
class ListModelsRequest:
    make: str | None = None
    displacement: int | None = None


@dataclass(frozen=True, slots=True)
class ListYearsRequest:
    make: str | None = None
    displacement: int | None = None
    model: str | None = None


@dataclass(frozen=True, slots=True)
class SearchModelsRequest:
    query: str | None = None


class ListMakes:
    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self) -> list[str]:
        return self._repository.list_makes()


class ListDisplacements:
    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: ListDisplacementsRequest) -> list[int]:
        return self._repository.list_displacements(make=request.make)


class ListModels:
    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: ListModelsRequest) -> list[str]:
        return self._repository.list_models(make=request.make, displacement=request.displacement)


class ListYears:
    """
    Years of the entry matching make, displacement and model.

    All three inputs are required; if any is missing the result is empty
    and the repository is not queried.
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: ListYearsRequest) -> list[int]:
        if _blank(request.make) or _blank(request.model) or request.displacement is None:
            return []

        entry = self._repository.find_one(
            LookupFilters(
                make=request.make,
                model=request.model,
                displacement=request.displacement,
            )
        )
        if entry is None:
            return []
        return sorted(set(entry.years))


class SummarizeFilters:
    """Distinct makes, displacements, models and years over one filtered query."""

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: LookupFilters) -> FilterSummary:
        entries = self._repository.find_all(request)
        return FilterSummary.from_entries(entries)


class SearchModels:
    """Substring search on model names, capped at SEARCH_MODELS_LIMIT results."""

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: SearchModelsRequest) -> list[CatalogEntry]:
        if _blank(request.query):
            return []
        return self._repository.search_models(
            request.query.strip(),  # type: ignore[union-attr]
            limit=SEARCH_MODELS_LIMIT,
        )
