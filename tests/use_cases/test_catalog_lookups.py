from __future__ import annotations

from unittest.mock import Mock

import pytest

from motoin.adapters.in_memory_catalog_repository import InMemoryCatalogRepository
from motoin.domain.catalog import CatalogEntryDraft, FilterSummary, LookupFilters
from motoin.ports.catalog_repository import CatalogRepository
from motoin.use_cases.catalog_lookups import (
    SEARCH_MODELS_LIMIT,
    ListDisplacements,
    ListDisplacementsRequest,
    ListMakes,
    ListModels,
    ListModelsRequest,
    ListYears,
    ListYearsRequest,
    SearchModels,
    SearchModelsRequest,
    SummarizeFilters,
)


@pytest.fixture
def repository() -> InMemoryCatalogRepository:
    """Two Hondas and one Yamaha."""
    repository = InMemoryCatalogRepository()
    repository.add(CatalogEntryDraft(make="Honda", model="CBR 600 RR", displacement=600, years=[2021, 2020]))
    repository.add(CatalogEntryDraft(make="Honda", model="CB 650 R", displacement=650, years=[2019, 2020]))
    repository.add(CatalogEntryDraft(make="Yamaha", model="MT-07", displacement=700, years=[2022]))
    return repository


def test_list_makes(repository: InMemoryCatalogRepository) -> None:
    assert ListMakes(repository).execute() == ["Honda", "Yamaha"]


def test_list_displacements(repository: InMemoryCatalogRepository) -> None:
    assert ListDisplacements(repository).execute(ListDisplacementsRequest(make="honda")) == [600, 650]


def test_list_models(repository: InMemoryCatalogRepository) -> None:
    result = ListModels(repository).execute(ListModelsRequest(make="Honda", displacement=650))

    assert result == ["CB 650 R"]


def test_list_years(repository: InMemoryCatalogRepository) -> None:
    result = ListYears(repository).execute(
        ListYearsRequest(make="honda", displacement=600, model="cbr 600 rr")
    )

    assert result == [2020, 2021]


def test_list_years_no_match(repository: InMemoryCatalogRepository) -> None:
    result = ListYears(repository).execute(
        ListYearsRequest(make="Honda", displacement=1000, model="CBR 600 RR")
    )

    assert result == []


@pytest.mark.parametrize(
    "request_",
    [
        ListYearsRequest(make=None, displacement=600, model="CBR 600 RR"),
        ListYearsRequest(make="Honda", displacement=None, model="CBR 600 RR"),
        ListYearsRequest(make="Honda", displacement=600, model="  "),
    ],
)
def test_list_years_requires_every_input(request_: ListYearsRequest) -> None:
    repository = Mock(spec=CatalogRepository)

    assert ListYears(repository).execute(request_) == []
    repository.find_one.assert_not_called()


def test_summarize_filters(repository: InMemoryCatalogRepository) -> None:
    summary = SummarizeFilters(repository).execute(LookupFilters(make="Honda"))

    assert summary == FilterSummary(
        makes=["Honda"],
        displacements=[600, 650],
        models=["CB 650 R", "CBR 600 RR"],
        years=[2019, 2020, 2021],
    )


def test_search_models(repository: InMemoryCatalogRepository) -> None:
    result = SearchModels(repository).execute(SearchModelsRequest(query=" cb "))

    assert [entry.model for entry in result] == ["CBR 600 RR", "CB 650 R"]


@pytest.mark.parametrize("query", [None, "", "   "])
def test_search_models_blank_query(query: str | None) -> None:
    repository = Mock(spec=CatalogRepository)

    assert SearchModels(repository).execute(SearchModelsRequest(query=query)) == []
    repository.search_models.assert_not_called()


def test_search_models_passes_limit() -> None:
    repository = Mock(spec=CatalogRepository)
    repository.search_models.return_value = []

    SearchModels(repository).execute(SearchModelsRequest(query="mt"))

    repository.search_models.assert_called_once_with("mt", limit=SEARCH_MODELS_LIMIT)
