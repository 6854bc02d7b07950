from __future__ import annotations

from motoin.domain.catalog import (
    UNKNOWN,
    CatalogEntry,
    CatalogEntryChanges,
    CatalogEntryDraft,
    CatalogFilters,
    FilterSummary,
    ImportCandidate,
    ImportResult,
    MakeModel,
)
from motoin.entrypoints.http.dtos.catalog import (
    BulkCreateResponseDTO,
    CatalogEntryCreateDTO,
    CatalogEntryDTO,
    CatalogEntryUpdateDTO,
    CatalogListQueryDTO,
    CatalogPageResponseDTO,
    CheckMissingResponseDTO,
    FilterSummaryResponseDTO,
    ImportRequestDTO,
    ImportResponseDTO,
    MakeModelDTO,
)
from motoin.entrypoints.http.mappers.pagination import to_domain_paging, to_pagination
from motoin.use_cases.import_catalog import ImportRequest
from motoin.use_cases.search_catalog import SearchCatalogRequest, SearchCatalogResponse


class CatalogMapper:
    """Maps between REST DTOs and domain models for the motorcycle catalog."""

    @staticmethod
    def to_entry_dto(entry: CatalogEntry) -> CatalogEntryDTO:
        return CatalogEntryDTO(
            id=entry.id,
            make=entry.make,
            model=entry.model,
            displacement=entry.displacement,
            years=sorted(entry.years),
            category=entry.category,
            country=entry.country,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )

    @staticmethod
    def to_filter_summary(summary: FilterSummary) -> FilterSummaryResponseDTO:
        return FilterSummaryResponseDTO(
            makes=summary.makes,
            displacements=summary.displacements,
            models=summary.models,
            years=summary.years,
        )

    @staticmethod
    def to_search_request(dto: CatalogListQueryDTO) -> SearchCatalogRequest:
        return SearchCatalogRequest(
            filters=CatalogFilters(make=dto.make, category=dto.category, search=dto.search),
            paging=to_domain_paging(dto),
        )

    @staticmethod
    def to_page_response(
        result: SearchCatalogResponse, request: SearchCatalogRequest
    ) -> CatalogPageResponseDTO:
        return CatalogPageResponseDTO(
            data=[CatalogMapper.to_entry_dto(entry) for entry in result.entries],
            pagination=to_pagination(request.paging, result.total_count),
        )

    @staticmethod
    def to_draft(dto: CatalogEntryCreateDTO) -> CatalogEntryDraft:
        """Blank category/country fall back to "Unknown"."""
        return CatalogEntryDraft(
            make=dto.make.strip(),
            model=dto.model.strip(),
            displacement=dto.displacement,
            years=list(dto.years),
            category=(dto.category or "").strip() or UNKNOWN,
            country=(dto.country or "").strip() or UNKNOWN,
        )

    @staticmethod
    def to_changes(dto: CatalogEntryUpdateDTO) -> CatalogEntryChanges:
        return CatalogEntryChanges(
            make=dto.make.strip() if dto.make is not None else None,
            model=dto.model.strip() if dto.model is not None else None,
            displacement=dto.displacement,
            years=list(dto.years) if dto.years is not None else None,
            category=(dto.category.strip() or UNKNOWN) if dto.category is not None else None,
            country=(dto.country.strip() or UNKNOWN) if dto.country is not None else None,
        )

    @staticmethod
    def to_import_request(dto: ImportRequestDTO) -> ImportRequest:
        if dto.items is None:
            return ImportRequest(items=None)
        return ImportRequest(
            items=[
                ImportCandidate(
                    make=item.make,
                    model=item.model,
                    displacement=item.displacement,
                    years=item.years,
                    category=item.category,
                    country=item.country,
                )
                for item in dto.items
            ]
        )

    @staticmethod
    def to_missing_response(missing: list[MakeModel]) -> CheckMissingResponseDTO:
        return CheckMissingResponseDTO(
            data=[MakeModelDTO(make=pair.make, model=pair.model) for pair in missing]
        )

    @staticmethod
    def to_bulk_create_response(created: int) -> BulkCreateResponseDTO:
        return BulkCreateResponseDTO(created=created)

    @staticmethod
    def to_import_response(result: ImportResult) -> ImportResponseDTO:
        return ImportResponseDTO(created=result.created, skipped=result.skipped)
