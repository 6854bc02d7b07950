from fastapi import APIRouter, Depends, Query, status

from motoin.domain.catalog import LookupFilters
from motoin.entrypoints.http.dependencies import (
    get_bulk_create_use_case,
    get_check_missing_use_case,
    get_create_catalog_entry_use_case,
    get_delete_catalog_entry_use_case,
    get_get_catalog_entry_use_case,
    get_import_catalog_use_case,
    get_list_displacements_use_case,
    get_list_makes_use_case,
    get_list_models_use_case,
    get_list_years_use_case,
    get_search_catalog_use_case,
    get_search_models_use_case,
    get_summarize_filters_use_case,
    get_update_catalog_entry_use_case,
    require_admin,
)
from motoin.entrypoints.http.dtos.catalog import (
    BulkCreateResponseDTO,
    CatalogEntryCreateDTO,
    CatalogEntryListResponseDTO,
    CatalogEntryResponseDTO,
    CatalogEntryUpdateDTO,
    CatalogListQueryDTO,
    CatalogPageResponseDTO,
    CheckMissingResponseDTO,
    FilterSummaryResponseDTO,
    ImportRequestDTO,
    ImportResponseDTO,
    IntListResponseDTO,
    StringListResponseDTO,
)
from motoin.entrypoints.http.dtos.common import MessageResponseDTO
from motoin.entrypoints.http.error_responses import error_responses
from motoin.entrypoints.http.mappers.catalog_mapper import CatalogMapper
from motoin.use_cases.catalog_lookups import (
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
from motoin.use_cases.import_catalog import (
    BulkCreateMissingEntries,
    CheckMissingEntries,
    ImportCatalog,
)
from motoin.use_cases.manage_catalog import (
    CreateCatalogEntry,
    DeleteCatalogEntry,
    GetCatalogEntry,
    UpdateCatalogEntry,
    UpdateCatalogEntryRequest,
)
from motoin.use_cases.search_catalog import SearchCatalog

router = APIRouter(tags=["Catalog"])
admin_router = APIRouter(
    tags=["Catalog admin"],
    dependencies=[Depends(require_admin)],
    responses=error_responses(401, 403, 422),
)

MakeQuery = Query(default=None, description="Make, case-insensitive exact match", examples=["Honda"])
DisplacementQuery = Query(default=None, ge=0, description="Displacement in cc", examples=[600])
ModelQuery = Query(default=None, description="Model, case-insensitive exact match", examples=["CBR 600 RR"])


# ==============================================================================
# Public compatibility lookups
# ==============================================================================


@router.get("/makes", response_model=StringListResponseDTO, summary="List distinct makes")
def list_makes(use_case: ListMakes = Depends(get_list_makes_use_case)) -> StringListResponseDTO:
    return StringListResponseDTO(data=use_case.execute())


@router.get(
    "/displacements",
    response_model=IntListResponseDTO,
    summary="List distinct displacements, optionally for one make",
)
def list_displacements(
    make: str | None = MakeQuery,
    use_case: ListDisplacements = Depends(get_list_displacements_use_case),
) -> IntListResponseDTO:
    return IntListResponseDTO(data=use_case.execute(ListDisplacementsRequest(make=make)))


@router.get("/models", response_model=StringListResponseDTO, summary="List distinct models")
def list_models(
    make: str | None = MakeQuery,
    displacement: int | None = DisplacementQuery,
    use_case: ListModels = Depends(get_list_models_use_case),
) -> StringListResponseDTO:
    request = ListModelsRequest(make=make, displacement=displacement)
    return StringListResponseDTO(data=use_case.execute(request))


@router.get(
    "/years",
    response_model=IntListResponseDTO,
    summary="Production years of one make/displacement/model",
    description="Returns an empty list unless make, displacement and model are all given and match an entry.",
)
def list_years(
    make: str | None = MakeQuery,
    displacement: int | None = DisplacementQuery,
    model: str | None = ModelQuery,
    use_case: ListYears = Depends(get_list_years_use_case),
) -> IntListResponseDTO:
    request = ListYearsRequest(make=make, displacement=displacement, model=model)
    return IntListResponseDTO(data=use_case.execute(request))


@router.get(
    "/filters",
    response_model=FilterSummaryResponseDTO,
    summary="Combined filter summary",
    description="""
    Distinct makes, displacements, models and years of every entry matching
    all supplied filters. Years are flattened across the matching entries.
    """,
)
def filter_summary(
    make: str | None = MakeQuery,
    model: str | None = ModelQuery,
    displacement: int | None = DisplacementQuery,
    use_case: SummarizeFilters = Depends(get_summarize_filters_use_case),
) -> FilterSummaryResponseDTO:
    summary = use_case.execute(LookupFilters(make=make, model=model, displacement=displacement))
    return CatalogMapper.to_filter_summary(summary)


@router.get(
    "/search",
    response_model=CatalogEntryListResponseDTO,
    summary="Search models",
    description="Case-insensitive substring search on model names, at most 50 results.",
)
def search_models(
    q: str | None = Query(default=None, description="Model fragment", examples=["cbr"]),
    use_case: SearchModels = Depends(get_search_models_use_case),
) -> CatalogEntryListResponseDTO:
    entries = use_case.execute(SearchModelsRequest(query=q))
    return CatalogEntryListResponseDTO(data=[CatalogMapper.to_entry_dto(entry) for entry in entries])


# ==============================================================================
# Admin catalog management
# ==============================================================================


@admin_router.get(
    "/catalog",
    response_model=CatalogPageResponseDTO,
    summary="List catalog entries",
    description="""
    Paginated catalog listing sorted by make, then model.

    ## Filters
    - make, category: case-insensitive exact match
    - search: matches make + model ignoring spacing (`s1000rr` finds `S 1000 RR`)
    """,
)
def list_catalog(
    query: CatalogListQueryDTO = Depends(),
    use_case: SearchCatalog = Depends(get_search_catalog_use_case),
) -> CatalogPageResponseDTO:
    request = CatalogMapper.to_search_request(query)
    result = use_case.execute(request)
    return CatalogMapper.to_page_response(result, request)


@admin_router.post(
    "/catalog/check-missing",
    response_model=CheckMissingResponseDTO,
    summary="List import candidates not yet in the catalog",
    description="Rows are compared by normalized make + model; duplicates within the request are reported once.",
)
def check_missing(
    body: ImportRequestDTO,
    use_case: CheckMissingEntries = Depends(get_check_missing_use_case),
) -> CheckMissingResponseDTO:
    result = use_case.execute(CatalogMapper.to_import_request(body))
    return CatalogMapper.to_missing_response(result.missing)


@admin_router.post(
    "/catalog/bulk-create",
    response_model=BulkCreateResponseDTO,
    summary="Create entries for candidates not yet in the catalog",
    description="Idempotent: repeating the same request creates nothing new.",
)
def bulk_create(
    body: ImportRequestDTO,
    use_case: BulkCreateMissingEntries = Depends(get_bulk_create_use_case),
) -> BulkCreateResponseDTO:
    result = use_case.execute(CatalogMapper.to_import_request(body))
    return CatalogMapper.to_bulk_create_response(result.created)


@admin_router.post(
    "/catalog/import",
    response_model=ImportResponseDTO,
    summary="Import full catalog rows",
    responses={
        200: {
            "description": "Import counts",
            "content": {"application/json": {"example": {"created": 1, "skipped": 1}}},
        }
    },
)
def import_catalog(
    body: ImportRequestDTO,
    use_case: ImportCatalog = Depends(get_import_catalog_use_case),
) -> ImportResponseDTO:
    result = use_case.execute(CatalogMapper.to_import_request(body))
    return CatalogMapper.to_import_response(result)


@admin_router.get(
    "/catalog/{entry_id}",
    response_model=CatalogEntryResponseDTO,
    summary="Get a catalog entry",
    responses=error_responses(404),
)
def get_catalog_entry(
    entry_id: str,
    use_case: GetCatalogEntry = Depends(get_get_catalog_entry_use_case),
) -> CatalogEntryResponseDTO:
    return CatalogEntryResponseDTO(data=CatalogMapper.to_entry_dto(use_case.execute(entry_id)))


@admin_router.post(
    "/catalog",
    response_model=CatalogEntryResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a catalog entry",
    responses=error_responses(409),
)
def create_catalog_entry(
    body: CatalogEntryCreateDTO,
    use_case: CreateCatalogEntry = Depends(get_create_catalog_entry_use_case),
) -> CatalogEntryResponseDTO:
    entry = use_case.execute(CatalogMapper.to_draft(body))
    return CatalogEntryResponseDTO(data=CatalogMapper.to_entry_dto(entry))


@admin_router.put(
    "/catalog/{entry_id}",
    response_model=CatalogEntryResponseDTO,
    summary="Update a catalog entry",
    responses=error_responses(404, 409),
)
def update_catalog_entry(
    entry_id: str,
    body: CatalogEntryUpdateDTO,
    use_case: UpdateCatalogEntry = Depends(get_update_catalog_entry_use_case),
) -> CatalogEntryResponseDTO:
    request = UpdateCatalogEntryRequest(entry_id=entry_id, changes=CatalogMapper.to_changes(body))
    return CatalogEntryResponseDTO(data=CatalogMapper.to_entry_dto(use_case.execute(request)))


@admin_router.delete(
    "/catalog/{entry_id}",
    response_model=MessageResponseDTO,
    summary="Delete a catalog entry",
    responses=error_responses(404),
)
def delete_catalog_entry(
    entry_id: str,
    use_case: DeleteCatalogEntry = Depends(get_delete_catalog_entry_use_case),
) -> MessageResponseDTO:
    use_case.execute(entry_id)
    return MessageResponseDTO(message="Catalog entry deleted")
