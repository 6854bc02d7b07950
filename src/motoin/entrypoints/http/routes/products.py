from fastapi import APIRouter, Depends, Query, status

from motoin.entrypoints.http.dependencies import (
    get_create_product_use_case,
    get_delete_product_use_case,
    get_get_product_use_case,
    get_list_categories_use_case,
    get_quick_search_products_use_case,
    get_search_products_use_case,
    get_update_product_use_case,
    require_admin,
)
from motoin.entrypoints.http.dtos.common import MessageResponseDTO
from motoin.entrypoints.http.dtos.products import (
    CategoriesResponseDTO,
    ProductListQueryDTO,
    ProductListResponseDTO,
    ProductPageResponseDTO,
    ProductResponseDTO,
    ProductWriteDTO,
)
from motoin.entrypoints.http.error_responses import error_responses
from motoin.entrypoints.http.mappers.product_mapper import ProductMapper
from motoin.use_cases.manage_products import (
    CreateProduct,
    DeleteProduct,
    GetProduct,
    UpdateProduct,
    UpdateProductRequest,
)
from motoin.use_cases.search_products import (
    DEFAULT_QUICK_SEARCH_LIMIT,
    ListProductCategories,
    QuickSearchProducts,
    QuickSearchRequest,
    SearchProducts,
)

router = APIRouter(tags=["Products"])

ADMIN_RESPONSES = error_responses(401, 403, 422)


@router.get(
    "/products",
    response_model=ProductPageResponseDTO,
    summary="List products",
    description="""
    Paginated product listing.

    ## Filters
    - All filters use AND semantics
    - category: case-insensitive substring of any category
    - search: case-insensitive substring of name, short description or SKU
    - min_price/max_price: inclusive range, decimal strings
    - published=all includes unpublished products

    ## Sorting
    price_asc, price_desc, name_asc, name_desc; newest first by default.

    ## Example
    ```
    GET /v1/products?category=freni&min_price=10.00&sort=price_asc
    ```
    """,
    responses=error_responses(422),
)
def list_products(
    query: ProductListQueryDTO = Depends(),
    use_case: SearchProducts = Depends(get_search_products_use_case),
) -> ProductPageResponseDTO:
    request = ProductMapper.to_search_request(query)
    result = use_case.execute(request)
    return ProductMapper.to_page_response(result, request)


@router.get(
    "/products/categories",
    response_model=CategoriesResponseDTO,
    summary="List product categories",
)
def list_categories(
    use_case: ListProductCategories = Depends(get_list_categories_use_case),
) -> CategoriesResponseDTO:
    return CategoriesResponseDTO(data=use_case.execute())


@router.get(
    "/products/search",
    response_model=ProductListResponseDTO,
    summary="Quick product search",
    description="Published products whose name, short description or SKU contains q. limit is capped at 100.",
)
def quick_search(
    q: str | None = Query(default=None, examples=["pastiglie"]),
    limit: int = Query(default=DEFAULT_QUICK_SEARCH_LIMIT),
    use_case: QuickSearchProducts = Depends(get_quick_search_products_use_case),
) -> ProductListResponseDTO:
    products = use_case.execute(QuickSearchRequest(query=q, limit=limit))
    return ProductListResponseDTO(data=[ProductMapper.to_product_dto(p) for p in products])


@router.get(
    "/products/{product_id}",
    response_model=ProductResponseDTO,
    summary="Get a product",
    description="product_id is the product UUID or its legacy numeric shop id.",
    responses=error_responses(404),
)
def get_product(
    product_id: str,
    use_case: GetProduct = Depends(get_get_product_use_case),
) -> ProductResponseDTO:
    return ProductResponseDTO(data=ProductMapper.to_product_dto(use_case.execute(product_id)))


@router.post(
    "/products",
    response_model=ProductResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    dependencies=[Depends(require_admin)],
    responses=ADMIN_RESPONSES,
)
def create_product(
    body: ProductWriteDTO,
    use_case: CreateProduct = Depends(get_create_product_use_case),
) -> ProductResponseDTO:
    product = use_case.execute(ProductMapper.to_draft(body))
    return ProductResponseDTO(data=ProductMapper.to_product_dto(product))


@router.put(
    "/products/{product_id}",
    response_model=ProductResponseDTO,
    summary="Update a product",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(404)},
)
def update_product(
    product_id: str,
    body: ProductWriteDTO,
    use_case: UpdateProduct = Depends(get_update_product_use_case),
) -> ProductResponseDTO:
    request = UpdateProductRequest(product_id=product_id, changes=ProductMapper.to_changes(body))
    return ProductResponseDTO(data=ProductMapper.to_product_dto(use_case.execute(request)))


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponseDTO,
    summary="Delete a product",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(404)},
)
def delete_product(
    product_id: str,
    use_case: DeleteProduct = Depends(get_delete_product_use_case),
) -> MessageResponseDTO:
    use_case.execute(product_id)
    return MessageResponseDTO(message="Product deleted")
