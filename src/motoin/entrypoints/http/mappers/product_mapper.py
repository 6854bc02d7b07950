from __future__ import annotations

from decimal import Decimal
from typing import Any

from motoin.domain.products import Compatibility, Product, ProductDraft, ProductFilters, ProductSort
from motoin.entrypoints.http.dtos.products import (
    CompatibilityDTO,
    ProductDTO,
    ProductListQueryDTO,
    ProductPageResponseDTO,
    ProductWriteDTO,
)
from motoin.entrypoints.http.mappers.pagination import to_domain_paging, to_pagination
from motoin.use_cases.search_products import SearchProductsRequest, SearchProductsResponse

_PRICE_FIELDS = ("price", "regular_price", "sale_price", "mechanical_price", "wholesale_price")


def _money(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


class ProductMapper:
    """Maps between REST DTOs and domain models for products. Money is a string at the boundary."""

    @staticmethod
    def to_search_request(dto: ProductListQueryDTO) -> SearchProductsRequest:
        return SearchProductsRequest(
            filters=ProductFilters(
                category=dto.category,
                in_stock=dto.in_stock,
                min_price=Decimal(dto.min_price) if dto.min_price else None,
                max_price=Decimal(dto.max_price) if dto.max_price else None,
                search=dto.search,
                include_unpublished=dto.published == "all",
                sort=ProductSort(dto.sort.value) if dto.sort else ProductSort.NEWEST,
            ),
            paging=to_domain_paging(dto),
        )

    @staticmethod
    def to_product_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            wc_id=product.wc_id,
            sku=product.sku,
            name=product.name,
            short_description=product.short_description,
            description=product.description,
            price=_money(product.price),
            regular_price=_money(product.regular_price),
            sale_price=_money(product.sale_price),
            mechanical_price=_money(product.mechanical_price),
            wholesale_price=_money(product.wholesale_price),
            stock=product.stock,
            in_stock=product.in_stock,
            categories=product.categories,
            tags=product.tags,
            images=product.images,
            published=product.published,
            type=product.type,
            compatibility=[
                CompatibilityDTO(
                    brand=item.brand,
                    model=item.model,
                    displacement=item.displacement,
                    years=item.years,
                    frame=item.frame,
                    position=item.position,
                )
                for item in product.compatibility
            ],
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    @staticmethod
    def to_page_response(
        result: SearchProductsResponse, request: SearchProductsRequest
    ) -> ProductPageResponseDTO:
        return ProductPageResponseDTO(
            data=[ProductMapper.to_product_dto(product) for product in result.products],
            pagination=to_pagination(request.paging, result.total_count),
        )

    @staticmethod
    def to_changes(dto: ProductWriteDTO) -> dict[str, Any]:
        """Only the fields present in the request body, converted to domain types."""
        changes: dict[str, Any] = dto.model_dump(exclude_unset=True, exclude={"compatibility"})
        for name in _PRICE_FIELDS:
            if changes.get(name) is not None:
                changes[name] = Decimal(changes[name])
        if "compatibility" in dto.model_fields_set:
            changes["compatibility"] = [
                Compatibility(**item.model_dump()) for item in dto.compatibility or []
            ]
        for name in ("categories", "tags", "images"):
            if name in changes and changes[name] is None:
                changes[name] = []
        for name in ("stock", "in_stock", "published"):
            if name in changes and changes[name] is None:
                del changes[name]
        return changes

    @staticmethod
    def to_draft(dto: ProductWriteDTO) -> ProductDraft:
        changes = ProductMapper.to_changes(dto)
        changes["name"] = changes.get("name") or ""
        return ProductDraft(**changes)
