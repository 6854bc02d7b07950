"""PostgreSQL implementation of ProductRepository."""

from __future__ import annotations

from dataclasses import asdict, fields
from typing import TYPE_CHECKING, Any
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from motoin.adapters.sql_patterns import LIKE_ESCAPE, contains_pattern
from motoin.domain.paging import Paging, SearchResult
from motoin.domain.products import (
    Compatibility,
    Product,
    ProductDraft,
    ProductFilters,
    ProductSort,
)
from motoin.infra.db.models.product import ProductRow
from motoin.ports.product_repository import ProductRepository

if TYPE_CHECKING:
    from sqlalchemy.sql import Select

_SORT_ORDER = {
    ProductSort.NEWEST: ProductRow.created_at.desc(),
    ProductSort.PRICE_ASC: ProductRow.price.asc(),
    ProductSort.PRICE_DESC: ProductRow.price.desc(),
    ProductSort.NAME_ASC: ProductRow.name.asc(),
    ProductSort.NAME_DESC: ProductRow.name.desc(),
}

_DRAFT_FIELDS = tuple(f.name for f in fields(ProductDraft))


class PostgresProductRepository(ProductRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def search(self, filters: ProductFilters, paging: Paging) -> SearchResult[Product]:
        query = self._build_query(filters)

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        query = (
            query.order_by(_SORT_ORDER[filters.sort], ProductRow.id)
            .offset(paging.offset)
            .limit(paging.per_page)
        )
        rows = self._session.execute(query).scalars().all()

        return SearchResult(items=[self._to_domain(row) for row in rows], total_count=total_count)

    def quick_search(self, term: str, limit: int) -> list[Product]:
        query = (
            select(ProductRow)
            .where(ProductRow.published.is_(True), self._text_match(term))
            .limit(limit)
        )
        return [self._to_domain(row) for row in self._session.execute(query).scalars().all()]

    def list_categories(self) -> list[str]:
        category = func.unnest(ProductRow.categories).label("category")
        subquery = select(category).subquery()
        query = (
            select(subquery.c.category)
            .where(subquery.c.category.is_not(None), subquery.c.category != "")
            .distinct()
            .order_by(subquery.c.category)
        )
        return list(self._session.execute(query).scalars().all())

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._session.get(ProductRow, UUID(product_id))
        return self._to_domain(row) if row else None

    def get_by_wc_id(self, wc_id: int) -> Product | None:
        query = select(ProductRow).where(ProductRow.wc_id == wc_id).limit(1)
        row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def add(self, draft: ProductDraft) -> Product:
        row = ProductRow()
        self._copy_draft(row, draft)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_domain(row)

    def update(self, product_id: str, draft: ProductDraft) -> Product | None:
        row = self._session.get(ProductRow, UUID(product_id))
        if row is None:
            return None
        self._copy_draft(row, draft)
        self._session.flush()
        self._session.refresh(row)
        return self._to_domain(row)

    def delete(self, product_id: str) -> bool:
        result = self._session.execute(delete(ProductRow).where(ProductRow.id == UUID(product_id)))
        return bool(result.rowcount)

    def _build_query(self, filters: ProductFilters) -> Select[tuple[ProductRow]]:
        query = select(ProductRow)

        if not filters.include_unpublished:
            query = query.where(ProductRow.published.is_(True))

        if filters.category:
            category = func.unnest(ProductRow.categories).column_valued("category")
            query = query.where(
                select(category)
                .where(category.ilike(contains_pattern(filters.category), escape=LIKE_ESCAPE))
                .exists()
            )

        if filters.in_stock:
            query = query.where(ProductRow.in_stock.is_(True))

        if filters.min_price is not None:
            query = query.where(ProductRow.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.where(ProductRow.price <= filters.max_price)

        if filters.search:
            query = query.where(self._text_match(filters.search))

        return query

    @staticmethod
    def _text_match(term: str) -> Any:
        pattern = contains_pattern(term)
        return or_(
            ProductRow.name.ilike(pattern, escape=LIKE_ESCAPE),
            ProductRow.short_description.ilike(pattern, escape=LIKE_ESCAPE),
            ProductRow.sku.ilike(pattern, escape=LIKE_ESCAPE),
        )

    @staticmethod
    def _copy_draft(row: ProductRow, draft: ProductDraft) -> None:
        for name in _DRAFT_FIELDS:
            if name == "compatibility":
                row.compatibility = [asdict(item) for item in draft.compatibility]
            else:
                setattr(row, name, getattr(draft, name))

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=str(row.id),
            name=row.name,
            wc_id=row.wc_id,
            sku=row.sku,
            short_description=row.short_description,
            description=row.description,
            price=row.price,
            regular_price=row.regular_price,
            sale_price=row.sale_price,
            mechanical_price=row.mechanical_price,
            wholesale_price=row.wholesale_price,
            stock=row.stock,
            in_stock=row.in_stock,
            categories=list(row.categories or []),
            tags=list(row.tags or []),
            images=list(row.images or []),
            published=row.published,
            type=row.type,
            compatibility=[Compatibility(**item) for item in row.compatibility or []],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
