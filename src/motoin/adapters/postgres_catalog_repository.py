"""PostgreSQL implementation of CatalogRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import DataError, IntegrityError
from sqlalchemy.orm import Session

from motoin.adapters.sql_patterns import LIKE_ESCAPE, contains_pattern
from motoin.domain.catalog import (
    CatalogEntry,
    CatalogEntryDraft,
    CatalogFilters,
    CatalogValidationError,
    LookupFilters,
    MakeModel,
)
from motoin.domain.errors import ConflictError
from motoin.domain.normalization import case_insensitive_exact_match, fuzzy_search_pattern
from motoin.domain.paging import Paging, SearchResult
from motoin.infra.db.models.catalog_entry import CatalogEntryRow
from motoin.ports.catalog_repository import CatalogRepository

if TYPE_CHECKING:
    from sqlalchemy.sql import Select


class PostgresCatalogRepository(CatalogRepository):
    """
    PostgreSQL implementation of CatalogRepository.

    - Case-insensitive exact matches use the same escaped, anchored patterns
      as the in-memory implementation, evaluated with PostgreSQL's ~* operator
    - Each insert runs in a SAVEPOINT, so a UNIQUE violation on
      normalized_key rolls back only that row and surfaces as ConflictError
    - Converts CatalogEntryRow (infrastructure) to CatalogEntry (domain)
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_makes(self) -> list[str]:
        query = select(CatalogEntryRow.make).distinct().order_by(CatalogEntryRow.make)
        return list(self._session.execute(query).scalars().all())

    def list_displacements(self, make: str | None = None) -> list[int]:
        query = self._apply_lookup(
            select(CatalogEntryRow.displacement).distinct(), LookupFilters(make=make)
        ).order_by(CatalogEntryRow.displacement)
        return list(self._session.execute(query).scalars().all())

    def list_models(self, make: str | None = None, displacement: int | None = None) -> list[str]:
        query = self._apply_lookup(
            select(CatalogEntryRow.model).distinct(),
            LookupFilters(make=make, displacement=displacement),
        ).order_by(CatalogEntryRow.model)
        return list(self._session.execute(query).scalars().all())

    def find_one(self, filters: LookupFilters) -> CatalogEntry | None:
        query = self._apply_lookup(select(CatalogEntryRow), filters).limit(1)
        row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def find_all(self, filters: LookupFilters) -> list[CatalogEntry]:
        query = self._apply_lookup(select(CatalogEntryRow), filters)
        rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def search_models(self, term: str, limit: int) -> list[CatalogEntry]:
        query = (
            select(CatalogEntryRow)
            .where(CatalogEntryRow.model.ilike(contains_pattern(term), escape=LIKE_ESCAPE))
            .limit(limit)
        )
        rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def search(self, filters: CatalogFilters, paging: Paging) -> SearchResult[CatalogEntry]:
        """
        Executes two queries:
        1. COUNT(*) over the filtered set (before paging)
        2. SELECT ordered by make, model with OFFSET/LIMIT
        """
        query = self._build_search_query(filters)

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        query = (
            query.order_by(CatalogEntryRow.make, CatalogEntryRow.model)
            .offset(paging.offset)
            .limit(paging.per_page)
        )
        rows = self._session.execute(query).scalars().all()

        return SearchResult(items=[self._to_domain(row) for row in rows], total_count=total_count)

    def list_make_model_pairs(self) -> list[MakeModel]:
        query = select(CatalogEntryRow.make, CatalogEntryRow.model)
        return [MakeModel(make=make, model=model) for make, model in self._session.execute(query)]

    def get_by_id(self, entry_id: str) -> CatalogEntry | None:
        row = self._session.get(CatalogEntryRow, UUID(entry_id))
        return self._to_domain(row) if row else None

    def add(self, draft: CatalogEntryDraft) -> CatalogEntry:
        row = CatalogEntryRow()
        self._copy_draft(row, draft)

        try:
            with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError as exc:
            raise ConflictError(
                f"Catalog entry '{draft.make} {draft.model}' already exists",
                make=draft.make,
                model=draft.model,
            ) from exc
        except DataError as exc:
            raise CatalogValidationError("Catalog entry does not fit the catalog columns") from exc

        return self._to_domain(row)

    def update(self, entry_id: str, draft: CatalogEntryDraft) -> CatalogEntry | None:
        row = self._session.get(CatalogEntryRow, UUID(entry_id))
        if row is None:
            return None

        try:
            with self._session.begin_nested():
                self._copy_draft(row, draft)
        except IntegrityError as exc:
            self._session.refresh(row)
            raise ConflictError(
                f"Catalog entry '{draft.make} {draft.model}' already exists",
                make=draft.make,
                model=draft.model,
            ) from exc
        except DataError as exc:
            self._session.refresh(row)
            raise CatalogValidationError("Catalog entry does not fit the catalog columns") from exc

        self._session.refresh(row)
        return self._to_domain(row)

    def delete(self, entry_id: str) -> bool:
        result = self._session.execute(
            delete(CatalogEntryRow).where(CatalogEntryRow.id == UUID(entry_id))
        )
        return bool(result.rowcount)

    def _apply_lookup(self, query: Select, filters: LookupFilters) -> Select:
        make = case_insensitive_exact_match(filters.make)
        if make is not None:
            query = query.where(CatalogEntryRow.make.regexp_match(make.pattern, flags="i"))

        model = case_insensitive_exact_match(filters.model)
        if model is not None:
            query = query.where(CatalogEntryRow.model.regexp_match(model.pattern, flags="i"))

        if filters.displacement is not None:
            query = query.where(CatalogEntryRow.displacement == filters.displacement)

        return query

    def _build_search_query(self, filters: CatalogFilters) -> Select[tuple[CatalogEntryRow]]:
        query = select(CatalogEntryRow)

        make = case_insensitive_exact_match(filters.make)
        if make is not None:
            query = query.where(CatalogEntryRow.make.regexp_match(make.pattern, flags="i"))

        category = case_insensitive_exact_match(filters.category)
        if category is not None:
            query = query.where(CatalogEntryRow.category.regexp_match(category.pattern, flags="i"))

        fuzzy = fuzzy_search_pattern(filters.search)
        if fuzzy is not None:
            label = CatalogEntryRow.make + " " + CatalogEntryRow.model
            query = query.where(label.regexp_match(fuzzy.pattern, flags="i"))

        return query

    @staticmethod
    def _copy_draft(row: CatalogEntryRow, draft: CatalogEntryDraft) -> None:
        row.make = draft.make.strip()
        row.model = draft.model.strip()
        row.normalized_key = draft.key
        row.displacement = draft.displacement
        row.years = sorted(set(draft.years))
        row.category = draft.category
        row.country = draft.country

    @staticmethod
    def _to_domain(row: CatalogEntryRow) -> CatalogEntry:
        return CatalogEntry(
            id=str(row.id),
            make=row.make,
            model=row.model,
            displacement=row.displacement,
            years=list(row.years or []),
            category=row.category,
            country=row.country,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
