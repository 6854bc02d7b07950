from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from motoin.domain.catalog import (
    CatalogEntry,
    CatalogEntryDraft,
    CatalogFilters,
    LookupFilters,
    MakeModel,
)
from motoin.domain.errors import ConflictError
from motoin.domain.identifiers import new_id
from motoin.domain.normalization import case_insensitive_exact_match, fuzzy_search_pattern
from motoin.domain.paging import Paging, SearchResult
from motoin.ports.catalog_repository import CatalogRepository


class InMemoryCatalogRepository(CatalogRepository):
    """
    Canonical contract implementation for tests.

    - Stores entries in insertion order
    - Applies AND-semantics filtering with the same patterns as PostgreSQL
    - Enforces the normalized (make, model) uniqueness rule
    - Applies paging AFTER filtering and sorting
    """

    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        self._entries: list[CatalogEntry] = list(entries or [])

    @property
    def entries(self) -> list[CatalogEntry]:
        return list(self._entries)

    def list_makes(self) -> list[str]:
        return sorted({entry.make for entry in self._entries})

    def list_displacements(self, make: str | None = None) -> list[int]:
        matches = self._filter(LookupFilters(make=make))
        return sorted({entry.displacement for entry in matches})

    def list_models(self, make: str | None = None, displacement: int | None = None) -> list[str]:
        matches = self._filter(LookupFilters(make=make, displacement=displacement))
        return sorted({entry.model for entry in matches})

    def find_one(self, filters: LookupFilters) -> CatalogEntry | None:
        matches = self._filter(filters)
        return matches[0] if matches else None

    def find_all(self, filters: LookupFilters) -> list[CatalogEntry]:
        return self._filter(filters)

    def search_models(self, term: str, limit: int) -> list[CatalogEntry]:
        needle = term.lower()
        return [entry for entry in self._entries if needle in entry.model.lower()][:limit]

    def search(self, filters: CatalogFilters, paging: Paging) -> SearchResult[CatalogEntry]:
        make = case_insensitive_exact_match(filters.make)
        category = case_insensitive_exact_match(filters.category)
        fuzzy = fuzzy_search_pattern(filters.search)

        matches = [
            entry
            for entry in self._entries
            if (make is None or make.search(entry.make))
            and (category is None or category.search(entry.category))
            and (fuzzy is None or fuzzy.search(f"{entry.make} {entry.model}"))
        ]
        matches.sort(key=lambda entry: (entry.make, entry.model))

        page = matches[paging.offset : paging.offset + paging.per_page]
        return SearchResult(items=page, total_count=len(matches))

    def list_make_model_pairs(self) -> list[MakeModel]:
        return [MakeModel(make=entry.make, model=entry.model) for entry in self._entries]

    def get_by_id(self, entry_id: str) -> CatalogEntry | None:
        return next((entry for entry in self._entries if entry.id == entry_id), None)

    def add(self, draft: CatalogEntryDraft) -> CatalogEntry:
        self._ensure_key_available(draft, exclude_id=None)

        now = datetime.now(timezone.utc)
        entry = CatalogEntry(
            id=new_id(),
            make=draft.make.strip(),
            model=draft.model.strip(),
            displacement=draft.displacement,
            years=sorted(set(draft.years)),
            category=draft.category,
            country=draft.country,
            created_at=now,
            updated_at=now,
        )
        self._entries.append(entry)
        return entry

    def update(self, entry_id: str, draft: CatalogEntryDraft) -> CatalogEntry | None:
        for index, entry in enumerate(self._entries):
            if entry.id != entry_id:
                continue
            self._ensure_key_available(draft, exclude_id=entry_id)
            updated = replace(
                entry,
                make=draft.make.strip(),
                model=draft.model.strip(),
                displacement=draft.displacement,
                years=sorted(set(draft.years)),
                category=draft.category,
                country=draft.country,
                updated_at=datetime.now(timezone.utc),
            )
            self._entries[index] = updated
            return updated
        return None

    def delete(self, entry_id: str) -> bool:
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.id != entry_id]
        return len(self._entries) < before

    def _filter(self, filters: LookupFilters) -> list[CatalogEntry]:
        make = case_insensitive_exact_match(filters.make)
        model = case_insensitive_exact_match(filters.model)
        return [
            entry
            for entry in self._entries
            if (make is None or make.search(entry.make))
            and (model is None or model.search(entry.model))
            and (filters.displacement is None or entry.displacement == filters.displacement)
        ]

    def _ensure_key_available(self, draft: CatalogEntryDraft, exclude_id: str | None) -> None:
        key = draft.key
        for entry in self._entries:
            if entry.id != exclude_id and entry.key == key:
                raise ConflictError(
                    f"Catalog entry '{draft.make} {draft.model}' already exists",
                    make=draft.make,
                    model=draft.model,
                )
