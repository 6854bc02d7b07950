from __future__ import annotations

from abc import ABC, abstractmethod

from motoin.domain.catalog import (
    CatalogEntry,
    CatalogEntryDraft,
    CatalogFilters,
    LookupFilters,
    MakeModel,
)
from motoin.domain.paging import Paging, SearchResult


class CatalogRepository(ABC):
    """
    Port for motorcycle catalog data access.

    String filters (make, model, category) are case-insensitive exact
    matches; admin search is a fuzzy-spacing match over "make model".
    Distinct-value lookups return sorted lists.

    Uniqueness: implementations must reject a write whose normalized
    (make, model) key already belongs to another entry by raising
    ConflictError. Import use cases rely on this to stay idempotent when two
    imports race.

    Contract (Preconditions):
        - filters and paging are pre-validated by the caller (UseCase)
        - ids are valid UUID strings
    """

    @abstractmethod
    def list_makes(self) -> list[str]: ...

    @abstractmethod
    def list_displacements(self, make: str | None = None) -> list[int]: ...

    @abstractmethod
    def list_models(self, make: str | None = None, displacement: int | None = None) -> list[str]: ...

    @abstractmethod
    def find_one(self, filters: LookupFilters) -> CatalogEntry | None:
        """Return the first entry matching every filter, or None."""
        ...

    @abstractmethod
    def find_all(self, filters: LookupFilters) -> list[CatalogEntry]: ...

    @abstractmethod
    def search_models(self, term: str, limit: int) -> list[CatalogEntry]:
        """Entries whose model contains term (case-insensitive, literal)."""
        ...

    @abstractmethod
    def search(self, filters: CatalogFilters, paging: Paging) -> SearchResult[CatalogEntry]:
        """Admin listing sorted by make then model, with total count before paging."""
        ...

    @abstractmethod
    def list_make_model_pairs(self) -> list[MakeModel]:
        """(make, model) of every stored entry, used to build the duplicate-key snapshot."""
        ...

    @abstractmethod
    def get_by_id(self, entry_id: str) -> CatalogEntry | None: ...

    @abstractmethod
    def add(self, draft: CatalogEntryDraft) -> CatalogEntry:
        """
        Persist a new entry.

        Raises:
            ConflictError: If another entry already has the same normalized key
        """
        ...

    @abstractmethod
    def update(self, entry_id: str, draft: CatalogEntryDraft) -> CatalogEntry | None:
        """
        Replace the stored fields of an entry. Returns None if it doesn't exist.

        Raises:
            ConflictError: If the new make/model collide with another entry
        """
        ...

    @abstractmethod
    def delete(self, entry_id: str) -> bool: ...
