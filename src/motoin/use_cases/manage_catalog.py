"""Admin CRUD on individual catalog entries."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from motoin.domain.catalog import CatalogEntry, CatalogEntryChanges, CatalogEntryDraft
from motoin.domain.errors import NotFoundError
from motoin.domain.identifiers import validate_uuid
from motoin.ports.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)

RESOURCE = "CatalogEntry"


@dataclass(frozen=True, slots=True)
class UpdateCatalogEntryRequest:
    entry_id: str
    changes: CatalogEntryChanges


class GetCatalogEntry:
    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, entry_id: str) -> CatalogEntry:
        """
        Raises:
            ValidationError: If entry_id is not a valid UUID
            NotFoundError: If the entry does not exist
        """
        validate_uuid(entry_id, field="entry_id")

        entry = self._repository.get_by_id(entry_id)
        if entry is None:
            raise NotFoundError(RESOURCE, entry_id)
        return entry


class CreateCatalogEntry:
    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, draft: CatalogEntryDraft) -> CatalogEntry:
        """
        Raises:
            CatalogValidationError: If make or model is missing
            ConflictError: If the normalized make/model already exists
        """
        draft.validate()

        entry = self._repository.add(draft)
        logger.info(
            "Catalog entry created",
            extra={"entry_id": entry.id, "make": entry.make, "model": entry.model},
        )
        return entry


class UpdateCatalogEntry:
    """Apply a partial update; omitted fields keep their stored values."""

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: UpdateCatalogEntryRequest) -> CatalogEntry:
        validate_uuid(request.entry_id, field="entry_id")

        current = self._repository.get_by_id(request.entry_id)
        if current is None:
            raise NotFoundError(RESOURCE, request.entry_id)

        draft = request.changes.apply_to(current)
        draft.validate()

        updated = self._repository.update(request.entry_id, draft)
        if updated is None:
            raise NotFoundError(RESOURCE, request.entry_id)

        logger.info("Catalog entry updated", extra={"entry_id": updated.id})
        return updated


class DeleteCatalogEntry:
    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, entry_id: str) -> None:
        validate_uuid(entry_id, field="entry_id")

        if not self._repository.delete(entry_id):
            raise NotFoundError(RESOURCE, entry_id)

        logger.info("Catalog entry deleted", extra={"entry_id": entry_id})
