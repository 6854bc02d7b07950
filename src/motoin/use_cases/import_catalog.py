"""Catalog import use cases.

All three operations share one duplicate-detection discipline:

1. Snapshot the normalized (make, model) key of every stored entry.
2. Walk the candidates in input order, skipping malformed rows: blank
   make/model, or values that do not fit the catalog columns.
3. A candidate whose key is in the snapshot is a duplicate. Keys created
   during the call are added to the snapshot immediately, so a pair repeated
   within the same batch is created once (first occurrence wins).

The batch is best-effort: nothing is rolled back if a later row fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from motoin.domain.catalog import (
    UNKNOWN,
    CatalogEntryDraft,
    CatalogValidationError,
    ImportCandidate,
    ImportResult,
    MakeModel,
)
from motoin.domain.errors import ConflictError
from motoin.domain.normalization import composite_key
from motoin.ports.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ImportRequest:
    items: list[ImportCandidate] | None


@dataclass(frozen=True, slots=True)
class CheckMissingResponse:
    missing: list[MakeModel]


@dataclass(frozen=True, slots=True)
class BulkCreateResponse:
    created: int


def _existing_keys(repository: CatalogRepository) -> set[str]:
    return {composite_key(pair.make, pair.model) for pair in repository.list_make_model_pairs()}


def _parse_displacement(value: object) -> int:
    """Numeric displacement in cc; 0 when absent or unparseable."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError, OverflowError):
        return 0


def _storable(draft: CatalogEntryDraft) -> bool:
    try:
        draft.validate()
    except CatalogValidationError:
        return False
    return True


def _text_or_unknown(value: str | None) -> str:
    if value is None or not value.strip():
        return UNKNOWN
    return value.strip()


class CheckMissingEntries:
    """
    Report which candidates are not in the catalog yet.

    Pure read-side diff used to preview an import: performs no writes and
    returns the candidates' original display strings.
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: ImportRequest) -> CheckMissingResponse:
        if not request.items:
            return CheckMissingResponse(missing=[])

        existing = _existing_keys(self._repository)
        reported: set[str] = set()
        missing: list[MakeModel] = []

        for candidate in request.items:
            if not candidate.has_identity():
                continue
            if not _storable(CatalogEntryDraft(make=candidate.make, model=candidate.model)):  # type: ignore[arg-type]
                continue
            key = composite_key(candidate.make, candidate.model)
            if key in existing or key in reported:
                continue
            reported.add(key)
            missing.append(MakeModel(make=candidate.make, model=candidate.model))  # type: ignore[arg-type]

        return CheckMissingResponse(missing=missing)


class BulkCreateMissingEntries:
    """
    Create the candidates that are not in the catalog yet.

    New entries get displacement 0, the candidate's years (or none) and
    "Unknown" category/country. Only the created count is reported.
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: ImportRequest) -> BulkCreateResponse:
        if not request.items:
            return BulkCreateResponse(created=0)

        existing = _existing_keys(self._repository)
        created = 0

        for candidate in request.items:
            if not candidate.has_identity():
                continue

            draft = CatalogEntryDraft(
                make=candidate.make.strip(),  # type: ignore[union-attr]
                model=candidate.model.strip(),  # type: ignore[union-attr]
                displacement=0,
                years=list(candidate.years or []),
            )
            if not _storable(draft):
                continue
            key = draft.key
            if key in existing:
                continue

            existing.add(key)
            try:
                self._repository.add(draft)
            except ConflictError:
                # Created concurrently by another writer since the snapshot
                continue
            except CatalogValidationError:
                existing.discard(key)
                continue
            created += 1

        logger.info(
            "Bulk-created missing catalog entries",
            extra={"received": len(request.items), "created_count": created},
        )
        return BulkCreateResponse(created=created)


class ImportCatalog:
    """
    Import full catalog rows, skipping duplicates of stored or earlier rows.

    Malformed rows (no make or model, or values beyond the column bounds)
    are ignored and not counted. Duplicates
    (against the store or earlier rows of the same batch) count as skipped.
    """

    def __init__(self, catalog_repository: CatalogRepository) -> None:
        self._repository = catalog_repository

    def execute(self, request: ImportRequest) -> ImportResult:
        if not request.items:
            return ImportResult(created=0, skipped=0)

        existing = _existing_keys(self._repository)
        created = 0
        skipped = 0

        for row in request.items:
            if not row.has_identity():
                continue

            draft = CatalogEntryDraft(
                make=row.make.strip(),  # type: ignore[union-attr]
                model=row.model.strip(),  # type: ignore[union-attr]
                displacement=_parse_displacement(row.displacement),
                years=list(row.years or []),
                category=_text_or_unknown(row.category),
                country=_text_or_unknown(row.country),
            )
            if not _storable(draft):
                continue
            key = draft.key
            if key in existing:
                skipped += 1
                continue

            existing.add(key)
            try:
                self._repository.add(draft)
            except ConflictError:
                skipped += 1
                continue
            except CatalogValidationError:
                existing.discard(key)
                continue
            created += 1

        logger.info(
            "Imported catalog rows",
            extra={"received": len(request.items), "created_count": created, "skipped_count": skipped},
        )
        return ImportResult(created=created, skipped=skipped)
