from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from motoin.domain.errors import ValidationError
from motoin.domain.normalization import composite_key

UNKNOWN = "Unknown"

MAKE_MAX_LENGTH = 100
MODEL_MAX_LENGTH = 150
LABEL_MAX_LENGTH = 100
INT32_MAX = 2**31 - 1


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class CatalogValidationError(ValidationError):
    """Raised when a catalog entry or catalog filter is invalid."""

    pass


# ==============================================================================
# Entities
# ==============================================================================


@dataclass(frozen=True)
class CatalogEntry:
    """One make/model combination available for compatibility matching."""

    id: str
    make: str
    model: str
    displacement: int = 0
    years: list[int] = field(default_factory=list)
    category: str = UNKNOWN
    country: str = UNKNOWN
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def key(self) -> str:
        return composite_key(self.make, self.model)


@dataclass(frozen=True, slots=True)
class CatalogEntryDraft:
    """Data for a catalog entry that does not exist yet."""

    make: str
    model: str
    displacement: int = 0
    years: list[int] = field(default_factory=list)
    category: str = UNKNOWN
    country: str = UNKNOWN

    @property
    def key(self) -> str:
        return composite_key(self.make, self.model)

    def validate(self) -> None:
        """
        Raises:
            CatalogValidationError: If make or model is blank, a text field is
                longer than its column, or displacement or a year is out of range
        """
        errors = []
        if not self.make or not self.make.strip():
            errors.append({"field": "make", "message": "Make is required", "code": "REQUIRED"})
        if not self.model or not self.model.strip():
            errors.append({"field": "model", "message": "Model is required", "code": "REQUIRED"})

        for name, value, limit in (
            ("make", self.make, MAKE_MAX_LENGTH),
            ("model", self.model, MODEL_MAX_LENGTH),
            ("category", self.category, LABEL_MAX_LENGTH),
            ("country", self.country, LABEL_MAX_LENGTH),
        ):
            if value and len(value.strip()) > limit:
                errors.append(
                    {
                        "field": name,
                        "message": f"Must be at most {limit} characters",
                        "code": "TOO_LONG",
                    }
                )

        if self.displacement < 0:
            errors.append(
                {
                    "field": "displacement",
                    "message": "Must be greater than or equal to 0",
                    "code": "INVALID_VALUE",
                }
            )
        elif self.displacement > INT32_MAX:
            errors.append(
                {
                    "field": "displacement",
                    "message": f"Must be less than or equal to {INT32_MAX}",
                    "code": "INVALID_VALUE",
                }
            )
        if any(not -INT32_MAX <= year <= INT32_MAX for year in self.years):
            errors.append({"field": "years", "message": "Year out of range", "code": "INVALID_VALUE"})
        if errors:
            raise CatalogValidationError(errors=errors)


@dataclass(frozen=True, slots=True)
class CatalogEntryChanges:
    """Partial update of a catalog entry. None means "leave unchanged"."""

    make: str | None = None
    model: str | None = None
    displacement: int | None = None
    years: list[int] | None = None
    category: str | None = None
    country: str | None = None

    def apply_to(self, entry: CatalogEntry) -> CatalogEntryDraft:
        return CatalogEntryDraft(
            make=self.make if self.make is not None else entry.make,
            model=self.model if self.model is not None else entry.model,
            displacement=self.displacement if self.displacement is not None else entry.displacement,
            years=self.years if self.years is not None else entry.years,
            category=self.category if self.category is not None else entry.category,
            country=self.country if self.country is not None else entry.country,
        )


# ==============================================================================
# Queries
# ==============================================================================


@dataclass(frozen=True, slots=True)
class LookupFilters:
    """
    Filters for the public compatibility lookups.

    make/model are case-insensitive exact matches, displacement is numeric
    equality. All filters are optional and combine with AND semantics.
    """

    make: str | None = None
    model: str | None = None
    displacement: int | None = None


@dataclass(frozen=True, slots=True)
class CatalogFilters:
    """Filters for the paginated admin listing."""

    make: str | None = None
    category: str | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class FilterSummary:
    makes: list[str]
    displacements: list[int]
    models: list[str]
    years: list[int]

    @classmethod
    def from_entries(cls, entries: list[CatalogEntry]) -> FilterSummary:
        return cls(
            makes=sorted({entry.make for entry in entries}),
            displacements=sorted({entry.displacement for entry in entries}),
            models=sorted({entry.model for entry in entries}),
            years=sorted({year for entry in entries for year in entry.years}),
        )


# ==============================================================================
# Import
# ==============================================================================


@dataclass(frozen=True, slots=True)
class MakeModel:
    make: str
    model: str


@dataclass(frozen=True, slots=True)
class ImportCandidate:
    """
    One row submitted to the import pipeline, kept as received.

    displacement stays loosely typed (int, float, numeric string or None)
    because rows come from external JSON; parsing happens in the pipeline.
    """

    make: str | None
    model: str | None
    displacement: object = None
    years: list[int] | None = None
    category: str | None = None
    country: str | None = None

    def has_identity(self) -> bool:
        return bool(self.make and self.make.strip() and self.model and self.model.strip())


@dataclass(frozen=True, slots=True)
class ImportResult:
    created: int = 0
    skipped: int = 0
