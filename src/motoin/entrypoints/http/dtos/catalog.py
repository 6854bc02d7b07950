from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from motoin.entrypoints.http.dtos.common import PageQueryDTO, PaginationDTO


class CatalogEntryDTO(BaseModel):
    id: str
    make: str
    model: str
    displacement: int
    years: list[int]
    category: str
    country: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StringListResponseDTO(BaseModel):
    data: list[str]


class IntListResponseDTO(BaseModel):
    data: list[int]


class FilterSummaryResponseDTO(BaseModel):
    makes: list[str]
    displacements: list[int]
    models: list[str]
    years: list[int]


class CatalogEntryListResponseDTO(BaseModel):
    data: list[CatalogEntryDTO]


class CatalogEntryResponseDTO(BaseModel):
    data: CatalogEntryDTO


class CatalogPageResponseDTO(BaseModel):
    data: list[CatalogEntryDTO]
    pagination: PaginationDTO


class CatalogListQueryDTO(PageQueryDTO):
    """Query parameters for the admin catalog listing."""

    make: str | None = Field(
        default=None,
        description="Filter by make (case-insensitive exact match)",
        examples=["Honda"],
    )
    category: str | None = Field(
        default=None,
        description="Filter by category (case-insensitive exact match)",
        examples=["Sport"],
    )
    search: str | None = Field(
        default=None,
        description='Search "make model", ignoring spaces ("s1000rr" finds "S 1000 RR")',
        examples=["cbr600"],
    )


class CatalogEntryCreateDTO(BaseModel):
    make: str = Field(min_length=1, max_length=100, examples=["Honda"])
    model: str = Field(min_length=1, max_length=150, examples=["CBR 600 RR"])
    displacement: int = Field(default=0, ge=0, description="Engine displacement in cc", examples=[600])
    years: list[int] = Field(default_factory=list, examples=[[2007, 2008, 2009]])
    category: str | None = Field(default=None, examples=["Sport"])
    country: str | None = Field(default=None, examples=["Japan"])


class CatalogEntryUpdateDTO(BaseModel):
    make: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=150)
    displacement: int | None = Field(default=None, ge=0)
    years: list[int] | None = None
    category: str | None = None
    country: str | None = None


def _text_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class ImportItemDTO(BaseModel):
    """
    One catalog row from an external source.

    Rows are accepted as loosely as possible: wrongly typed make/model make
    the row "malformed" (skipped later), displacement may be a number or a
    numeric string.
    """

    model_config = ConfigDict(extra="ignore")

    make: str | None = None
    model: str | None = None
    displacement: int | float | str | None = None
    years: list[int] | None = None
    category: str | None = None
    country: str | None = None

    @field_validator("make", "model", "category", "country", mode="before")
    @classmethod
    def _only_text(cls, value: Any) -> str | None:
        return _text_or_none(value)

    @field_validator("displacement", mode="before")
    @classmethod
    def _scalar_displacement(cls, value: Any) -> Any:
        if isinstance(value, (bool, list, dict)):
            return None
        return value

    @field_validator("years", mode="before")
    @classmethod
    def _integer_years(cls, value: Any) -> list[int] | None:
        if not isinstance(value, list):
            return None
        return [year for year in value if isinstance(year, int) and not isinstance(year, bool)]


class ImportRequestDTO(BaseModel):
    items: list[ImportItemDTO] | None = Field(
        default=None,
        examples=[[{"make": "Honda", "model": "CBR 600", "displacement": "600", "years": [2005]}]],
    )

    @field_validator("items", mode="before")
    @classmethod
    def _list_of_objects(cls, value: Any) -> list[Any] | None:
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, dict)]


class MakeModelDTO(BaseModel):
    make: str
    model: str


class CheckMissingResponseDTO(BaseModel):
    data: list[MakeModelDTO]


class BulkCreateResponseDTO(BaseModel):
    created: int


class ImportResponseDTO(BaseModel):
    created: int
    skipped: int
