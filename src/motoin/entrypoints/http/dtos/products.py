from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from motoin.entrypoints.http.dtos.common import PageQueryDTO, PaginationDTO

PRICE_PATTERN = r"^\d+(\.\d{1,2})?$"


class ProductSortDTO(str, Enum):
    price_asc = "price_asc"
    price_desc = "price_desc"
    name_asc = "name_asc"
    name_desc = "name_desc"


class CompatibilityDTO(BaseModel):
    brand: str | None = None
    model: str | None = None
    displacement: int | None = Field(default=None, ge=0)
    years: list[int] = Field(default_factory=list)
    frame: str | None = None
    position: str | None = Field(default=None, description="Front/rear, for brake parts")


class ProductDTO(BaseModel):
    id: str
    wc_id: int | None = None
    sku: str | None = None
    name: str
    short_description: str | None = None
    description: str | None = None
    price: str | None = None
    regular_price: str | None = None
    sale_price: str | None = None
    mechanical_price: str | None = None
    wholesale_price: str | None = None
    stock: int
    in_stock: bool
    categories: list[str]
    tags: list[str]
    images: list[str]
    published: bool
    type: str | None = None
    compatibility: list[CompatibilityDTO]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductListQueryDTO(PageQueryDTO):
    """Query parameters for the product listing."""

    category: str | None = Field(default=None, description="Category contains (case-insensitive)")
    in_stock: bool | None = Field(default=None, description="Only products in stock when true")
    min_price: str | None = Field(default=None, pattern=PRICE_PATTERN, examples=["10.00"])
    max_price: str | None = Field(default=None, pattern=PRICE_PATTERN, examples=["250.00"])
    search: str | None = Field(default=None, description="Name, short description or SKU contains")
    sort: ProductSortDTO | None = Field(default=None, description="Default: newest first")
    published: str | None = Field(
        default=None,
        description='"all" includes unpublished products; otherwise only published ones',
    )


class ProductPageResponseDTO(BaseModel):
    data: list[ProductDTO]
    pagination: PaginationDTO


class ProductListResponseDTO(BaseModel):
    data: list[ProductDTO]


class ProductResponseDTO(BaseModel):
    data: ProductDTO


class ProductWriteDTO(BaseModel):
    """Writable product fields. On update, only the fields sent are changed."""

    wc_id: int | None = None
    sku: str | None = None
    name: str | None = Field(default=None, min_length=1)
    short_description: str | None = None
    description: str | None = None
    price: str | None = Field(default=None, pattern=PRICE_PATTERN)
    regular_price: str | None = Field(default=None, pattern=PRICE_PATTERN)
    sale_price: str | None = Field(default=None, pattern=PRICE_PATTERN)
    mechanical_price: str | None = Field(default=None, pattern=PRICE_PATTERN)
    wholesale_price: str | None = Field(default=None, pattern=PRICE_PATTERN)
    stock: int | None = Field(default=None, ge=0)
    in_stock: bool | None = None
    categories: list[str] | None = None
    tags: list[str] | None = None
    images: list[str] | None = None
    published: bool | None = None
    type: str | None = None
    compatibility: list[CompatibilityDTO] | None = None


class CategoriesResponseDTO(BaseModel):
    data: list[str]
