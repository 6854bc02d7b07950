from pydantic import BaseModel, Field


class PaginationDTO(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class PageQueryDTO(BaseModel):
    """Common page-number pagination parameters."""

    page: int = Field(default=1, ge=1, description="1-based page number", examples=[1])
    per_page: int = Field(
        default=25,
        ge=1,
        le=100,
        description="Items per page",
        examples=[25],
    )


class MessageResponseDTO(BaseModel):
    success: bool = True
    message: str
