"""REST API error response models.

Every error body carries a human-readable detail and a stable code; field
level problems are listed under errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """A single field-level error."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "min_price",
                "message": "Must be less than or equal to max_price",
                "code": "INVALID_RANGE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {
                "detail": "Order with identifier '...' not found",
                "code": "NOT_FOUND"
            }

        Validation error with field details:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [
                    {"field": "make", "message": "This field is required", "code": "REQUIRED"}
                ]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "CatalogEntry with identifier '...' not found", "code": "NOT_FOUND"},
                {"detail": "Token has expired", "code": "TOKEN_EXPIRED"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "min_price",
                            "message": "Must be less than or equal to max_price",
                            "code": "INVALID_RANGE",
                        },
                        {
                            "field": "max_price",
                            "message": "Must be greater than or equal to min_price",
                            "code": "INVALID_RANGE",
                        },
                    ],
                },
            ]
        }
    )


def error_responses(*status_codes: int) -> dict[int | str, dict]:
    """OpenAPI `responses` entries documenting the shared error body."""
    descriptions = {
        401: "Missing, invalid, expired or revoked token",
        403: "Authenticated but not allowed",
        404: "Resource not found",
        409: "Conflicts with existing data",
        422: "Validation error",
    }
    return {
        code: {"model": ErrorResponse, "description": descriptions.get(code, "Error")}
        for code in status_codes
    }
