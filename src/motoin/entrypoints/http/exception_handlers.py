"""FastAPI exception handlers for domain errors.

Translates domain errors to HTTP responses with the structured error format.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from motoin.domain.errors import DomainError

logger = logging.getLogger(__name__)

STATUS_CODE_MAP: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Handle all domain errors with automatic HTTP status code mapping.

    Maps domain errors to HTTP status codes:
    - VALIDATION_ERROR → 422 Unprocessable Entity
    - NOT_FOUND → 404 Not Found
    - CONFLICT → 409 Conflict
    - UNAUTHORIZED, TOKEN_EXPIRED → 401 Unauthorized
    - FORBIDDEN → 403 Forbidden
    - INTERNAL_ERROR → 500 Internal Server Error
    - Other → 400 Bad Request

    Clients tell an expired session apart from a bad one by the code.
    """
    error_dict = exc.to_dict()
    status_code = STATUS_CODE_MAP.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logger.error(
            "Domain error occurred",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
                "path": request.url.path,
                "method": request.method,
            },
        )
    else:
        logger.info(
            "Client error",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "path": request.url.path,
                "method": request.method,
            },
        )

    response_content: dict[str, Any] = {
        "detail": error_dict.get("message", str(exc)),
        "code": error_dict.get("code", exc.error_code),
    }
    if "errors" in error_dict:
        response_content["errors"] = error_dict["errors"]

    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=response_content, headers=headers)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI/Pydantic validation errors.

    Examples:
        - per_page=500 (exceeds max constraint)
        - price="abc" in an order item
        - Missing required field
    """
    errors = []

    for error in exc.errors():
        # Drop the 'body' / 'query' / 'path' prefix
        field_path = ".".join(
            str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")
        )
        errors.append(
            {
                "field": field_path,
                "message": error["msg"],
                "code": error["type"],
            }
        )

    logger.info(
        "Request validation error",
        extra={
            "errors": errors,
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Handle ValueError from mappers (e.g. Decimal or enum conversion)."""
    logger.info(
        "Value error",
        extra={
            "error_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": str(exc),
            "code": "INVALID_VALUE",
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler. Always logged with the full traceback."""
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(ValueError, handle_value_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
