from __future__ import annotations

import uuid

from motoin.domain.errors import ValidationError


def new_id() -> str:
    return str(uuid.uuid4())


def validate_uuid(value: str, field: str) -> None:
    """
    Ensure an identifier is a valid UUID string.

    Raises:
        ValidationError: With an INVALID_UUID field error
    """
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(
            errors=[
                {
                    "field": field,
                    "message": "Must be a valid UUID format",
                    "code": "INVALID_UUID",
                }
            ]
        )
