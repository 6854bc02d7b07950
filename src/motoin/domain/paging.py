from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from motoin.domain.errors import ValidationError

T = TypeVar("T")

DEFAULT_PER_PAGE = 25
MAX_PER_PAGE = 100


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


@dataclass(frozen=True, slots=True)
class Paging:
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    def validate(self, max_per_page: int = MAX_PER_PAGE) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        if self.page < 1:
            raise PagingValidationError("page must be >= 1")
        if self.per_page <= 0:
            raise PagingValidationError("per_page must be > 0")
        if self.per_page > max_per_page:
            raise PagingValidationError(f"per_page must be <= {max_per_page}")

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.per_page) if total else 0


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """One page of results plus the number of matches before paging."""

    items: list[T]
    total_count: int
