from __future__ import annotations

from abc import ABC, abstractmethod

from motoin.domain.orders import Order, OrderChanges, OrderFilters, OrderStats
from motoin.domain.paging import Paging, SearchResult


class OrderRepository(ABC):
    """Port for order storage. Listings are newest first."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored orders, used to sequence order numbers."""
        ...

    @abstractmethod
    def add(self, order: Order) -> Order:
        """
        Raises:
            ConflictError: If the order number is already taken
        """
        ...

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None: ...

    @abstractmethod
    def get_for_user(self, order_id: str, user_id: str) -> Order | None:
        """The order, only if it belongs to user_id."""
        ...

    @abstractmethod
    def search(self, filters: OrderFilters, paging: Paging) -> SearchResult[Order]: ...

    @abstractmethod
    def update(self, order_id: str, changes: OrderChanges) -> Order | None: ...

    @abstractmethod
    def delete(self, order_id: str) -> bool: ...

    @abstractmethod
    def stats(self) -> OrderStats:
        """Counts per status and revenue summed over paid orders."""
        ...
