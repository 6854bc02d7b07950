from __future__ import annotations

from abc import ABC, abstractmethod

from motoin.domain.paging import Paging, SearchResult
from motoin.domain.tickets import Ticket, TicketFilters, TicketStats


class TicketRepository(ABC):
    """Port for support ticket storage. Listings are newest first."""

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def add(self, ticket: Ticket) -> Ticket:
        """
        Raises:
            ConflictError: If the ticket number is already taken
        """
        ...

    @abstractmethod
    def get_by_id(self, ticket_id: str) -> Ticket | None: ...

    @abstractmethod
    def save(self, ticket: Ticket) -> Ticket:
        """Persist every field of an existing ticket, messages included."""
        ...

    @abstractmethod
    def delete(self, ticket_id: str) -> bool: ...

    @abstractmethod
    def search(self, filters: TicketFilters, paging: Paging) -> SearchResult[Ticket]: ...

    @abstractmethod
    def count_unread(self, user_id: str) -> int:
        """Tickets of user_id with a staff update the user has not seen."""
        ...

    @abstractmethod
    def stats(self) -> TicketStats: ...
