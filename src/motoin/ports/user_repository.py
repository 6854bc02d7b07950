from __future__ import annotations

from abc import ABC, abstractmethod

from motoin.domain.paging import Paging, SearchResult
from motoin.domain.users import User, UserFilters, UserStats


class UserRepository(ABC):
    """
    Port for user account storage.

    E-mail addresses are stored normalized (trimmed, lower-case) and are
    unique: add and save raise ConflictError when another account already
    uses the address.
    """

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None: ...

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Lookup by normalized e-mail."""
        ...

    @abstractmethod
    def add(self, user: User) -> User: ...

    @abstractmethod
    def save(self, user: User) -> User:
        """Persist every field of an existing user and return the stored state."""
        ...

    @abstractmethod
    def delete(self, user_id: str) -> bool: ...

    @abstractmethod
    def search(self, filters: UserFilters, paging: Paging) -> SearchResult[User]:
        """Newest first. search matches name or e-mail, case-insensitively."""
        ...

    @abstractmethod
    def stats(self) -> UserStats: ...
