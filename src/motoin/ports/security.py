"""Ports for credential hashing and bearer tokens."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class TokenClaims:
    user_id: str
    expires_at: datetime


class PasswordHasher(ABC):
    @abstractmethod
    def hash(self, password: str) -> str: ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool: ...


class TokenService(ABC):
    @abstractmethod
    def issue(self, user_id: str) -> IssuedToken: ...

    @abstractmethod
    def decode(self, token: str) -> TokenClaims:
        """
        Raises:
            TokenExpiredError: If the token signature is valid but it has expired
            UnauthorizedError: If the token is malformed or the signature is invalid
        """
        ...


class TokenBlacklist(ABC):
    """
    Revoked bearer tokens.

    Each entry is retained until the token's own expiry, after which the
    token would be rejected anyway and the entry may be dropped.
    """

    @abstractmethod
    def revoke(self, token: str, expires_at: datetime) -> None: ...

    @abstractmethod
    def is_revoked(self, token: str) -> bool: ...
