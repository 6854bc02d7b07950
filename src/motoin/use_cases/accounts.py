"""Customer account use cases: registration, sessions and self-service profile."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Mapping

from motoin.domain.errors import ConflictError, UnauthorizedError, ValidationError
from motoin.domain.identifiers import new_id
from motoin.domain.users import (
    PROFILE_FIELDS,
    Role,
    User,
    clean_profile,
    normalize_email,
    validate_email,
    validate_password,
)
from motoin.ports.security import PasswordHasher, TokenBlacklist, TokenService
from motoin.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegisterRequest:
    email: str
    password: str
    profile: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LoginRequest:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class AuthSession:
    user: User
    token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    user: User
    token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class UpdateProfileRequest:
    user: User
    changes: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class ChangePasswordRequest:
    user: User
    current_password: str
    new_password: str


def _profile_only(changes: Mapping[str, Any]) -> dict[str, Any]:
    return clean_profile({k: v for k, v in changes.items() if k in PROFILE_FIELDS})


class RegisterUser:
    """
    Create a customer account and sign it in.

    Self-registration always produces a customer; the role cannot be chosen.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ) -> None:
        self._users = user_repository
        self._hasher = password_hasher
        self._tokens = token_service

    def execute(self, request: RegisterRequest) -> AuthSession:
        """
        Raises:
            UserValidationError: If the e-mail or password is invalid
            ConflictError: If the e-mail address is already registered
        """
        validate_email(request.email)
        validate_password(request.password)
        email = normalize_email(request.email)

        if self._users.get_by_email(email) is not None:
            raise ConflictError("E-mail address already registered", email=email)

        user = self._users.add(
            User(
                id=new_id(),
                email=email,
                password_hash=self._hasher.hash(request.password),
                role=Role.CUSTOMER,
                **_profile_only(request.profile),
            )
        )
        issued = self._tokens.issue(user.id)

        logger.info("User registered", extra={"user_id": user.id})
        return AuthSession(user=user, token=issued.token, expires_at=issued.expires_at)


class LoginUser:
    def __init__(
        self,
        user_repository: UserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
    ) -> None:
        self._users = user_repository
        self._hasher = password_hasher
        self._tokens = token_service

    def execute(self, request: LoginRequest) -> AuthSession:
        """
        Raises:
            UnauthorizedError: On unknown e-mail, wrong password or disabled account
        """
        email = normalize_email(request.email)
        user = self._users.get_by_email(email)

        if user is None or not self._hasher.verify(request.password, user.password_hash):
            logger.info("Login failed", extra={"email": email, "reason": "invalid_credentials"})
            raise UnauthorizedError("Invalid credentials")

        if not user.is_active:
            logger.info("Login failed", extra={"user_id": user.id, "reason": "inactive"})
            raise UnauthorizedError("Account disabled")

        issued = self._tokens.issue(user.id)
        logger.info("User logged in", extra={"user_id": user.id})
        return AuthSession(user=user, token=issued.token, expires_at=issued.expires_at)


class AuthenticateToken:
    """Resolve a bearer token to an active user."""

    def __init__(
        self,
        user_repository: UserRepository,
        token_service: TokenService,
        token_blacklist: TokenBlacklist,
    ) -> None:
        self._users = user_repository
        self._tokens = token_service
        self._blacklist = token_blacklist

    def execute(self, token: str) -> AuthenticatedUser:
        """
        Raises:
            UnauthorizedError: If the token is revoked or invalid, or the user is gone or disabled
            TokenExpiredError: If the token has expired
        """
        if self._blacklist.is_revoked(token):
            raise UnauthorizedError("Token has been revoked")

        claims = self._tokens.decode(token)

        user = self._users.get_by_id(claims.user_id)
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found or disabled")

        return AuthenticatedUser(user=user, token=token, expires_at=claims.expires_at)


class LogoutUser:
    def __init__(self, token_blacklist: TokenBlacklist) -> None:
        self._blacklist = token_blacklist

    def execute(self, session: AuthenticatedUser) -> None:
        self._blacklist.revoke(session.token, session.expires_at)
        logger.info("User logged out", extra={"user_id": session.user.id})


class UpdateProfile:
    """Self-service profile edit. Only profile fields are accepted; role and e-mail are not."""

    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, request: UpdateProfileRequest) -> User:
        changes = _profile_only(request.changes)
        if not changes:
            return request.user
        return self._users.save(replace(request.user, **changes))


class ChangePassword:
    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = user_repository
        self._hasher = password_hasher

    def execute(self, request: ChangePasswordRequest) -> None:
        """
        Raises:
            ValidationError: If the current password is wrong or the new one is too short
        """
        if not self._hasher.verify(request.current_password, request.user.password_hash):
            raise ValidationError(
                errors=[
                    {
                        "field": "current_password",
                        "message": "Current password is incorrect",
                        "code": "INVALID_PASSWORD",
                    }
                ]
            )
        validate_password(request.new_password, field_name="new_password")

        self._users.save(replace(request.user, password_hash=self._hasher.hash(request.new_password)))
        logger.info("Password changed", extra={"user_id": request.user.id})
