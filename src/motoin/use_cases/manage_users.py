"""Admin user management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from motoin.domain.errors import ConflictError, NotFoundError, ValidationError
from motoin.domain.identifiers import new_id, validate_uuid
from motoin.domain.paging import Paging
from motoin.domain.users import (
    ADMIN_FIELDS,
    User,
    UserFilters,
    UserStats,
    clean_profile,
    normalize_email,
    validate_email,
    validate_password,
)
from motoin.ports.security import PasswordHasher
from motoin.ports.user_repository import UserRepository

logger = logging.getLogger(__name__)

RESOURCE = "User"


@dataclass(frozen=True, slots=True)
class ListUsersRequest:
    filters: UserFilters
    paging: Paging


@dataclass(frozen=True, slots=True)
class ListUsersResponse:
    users: list[User]
    total_count: int


@dataclass(frozen=True, slots=True)
class CreateUserRequest:
    email: str
    password: str
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class UpdateUserRequest:
    user_id: str
    email: str | None = None
    password: str | None = None
    fields: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class DeleteUserRequest:
    actor: User
    user_id: str


def _admin_fields(values: Mapping[str, Any]) -> dict[str, Any]:
    return clean_profile({k: v for k, v in values.items() if k in ADMIN_FIELDS})


class ListUsers:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        request.paging.validate()
        result = self._users.search(request.filters, request.paging)
        return ListUsersResponse(users=result.items, total_count=result.total_count)


class GetUserStats:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self) -> UserStats:
        return self._users.stats()


class GetUser:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user_id: str) -> User:
        validate_uuid(user_id, field="user_id")
        user = self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(RESOURCE, user_id)
        return user


class CreateUser:
    """Admin-created account; unlike registration, role and is_active may be set."""

    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = user_repository
        self._hasher = password_hasher

    def execute(self, request: CreateUserRequest) -> User:
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
                **_admin_fields(request.fields),
            )
        )
        logger.info("User created by admin", extra={"user_id": user.id, "role": user.role.value})
        return user


class UpdateUser:
    """
    Admin edit of any account.

    The password is only replaced when a new one is given; a changed e-mail
    must not belong to another account.
    """

    def __init__(self, user_repository: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = user_repository
        self._hasher = password_hasher

    def execute(self, request: UpdateUserRequest) -> User:
        validate_uuid(request.user_id, field="user_id")
        user = self._users.get_by_id(request.user_id)
        if user is None:
            raise NotFoundError(RESOURCE, request.user_id)

        changes = _admin_fields(request.fields)

        if request.email:
            validate_email(request.email)
            email = normalize_email(request.email)
            if email != user.email:
                if self._users.get_by_email(email) is not None:
                    raise ConflictError("E-mail address already in use", email=email)
                changes["email"] = email

        if request.password:
            validate_password(request.password)
            changes["password_hash"] = self._hasher.hash(request.password)

        updated = self._users.save(replace(user, **changes))
        logger.info("User updated by admin", extra={"user_id": updated.id, "fields": sorted(changes)})
        return updated


class DeleteUser:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, request: DeleteUserRequest) -> None:
        """
        Raises:
            ValidationError: If an admin tries to delete their own account
            NotFoundError: If the user does not exist
        """
        validate_uuid(request.user_id, field="user_id")
        if request.user_id == request.actor.id:
            raise ValidationError("You cannot delete your own account")

        if not self._users.delete(request.user_id):
            raise NotFoundError(RESOURCE, request.user_id)
        logger.info("User deleted", extra={"user_id": request.user_id, "by": request.actor.id})
