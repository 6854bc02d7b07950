from __future__ import annotations

from unittest.mock import Mock

import pytest

from motoin.domain.errors import ConflictError, NotFoundError, ValidationError
from motoin.domain.paging import Paging, PagingValidationError, SearchResult
from motoin.domain.users import Role, User, UserFilters, UserStats
from motoin.ports.security import PasswordHasher
from motoin.ports.user_repository import UserRepository
from motoin.use_cases.manage_users import (
    CreateUser,
    CreateUserRequest,
    DeleteUser,
    DeleteUserRequest,
    GetUser,
    GetUserStats,
    ListUsers,
    ListUsersRequest,
    UpdateUser,
    UpdateUserRequest,
)

ADMIN_ID = "0b6f3c52-1d9a-4c0e-9a57-2f0a3f6a1c11"
CUSTOMER_ID = "5d1a8e2b-7c44-4f0e-8b2a-9e3d6c1f0a22"


@pytest.fixture
def admin() -> User:
    return User(id=ADMIN_ID, email="admin@motoin.it", password_hash="x", role=Role.ADMIN)


@pytest.fixture
def customer() -> User:
    return User(id=CUSTOMER_ID, email="mario@example.com", password_hash="old-hash")


@pytest.fixture
def users(customer: User) -> Mock:
    repository = Mock(spec=UserRepository)
    repository.get_by_id.return_value = customer
    repository.get_by_email.return_value = None
    repository.add.side_effect = lambda user: user
    repository.save.side_effect = lambda user: user
    return repository


@pytest.fixture
def hasher() -> Mock:
    hasher = Mock(spec=PasswordHasher)
    hasher.hash.side_effect = lambda password: f"hashed:{password}"
    return hasher


def test_list_users(users: Mock, customer: User) -> None:
    users.search.return_value = SearchResult(items=[customer], total_count=1)
    filters = UserFilters(role=Role.CUSTOMER, search="mario")

    response = ListUsers(users).execute(ListUsersRequest(filters=filters, paging=Paging()))

    assert response.users == [customer]
    assert response.total_count == 1
    users.search.assert_called_once_with(filters, Paging())


def test_list_users_validates_paging(users: Mock) -> None:
    with pytest.raises(PagingValidationError):
        ListUsers(users).execute(ListUsersRequest(filters=UserFilters(), paging=Paging(page=0)))


def test_user_stats(users: Mock) -> None:
    stats = UserStats(total=3, customers=2, admins=1, active=3, inactive=0)
    users.stats.return_value = stats

    assert GetUserStats(users).execute() == stats


def test_get_user(users: Mock, customer: User) -> None:
    assert GetUser(users).execute(CUSTOMER_ID) == customer


def test_get_missing_user(users: Mock) -> None:
    users.get_by_id.return_value = None

    with pytest.raises(NotFoundError):
        GetUser(users).execute(CUSTOMER_ID)


def test_create_user_with_role(users: Mock, hasher: Mock) -> None:
    user = CreateUser(users, hasher).execute(
        CreateUserRequest(
            email="Staff@MotoIn.it",
            password="secret1",
            fields={"role": Role.ADMIN, "is_active": False, "password_hash": "ignored"},
        )
    )

    assert user.email == "staff@motoin.it"
    assert user.role is Role.ADMIN
    assert user.is_active is False
    assert user.password_hash == "hashed:secret1"


def test_create_user_duplicate_email(users: Mock, hasher: Mock, customer: User) -> None:
    users.get_by_email.return_value = customer

    with pytest.raises(ConflictError):
        CreateUser(users, hasher).execute(CreateUserRequest(email="mario@example.com", password="secret1"))


def test_update_user_fields_and_password(users: Mock, hasher: Mock) -> None:
    updated = UpdateUser(users, hasher).execute(
        UpdateUserRequest(user_id=CUSTOMER_ID, password="newpass", fields={"role": Role.ADMIN})
    )

    assert updated.role is Role.ADMIN
    assert updated.password_hash == "hashed:newpass"


def test_update_user_keeps_password_when_omitted(users: Mock, hasher: Mock) -> None:
    updated = UpdateUser(users, hasher).execute(
        UpdateUserRequest(user_id=CUSTOMER_ID, fields={"first_name": "Mario"})
    )

    assert updated.password_hash == "old-hash"
    hasher.hash.assert_not_called()


def test_update_user_email_taken(users: Mock, hasher: Mock, admin: User) -> None:
    users.get_by_email.return_value = admin

    with pytest.raises(ConflictError):
        UpdateUser(users, hasher).execute(UpdateUserRequest(user_id=CUSTOMER_ID, email="admin@motoin.it"))


def test_update_user_same_email_is_not_a_conflict(users: Mock, hasher: Mock) -> None:
    updated = UpdateUser(users, hasher).execute(
        UpdateUserRequest(user_id=CUSTOMER_ID, email=" MARIO@example.com ")
    )

    assert updated.email == "mario@example.com"
    users.get_by_email.assert_not_called()


def test_delete_user(users: Mock, admin: User) -> None:
    users.delete.return_value = True

    DeleteUser(users).execute(DeleteUserRequest(actor=admin, user_id=CUSTOMER_ID))

    users.delete.assert_called_once_with(CUSTOMER_ID)


def test_admin_cannot_delete_self(users: Mock, admin: User) -> None:
    with pytest.raises(ValidationError):
        DeleteUser(users).execute(DeleteUserRequest(actor=admin, user_id=ADMIN_ID))

    users.delete.assert_not_called()


def test_delete_missing_user(users: Mock, admin: User) -> None:
    users.delete.return_value = False

    with pytest.raises(NotFoundError):
        DeleteUser(users).execute(DeleteUserRequest(actor=admin, user_id=CUSTOMER_ID))
