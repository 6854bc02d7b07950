from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from motoin.domain.users import (
    PaymentMethod,
    PaymentMethodType,
    User,
    add_payment_method,
    new_payment_method,
    remove_payment_method,
    update_payment_method,
)
from motoin.ports.user_repository import UserRepository


@dataclass(frozen=True, slots=True)
class AddPaymentMethodRequest:
    user: User
    type: PaymentMethodType
    details: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class UpdatePaymentMethodRequest:
    user: User
    method_id: str
    changes: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class RemovePaymentMethodRequest:
    user: User
    method_id: str


class AddPaymentMethod:
    """Returns the user's full, updated list of payment methods."""

    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, request: AddPaymentMethodRequest) -> list[PaymentMethod]:
        method = new_payment_method(request.type, **request.details)
        methods = add_payment_method(request.user.payment_methods, method)
        saved = self._users.save(replace(request.user, payment_methods=methods))
        return saved.payment_methods


class UpdatePaymentMethod:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, request: UpdatePaymentMethodRequest) -> list[PaymentMethod]:
        """
        Raises:
            NotFoundError: If the user has no method with method_id
        """
        methods = update_payment_method(request.user.payment_methods, request.method_id, request.changes)
        saved = self._users.save(replace(request.user, payment_methods=methods))
        return saved.payment_methods


class RemovePaymentMethod:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, request: RemovePaymentMethodRequest) -> list[PaymentMethod]:
        """
        Raises:
            NotFoundError: If the user has no method with method_id
        """
        methods = remove_payment_method(request.user.payment_methods, request.method_id)
        saved = self._users.save(replace(request.user, payment_methods=methods))
        return saved.payment_methods
