"""Test suite for UserMapper."""

from __future__ import annotations

import pytest

from motoin.domain.users import Address, PaymentMethod, PaymentMethodType, Role, ThemePreference, User
from motoin.entrypoints.http.dtos.users import (
    AdminUserCreateDTO,
    AdminUserUpdateDTO,
    PaymentMethodWriteDTO,
    ProfileUpdateDTO,
    UserListQueryDTO,
)
from motoin.entrypoints.http.mappers.user_mapper import UserMapper


def test_to_user_dto_never_exposes_password_hash() -> None:
    user = User(
        id="u-1",
        email="mario@example.com",
        password_hash="$2b$12$secret",
        billing_address=Address(city="Torino"),
        payment_methods=[PaymentMethod(id="pm-1", type=PaymentMethodType.BANK, iban="IT60X0542811101000000123456")],
        theme_preference=ThemePreference.DARK,
    )

    dto = UserMapper.to_user_dto(user)

    assert "password_hash" not in dto.model_dump()
    assert dto.billing_address.city == "Torino"
    assert dto.billing_address.country == "Italy"
    assert dto.payment_methods[0].type.value == "bank"
    assert dto.theme_preference.value == "dark"


def test_to_fields_converts_addresses_and_enums() -> None:
    dto = ProfileUpdateDTO.model_validate(
        {"shipping_address": {"street": "Via Roma", "city": "Milano"}, "theme_preference": "light"}
    )

    fields = UserMapper.to_fields(dto)

    assert fields == {
        "shipping_address": Address(street="Via Roma", city="Milano"),
        "theme_preference": ThemePreference.LIGHT,
    }


def test_to_fields_drops_account_credentials() -> None:
    dto = AdminUserCreateDTO(email="new@example.com", password="secret123", role="admin")

    fields = UserMapper.to_fields(dto)

    assert "email" not in fields
    assert "password" not in fields
    assert fields["role"] is Role.ADMIN


def test_to_fields_skips_null_flags() -> None:
    dto = AdminUserUpdateDTO.model_validate({"is_active": None, "role": None, "phone": None})

    assert UserMapper.to_fields(dto) == {"phone": None}


def test_to_user_filters() -> None:
    filters = UserMapper.to_user_filters(UserListQueryDTO(role="admin", search="rossi"))

    assert filters.role is Role.ADMIN
    assert filters.search == "rossi"


def test_payment_method_type_is_required() -> None:
    with pytest.raises(ValueError):
        UserMapper.to_payment_method_type(PaymentMethodWriteDTO(name="Carta"))


def test_payment_method_changes() -> None:
    dto = PaymentMethodWriteDTO.model_validate({"type": "paypal", "email": "m@example.com", "is_default": None})

    assert UserMapper.to_payment_method_changes(dto) == {
        "email": "m@example.com",
        "type": PaymentMethodType.PAYPAL,
    }
