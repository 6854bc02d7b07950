from __future__ import annotations

from typing import Any

from motoin.domain.users import (
    Address,
    PaymentMethod,
    PaymentMethodType,
    Role,
    ThemePreference,
    User,
    UserFilters,
)
from motoin.entrypoints.http.dtos.users import (
    AddressDTO,
    PaymentMethodDTO,
    PaymentMethodTypeDTO,
    PaymentMethodWriteDTO,
    ProfileFieldsDTO,
    RoleDTO,
    ThemePreferenceDTO,
    UserDTO,
    UserListQueryDTO,
)

_ADDRESS_FIELDS = ("billing_address", "shipping_address")
_ACCOUNT_FIELDS = frozenset({"email", "password"})


def to_address(dto: AddressDTO | None) -> Address | None:
    return Address(**dto.model_dump()) if dto is not None else None


def to_address_dto(address: Address | None) -> AddressDTO | None:
    if address is None:
        return None
    return AddressDTO(
        first_name=address.first_name,
        last_name=address.last_name,
        company=address.company,
        street=address.street,
        street_number=address.street_number,
        postal_code=address.postal_code,
        city=address.city,
        province=address.province,
        country=address.country,
    )


class UserMapper:
    """Maps between REST DTOs and domain models for accounts."""

    @staticmethod
    def to_user_dto(user: User) -> UserDTO:
        return UserDTO(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=RoleDTO(user.role.value),
            phone=user.phone,
            tax_code=user.tax_code,
            vat_number=user.vat_number,
            certified_email=user.certified_email,
            recipient_code=user.recipient_code,
            billing_address=to_address_dto(user.billing_address),
            shipping_address=to_address_dto(user.shipping_address),
            use_shipping_as_billing=user.use_shipping_as_billing,
            payment_methods=[UserMapper.to_payment_method_dto(m) for m in user.payment_methods],
            is_active=user.is_active,
            avatar=user.avatar,
            theme_preference=(
                ThemePreferenceDTO(user.theme_preference.value) if user.theme_preference else None
            ),
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @staticmethod
    def to_payment_method_dto(method: PaymentMethod) -> PaymentMethodDTO:
        return PaymentMethodDTO(
            id=method.id,
            type=PaymentMethodTypeDTO(method.type.value),
            name=method.name,
            last_four=method.last_four,
            expiry_month=method.expiry_month,
            expiry_year=method.expiry_year,
            card_brand=method.card_brand,
            email=method.email,
            iban=method.iban,
            is_default=method.is_default,
        )

    @staticmethod
    def to_fields(dto: ProfileFieldsDTO) -> dict[str, Any]:
        """
        Fields present in the request body, as domain values.

        email and password are handled separately by the use cases and are
        never part of the returned mapping.
        """
        fields: dict[str, Any] = {}
        for name in dto.model_fields_set - _ACCOUNT_FIELDS:
            value = getattr(dto, name)
            if name in _ADDRESS_FIELDS:
                value = to_address(value)
            elif name == "role":
                if value is None:
                    continue
                value = Role(value.value)
            elif name == "theme_preference":
                value = ThemePreference(value.value) if value is not None else None
            elif name in ("is_active", "use_shipping_as_billing") and value is None:
                continue
            elif name == "certified_email" and value is not None:
                value = str(value)
            fields[name] = value
        return fields

    @staticmethod
    def to_user_filters(dto: UserListQueryDTO) -> UserFilters:
        return UserFilters(
            role=Role(dto.role.value) if dto.role else None,
            search=dto.search,
        )

    @staticmethod
    def to_payment_method_type(dto: PaymentMethodWriteDTO) -> PaymentMethodType:
        """
        Raises:
            ValueError: If the payment method type is missing
        """
        if dto.type is None:
            raise ValueError("Payment method type is required")
        return PaymentMethodType(dto.type.value)

    @staticmethod
    def to_payment_method_details(dto: PaymentMethodWriteDTO) -> dict[str, Any]:
        details = dto.model_dump(exclude_unset=True, exclude={"type"})
        if details.get("is_default") is None:
            details.pop("is_default", None)
        return details

    @staticmethod
    def to_payment_method_changes(dto: PaymentMethodWriteDTO) -> dict[str, Any]:
        changes = UserMapper.to_payment_method_details(dto)
        if dto.type is not None:
            changes["type"] = PaymentMethodType(dto.type.value)
        return changes
