from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from motoin.entrypoints.http.dtos.common import PageQueryDTO, PaginationDTO


class RoleDTO(str, Enum):
    customer = "customer"
    admin = "admin"


class ThemePreferenceDTO(str, Enum):
    light = "light"
    dark = "dark"


class PaymentMethodTypeDTO(str, Enum):
    card = "card"
    paypal = "paypal"
    bank = "bank"


class AddressDTO(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    street: str | None = None
    street_number: str | None = None
    postal_code: str | None = None
    city: str | None = None
    province: str | None = None
    country: str = "Italy"


class PaymentMethodDTO(BaseModel):
    id: str
    type: PaymentMethodTypeDTO
    name: str | None = None
    last_four: str | None = None
    expiry_month: str | None = None
    expiry_year: str | None = None
    card_brand: str | None = None
    email: str | None = None
    iban: str | None = None
    is_default: bool


class UserDTO(BaseModel):
    """Public view of an account. The password hash is never exposed."""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: RoleDTO
    phone: str | None = None
    tax_code: str | None = None
    vat_number: str | None = None
    certified_email: str | None = None
    recipient_code: str | None = None
    billing_address: AddressDTO | None = None
    shipping_address: AddressDTO | None = None
    use_shipping_as_billing: bool
    payment_methods: list[PaymentMethodDTO]
    is_active: bool
    avatar: str | None = None
    theme_preference: ThemePreferenceDTO | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfileFieldsDTO(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    tax_code: str | None = Field(default=None, max_length=32)
    vat_number: str | None = Field(default=None, max_length=32)
    certified_email: EmailStr | None = None
    recipient_code: str | None = Field(default=None, max_length=16)
    billing_address: AddressDTO | None = None
    shipping_address: AddressDTO | None = None
    use_shipping_as_billing: bool | None = None


class RegisterRequestDTO(ProfileFieldsDTO):
    email: EmailStr
    password: str = Field(min_length=6)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "mario.rossi@example.com",
                "password": "secret123",
                "first_name": "Mario",
                "last_name": "Rossi",
            }
        }
    )


class LoginRequestDTO(BaseModel):
    email: str
    password: str


class AuthResponseDTO(BaseModel):
    message: str
    user: UserDTO
    token: str
    expires_at: datetime


class UserResponseDTO(BaseModel):
    user: UserDTO


class ProfileUpdateDTO(ProfileFieldsDTO):
    theme_preference: ThemePreferenceDTO | None = None


class ChangePasswordRequestDTO(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class PaymentMethodWriteDTO(BaseModel):
    type: PaymentMethodTypeDTO | None = None
    name: str | None = None
    last_four: str | None = Field(default=None, pattern=r"^\d{4}$")
    expiry_month: str | None = None
    expiry_year: str | None = None
    card_brand: str | None = None
    email: str | None = None
    iban: str | None = None
    is_default: bool | None = None


class PaymentMethodListResponseDTO(BaseModel):
    data: list[PaymentMethodDTO]


class UserListQueryDTO(PageQueryDTO):
    role: RoleDTO | None = None
    search: str | None = Field(default=None, description="Name or e-mail contains")


class UserPageResponseDTO(BaseModel):
    data: list[UserDTO]
    pagination: PaginationDTO


class UserDataResponseDTO(BaseModel):
    data: UserDTO


class UserStatsResponseDTO(BaseModel):
    total: int
    customers: int
    admins: int
    active: int
    inactive: int


class AdminUserCreateDTO(ProfileFieldsDTO):
    email: EmailStr
    password: str = Field(min_length=6)
    role: RoleDTO = RoleDTO.customer
    is_active: bool = True


class AdminUserUpdateDTO(ProfileFieldsDTO):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=6)
    role: RoleDTO | None = None
    is_active: bool | None = None
