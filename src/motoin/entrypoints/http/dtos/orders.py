from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from motoin.entrypoints.http.dtos.common import PageQueryDTO, PaginationDTO
from motoin.entrypoints.http.dtos.users import AddressDTO

MONEY_PATTERN = r"^\d+(\.\d{1,2})?$"


class OrderStatusDTO(str, Enum):
    pending = "pending"
    processing = "processing"
    shipped = "shipped"
    delivered = "delivered"
    cancelled = "cancelled"
    refunded = "refunded"


class PaymentStatusDTO(str, Enum):
    pending = "pending"
    paid = "paid"
    failed = "failed"
    refunded = "refunded"


class ShippingMethodDTO(str, Enum):
    premium = "premium"
    pickup = "pickup"


class OrderItemDTO(BaseModel):
    product_id: str | None = None
    name: str = Field(min_length=1)
    price: str = Field(pattern=MONEY_PATTERN, examples=["49.90"])
    quantity: int = Field(ge=1, examples=[2])
    image: str | None = None


class OrderDTO(BaseModel):
    id: str
    order_number: str
    user_id: str | None = None
    customer_email: str
    customer_phone: str | None = None
    items: list[OrderItemDTO]
    billing_address: AddressDTO | None = None
    shipping_address: AddressDTO | None = None
    shipping_method: ShippingMethodDTO
    shipping_cost: str
    subtotal: str
    total: str
    status: OrderStatusDTO
    payment_status: PaymentStatusDTO
    payment_method: str | None = None
    payment_id: str | None = None
    notes: str | None = None
    admin_notes: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderCreateDTO(BaseModel):
    items: list[OrderItemDTO] = Field(min_length=1)
    billing_address: AddressDTO | None = None
    shipping_address: AddressDTO | None = Field(default=None, description="Defaults to the billing address")
    shipping_method: ShippingMethodDTO = ShippingMethodDTO.premium
    shipping_cost: str = Field(default="0", pattern=MONEY_PATTERN)
    notes: str | None = None


class OrderUpdateDTO(BaseModel):
    status: OrderStatusDTO | None = None
    payment_status: PaymentStatusDTO | None = None
    admin_notes: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None


class OrderListQueryDTO(PageQueryDTO):
    status: OrderStatusDTO | None = None
    search: str | None = Field(default=None, description="Order number or customer e-mail contains")


class OrderResponseDTO(BaseModel):
    data: OrderDTO


class OrderPageResponseDTO(BaseModel):
    data: list[OrderDTO]
    pagination: PaginationDTO


class OrderStatsResponseDTO(BaseModel):
    total: int
    pending: int
    processing: int
    shipped: int
    delivered: int
    cancelled: int
    revenue: str
