"""Conversions between domain value objects and JSONB documents."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from typing import Any

from motoin.domain.orders import OrderItem
from motoin.domain.tickets import TicketMessage
from motoin.domain.users import Address, PaymentMethod, PaymentMethodType, Role


def address_to_json(address: Address | None) -> dict[str, Any] | None:
    return asdict(address) if address is not None else None


def address_from_json(data: dict[str, Any] | None) -> Address | None:
    return Address(**data) if data is not None else None


def payment_method_to_json(method: PaymentMethod) -> dict[str, Any]:
    data = asdict(method)
    data["type"] = method.type.value
    return data


def payment_method_from_json(data: dict[str, Any]) -> PaymentMethod:
    return PaymentMethod(**{**data, "type": PaymentMethodType(data["type"])})


def order_item_to_json(item: OrderItem) -> dict[str, Any]:
    # JSON has no decimal type; prices keep their exact digits as strings
    return {**asdict(item), "price": str(item.price)}


def order_item_from_json(data: dict[str, Any]) -> OrderItem:
    return OrderItem(**{**data, "price": Decimal(data["price"])})


def ticket_message_to_json(message: TicketMessage) -> dict[str, Any]:
    data = asdict(message)
    data["sender_role"] = message.sender_role.value
    data["created_at"] = message.created_at.isoformat() if message.created_at else None
    return data


def ticket_message_from_json(data: dict[str, Any]) -> TicketMessage:
    created_at = data.get("created_at")
    return TicketMessage(
        **{
            **data,
            "sender_role": Role(data["sender_role"]),
            "created_at": datetime.fromisoformat(created_at) if created_at else None,
        }
    )
