"""Order placement, visibility rules and admin order management."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from motoin.domain.errors import ConflictError, ForbiddenError, NotFoundError
from motoin.domain.identifiers import new_id, validate_uuid
from motoin.domain.orders import (
    Order,
    OrderChanges,
    OrderDraft,
    OrderFilters,
    OrderStats,
    OrderStatus,
    format_order_number,
)
from motoin.domain.paging import Paging
from motoin.domain.users import User
from motoin.ports.order_repository import OrderRepository

logger = logging.getLogger(__name__)

RESOURCE = "Order"
ORDER_NUMBER_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class PlaceOrderRequest:
    customer: User
    draft: OrderDraft


@dataclass(frozen=True, slots=True)
class ListOrdersRequest:
    actor: User
    paging: Paging
    status: OrderStatus | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class ListOrdersResponse:
    orders: list[Order]
    total_count: int


@dataclass(frozen=True, slots=True)
class GetOrderRequest:
    actor: User
    order_id: str


@dataclass(frozen=True, slots=True)
class UpdateOrderRequest:
    order_id: str
    changes: OrderChanges


class PlaceOrder:
    """
    Create an order for the authenticated customer.

    Totals are computed here from the submitted items; clients never supply
    subtotal or total. The shipping address defaults to the billing address.
    Order numbers are sequenced from the current order count; if a concurrent
    order took the number, the next one is tried.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._orders = order_repository
        self._clock = clock

    def execute(self, request: PlaceOrderRequest) -> Order:
        """
        Raises:
            OrderValidationError: If the order has no items or invalid quantities/prices
        """
        draft = request.draft
        draft.validate()

        customer = request.customer
        now = self._clock()
        sequence = self._orders.count() + 1

        attempt = 0
        while True:
            order = Order(
                id=new_id(),
                order_number=format_order_number(sequence + attempt, now),
                user_id=customer.id,
                customer_email=customer.email,
                customer_phone=customer.phone,
                items=list(draft.items),
                billing_address=draft.billing_address,
                shipping_address=draft.shipping_address or draft.billing_address,
                shipping_method=draft.shipping_method,
                shipping_cost=draft.shipping_cost,
                subtotal=draft.subtotal,
                total=draft.total,
                notes=draft.notes,
            )
            try:
                saved = self._orders.add(order)
            except ConflictError:
                attempt += 1
                if attempt >= ORDER_NUMBER_ATTEMPTS:
                    raise
                continue
            break

        logger.info(
            "Order placed",
            extra={
                "order_id": saved.id,
                "order_number": saved.order_number,
                "user_id": customer.id,
                "total": str(saved.total),
            },
        )
        return saved


class ListOrders:
    """Customers see only their own orders; admins see all."""

    def __init__(self, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(self, request: ListOrdersRequest) -> ListOrdersResponse:
        request.paging.validate()
        filters = OrderFilters(
            user_id=None if request.actor.is_admin else request.actor.id,
            status=request.status,
            search=request.search,
        )
        result = self._orders.search(filters, request.paging)
        return ListOrdersResponse(orders=result.items, total_count=result.total_count)


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(self, request: GetOrderRequest) -> Order:
        """
        Raises:
            NotFoundError: If the order does not exist
            ForbiddenError: If a customer requests someone else's order
        """
        validate_uuid(request.order_id, field="order_id")
        order = self._orders.get_by_id(request.order_id)
        if order is None:
            raise NotFoundError(RESOURCE, request.order_id)
        if not request.actor.is_admin and order.user_id != request.actor.id:
            raise ForbiddenError("Access denied")
        return order


class UpdateOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(self, request: UpdateOrderRequest) -> Order:
        validate_uuid(request.order_id, field="order_id")
        order = self._orders.update(request.order_id, request.changes)
        if order is None:
            raise NotFoundError(RESOURCE, request.order_id)
        logger.info(
            "Order updated",
            extra={
                "order_id": order.id,
                "status": order.status.value,
                "payment_status": order.payment_status.value,
            },
        )
        return order


class DeleteOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(self, order_id: str) -> None:
        validate_uuid(order_id, field="order_id")
        if not self._orders.delete(order_id):
            raise NotFoundError(RESOURCE, order_id)
        logger.info("Order deleted", extra={"order_id": order_id})


class GetOrderStats:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def execute(self) -> OrderStats:
        return self._orders.stats()
