"""PostgreSQL implementation of OrderRepository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from motoin.adapters.json_codecs import (
    address_from_json,
    address_to_json,
    order_item_from_json,
    order_item_to_json,
)
from motoin.adapters.sql_patterns import LIKE_ESCAPE, contains_pattern
from motoin.domain.errors import ConflictError
from motoin.domain.orders import (
    Order,
    OrderChanges,
    OrderFilters,
    OrderStats,
    OrderStatus,
    PaymentStatus,
    ShippingMethod,
)
from motoin.domain.paging import Paging, SearchResult
from motoin.infra.db.models.order import OrderRow
from motoin.ports.order_repository import OrderRepository


class PostgresOrderRepository(OrderRepository):
    def __init__(self, session: Session) -> None:
        self._session = session

    def count(self) -> int:
        return self._session.execute(select(func.count()).select_from(OrderRow)).scalar() or 0

    def add(self, order: Order) -> Order:
        row = OrderRow(
            id=UUID(order.id),
            order_number=order.order_number,
            user_id=UUID(order.user_id) if order.user_id else None,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            items=[order_item_to_json(item) for item in order.items],
            billing_address=address_to_json(order.billing_address),
            shipping_address=address_to_json(order.shipping_address),
            shipping_method=order.shipping_method.value,
            shipping_cost=order.shipping_cost,
            subtotal=order.subtotal,
            total=order.total,
            status=order.status.value,
            payment_status=order.payment_status.value,
            payment_method=order.payment_method,
            payment_id=order.payment_id,
            notes=order.notes,
        )
        try:
            with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError as exc:
            raise ConflictError(
                f"Order number '{order.order_number}' already exists",
                order_number=order.order_number,
            ) from exc

        self._session.refresh(row)
        return self._to_domain(row)

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._session.get(OrderRow, UUID(order_id))
        return self._to_domain(row) if row else None

    def get_for_user(self, order_id: str, user_id: str) -> Order | None:
        query = select(OrderRow).where(
            OrderRow.id == UUID(order_id),
            OrderRow.user_id == UUID(user_id),
        )
        row = self._session.execute(query).scalar_one_or_none()
        return self._to_domain(row) if row else None

    def search(self, filters: OrderFilters, paging: Paging) -> SearchResult[Order]:
        query = select(OrderRow)
        if filters.user_id is not None:
            query = query.where(OrderRow.user_id == UUID(filters.user_id))
        if filters.status is not None:
            query = query.where(OrderRow.status == filters.status.value)
        if filters.search:
            pattern = contains_pattern(filters.search)
            query = query.where(
                or_(
                    OrderRow.order_number.ilike(pattern, escape=LIKE_ESCAPE),
                    OrderRow.customer_email.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        query = query.order_by(OrderRow.created_at.desc()).offset(paging.offset).limit(paging.per_page)
        rows = self._session.execute(query).scalars().all()

        return SearchResult(items=[self._to_domain(row) for row in rows], total_count=total_count)

    def update(self, order_id: str, changes: OrderChanges) -> Order | None:
        row = self._session.get(OrderRow, UUID(order_id))
        if row is None:
            return None

        if changes.status is not None:
            row.status = changes.status.value
        if changes.payment_status is not None:
            row.payment_status = changes.payment_status.value
        if changes.admin_notes is not None:
            row.admin_notes = changes.admin_notes
        if changes.shipped_at is not None:
            row.shipped_at = changes.shipped_at
        if changes.delivered_at is not None:
            row.delivered_at = changes.delivered_at

        self._session.flush()
        self._session.refresh(row)
        return self._to_domain(row)

    def delete(self, order_id: str) -> bool:
        result = self._session.execute(delete(OrderRow).where(OrderRow.id == UUID(order_id)))
        return bool(result.rowcount)

    def stats(self) -> OrderStats:
        def by_status(status: OrderStatus):
            return func.count().filter(OrderRow.status == status.value)

        query = select(
            func.count(),
            by_status(OrderStatus.PENDING),
            by_status(OrderStatus.PROCESSING),
            by_status(OrderStatus.SHIPPED),
            by_status(OrderStatus.DELIVERED),
            by_status(OrderStatus.CANCELLED),
            func.coalesce(
                func.sum(OrderRow.total).filter(OrderRow.payment_status == PaymentStatus.PAID.value),
                0,
            ),
        )
        total, pending, processing, shipped, delivered, cancelled, revenue = self._session.execute(
            query
        ).one()
        return OrderStats(
            total=total,
            pending=pending,
            processing=processing,
            shipped=shipped,
            delivered=delivered,
            cancelled=cancelled,
            revenue=revenue,
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        return Order(
            id=str(row.id),
            order_number=row.order_number,
            user_id=str(row.user_id) if row.user_id else None,
            customer_email=row.customer_email,
            customer_phone=row.customer_phone,
            items=[order_item_from_json(data) for data in row.items or []],
            billing_address=address_from_json(row.billing_address),
            shipping_address=address_from_json(row.shipping_address),
            shipping_method=ShippingMethod(row.shipping_method),
            shipping_cost=row.shipping_cost,
            subtotal=row.subtotal,
            total=row.total,
            status=OrderStatus(row.status),
            payment_status=PaymentStatus(row.payment_status),
            payment_method=row.payment_method,
            payment_id=row.payment_id,
            notes=row.notes,
            admin_notes=row.admin_notes,
            shipped_at=row.shipped_at,
            delivered_at=row.delivered_at,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
