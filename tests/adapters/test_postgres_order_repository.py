from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, Mock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from motoin.adapters.postgres_order_repository import PostgresOrderRepository
from motoin.adapters.postgres_settings_repository import PostgresSettingsRepository
from motoin.domain.errors import ConflictError
from motoin.domain.orders import (
    Order,
    OrderChanges,
    OrderFilters,
    OrderItem,
    OrderStats,
    OrderStatus,
    PaymentStatus,
    ShippingMethod,
)
from motoin.domain.paging import Paging
from motoin.domain.users import Address
from motoin.infra.db.models.order import OrderRow

ORDER_ID = "9a8b7c6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d"
USER_ID = "5d1a8e2b-7c44-4f0e-8b2a-9e3d6c1f0a22"
CREATED = datetime(2024, 5, 2, tzinfo=timezone.utc)


def _compiled(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


@pytest.fixture()
def mock_session() -> Mock:
    session = Mock(spec=Session)
    session.begin_nested.return_value = MagicMock()
    return session


@pytest.fixture()
def order_row() -> OrderRow:
    """A stored order as loaded from PostgreSQL."""
    row = OrderRow(
        id=uuid.UUID(ORDER_ID),
        order_number="MO2405-00001",
        user_id=uuid.UUID(USER_ID),
        customer_email="mario@example.com",
        customer_phone=None,
        items=[{"name": "Chain kit", "price": "89.90", "quantity": 1, "product_id": None, "image": None}],
        billing_address={"city": "Milano", "country": "Italy"},
        shipping_address=None,
        shipping_method="pickup",
        shipping_cost=Decimal("0.00"),
        subtotal=Decimal("89.90"),
        total=Decimal("89.90"),
        status="shipped",
        payment_status="paid",
        payment_method=None,
        payment_id=None,
        notes=None,
        admin_notes="Left with neighbour",
        shipped_at=CREATED,
        delivered_at=None,
        created_at=CREATED,
        updated_at=CREATED,
    )
    row._sa_instance_state = MagicMock()  # type: ignore
    return row


def test_to_domain_decodes_json_columns(mock_session: Mock, order_row: OrderRow) -> None:
    mock_session.get.return_value = order_row

    order = PostgresOrderRepository(mock_session).get_by_id(ORDER_ID)

    assert isinstance(order, Order)
    assert order.user_id == USER_ID
    assert order.items == [OrderItem(name="Chain kit", price=Decimal("89.90"), quantity=1)]
    assert order.billing_address == Address(city="Milano")
    assert order.shipping_method is ShippingMethod.PICKUP
    assert order.status is OrderStatus.SHIPPED
    assert order.payment_status is PaymentStatus.PAID


def test_add_duplicate_number_raises_conflict(mock_session: Mock) -> None:
    mock_session.add.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))
    order = Order(
        id=ORDER_ID,
        order_number="MO2405-00001",
        customer_email="mario@example.com",
        items=[],
        subtotal=Decimal("0"),
        total=Decimal("0"),
    )

    with pytest.raises(ConflictError):
        PostgresOrderRepository(mock_session).add(order)

    mock_session.refresh.assert_not_called()


def test_count(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalar.return_value = 41

    assert PostgresOrderRepository(mock_session).count() == 41


def test_search_restricts_to_user_and_searches_number_or_email(mock_session: Mock) -> None:
    count_result = Mock()
    count_result.scalar.return_value = 0
    select_result = Mock()
    select_result.scalars.return_value.all.return_value = []
    mock_session.execute.side_effect = [count_result, select_result]

    PostgresOrderRepository(mock_session).search(
        OrderFilters(user_id=USER_ID, status=OrderStatus.PENDING, search="MO24"),
        Paging(page=2, per_page=5),
    )

    select_sql = _compiled(mock_session.execute.call_args_list[1].args[0])
    assert "orders.user_id =" in select_sql
    assert "orders.status =" in select_sql
    assert "ILIKE" in select_sql
    assert "ORDER BY orders.created_at DESC" in select_sql


def test_update_changes_only_given_fields(mock_session: Mock, order_row: OrderRow) -> None:
    mock_session.get.return_value = order_row

    PostgresOrderRepository(mock_session).update(ORDER_ID, OrderChanges(status=OrderStatus.DELIVERED))

    assert order_row.status == "delivered"
    assert order_row.payment_status == "paid"
    assert order_row.admin_notes == "Left with neighbour"
    mock_session.flush.assert_called_once()


def test_update_missing(mock_session: Mock) -> None:
    mock_session.get.return_value = None

    assert PostgresOrderRepository(mock_session).update(ORDER_ID, OrderChanges()) is None


def test_stats(mock_session: Mock) -> None:
    mock_session.execute.return_value.one.return_value = (10, 3, 2, 2, 2, 1, Decimal("450.00"))

    stats = PostgresOrderRepository(mock_session).stats()

    assert stats == OrderStats(
        total=10, pending=3, processing=2, shipped=2, delivered=2, cancelled=1, revenue=Decimal("450.00")
    )


# ==============================================================================
# Settings
# ==============================================================================


def test_settings_get_flag(mock_session: Mock) -> None:
    mock_session.execute.return_value.scalar_one_or_none.return_value = None

    assert PostgresSettingsRepository(mock_session).get_flag("maintenance") is None


def test_settings_set_flag_upserts(mock_session: Mock) -> None:
    PostgresSettingsRepository(mock_session).set_flag("maintenance", True)

    sql = _compiled(mock_session.execute.call_args.args[0])
    assert "INSERT INTO settings" in sql
    assert "ON CONFLICT (key) DO UPDATE" in sql
