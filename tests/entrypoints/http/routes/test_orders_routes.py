"""Test suite for the /v1/orders routes."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from motoin.domain.errors import ForbiddenError
from motoin.domain.orders import Order, OrderItem, OrderStats, OrderStatus, ShippingMethod
from motoin.domain.users import Address, Role, User
from motoin.entrypoints.http.dependencies import (
    get_current_user,
    get_delete_order_use_case,
    get_get_order_use_case,
    get_list_orders_use_case,
    get_order_stats_use_case,
    get_place_order_use_case,
    get_update_order_use_case,
)
from motoin.entrypoints.http.exception_handlers import register_exception_handlers
from motoin.entrypoints.http.routes.orders import router
from motoin.use_cases.manage_orders import GetOrderRequest, ListOrdersResponse

ORDER_ID = "5e3a1c7d-8f2b-4d6e-9a1c-2b3d4e5f6a7b"


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with the orders router and exception handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_use_case() -> Mock:
    return Mock()


@pytest.fixture
def customer(app: FastAPI) -> User:
    """Logged-in customer."""
    user = User(id="user-1", email="mario.rossi@example.com", password_hash="hash")
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def admin(app: FastAPI) -> User:
    """Logged-in admin."""
    user = User(id="admin-1", email="admin@motoin.it", password_hash="hash", role=Role.ADMIN)
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def sample_order() -> Order:
    return Order(
        id=ORDER_ID,
        order_number="MO2610-00001",
        user_id="user-1",
        customer_email="mario.rossi@example.com",
        items=[OrderItem(name="Catena 520", price=Decimal("49.90"), quantity=2)],
        subtotal=Decimal("99.80"),
        total=Decimal("109.80"),
        shipping_cost=Decimal("10.00"),
        billing_address=Address(first_name="Mario", city="Milano"),
        shipping_address=Address(first_name="Mario", city="Milano"),
    )


# ==============================================================================
# Customer routes
# ==============================================================================


def test_place_order_builds_draft(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, sample_order: Order
) -> None:
    mock_use_case.execute.return_value = sample_order
    app.dependency_overrides[get_place_order_use_case] = lambda: mock_use_case

    response = client.post(
        "/v1/orders",
        json={
            "items": [{"name": "Catena 520", "price": "49.90", "quantity": 2}],
            "billing_address": {"first_name": "Mario", "city": "Milano"},
            "shipping_method": "premium",
            "shipping_cost": "10.00",
        },
    )

    assert response.status_code == 201
    body = response.json()["data"]
    assert body["order_number"] == "MO2610-00001"
    assert body["subtotal"] == "99.80"
    assert body["total"] == "109.80"
    assert body["items"][0]["price"] == "49.90"

    request = mock_use_case.execute.call_args.args[0]
    assert request.customer is customer
    assert request.draft.shipping_method is ShippingMethod.PREMIUM
    assert request.draft.shipping_cost == Decimal("10.00")
    assert request.draft.items[0].line_total == Decimal("99.80")


@pytest.mark.parametrize(
    "body",
    [
        {"items": []},
        {"items": [{"name": "Catena", "price": "abc", "quantity": 1}]},
        {"items": [{"name": "Catena", "price": "1.00", "quantity": 0}]},
        {"items": [{"name": "Catena", "price": "1.00", "quantity": 1}], "total": "0.01", "shipping_cost": "-1"},
    ],
)
def test_place_order_rejects_invalid_body(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, body: dict
) -> None:
    app.dependency_overrides[get_place_order_use_case] = lambda: mock_use_case

    response = client.post("/v1/orders", json=body)

    assert response.status_code == 422
    mock_use_case.execute.assert_not_called()


def test_list_orders_passes_actor_and_filters(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, sample_order: Order
) -> None:
    mock_use_case.execute.return_value = ListOrdersResponse(orders=[sample_order], total_count=1)
    app.dependency_overrides[get_list_orders_use_case] = lambda: mock_use_case

    response = client.get("/v1/orders", params={"status": "pending", "search": "MO2610"})

    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 1
    request = mock_use_case.execute.call_args.args[0]
    assert request.actor is customer
    assert request.status is OrderStatus.PENDING
    assert request.search == "MO2610"


def test_get_order_of_another_customer_is_forbidden(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User
) -> None:
    mock_use_case.execute.side_effect = ForbiddenError("Not your order")
    app.dependency_overrides[get_get_order_use_case] = lambda: mock_use_case

    response = client.get(f"/v1/orders/{ORDER_ID}")

    assert response.status_code == 403
    mock_use_case.execute.assert_called_once_with(GetOrderRequest(actor=customer, order_id=ORDER_ID))


# ==============================================================================
# Admin routes
# ==============================================================================


def test_order_stats(app: FastAPI, client: TestClient, mock_use_case: Mock, admin: User) -> None:
    mock_use_case.execute.return_value = OrderStats(
        total=3, pending=1, processing=1, shipped=0, delivered=1, cancelled=0, revenue=Decimal("219.60")
    )
    app.dependency_overrides[get_order_stats_use_case] = lambda: mock_use_case

    response = client.get("/v1/orders/stats")

    assert response.status_code == 200
    assert response.json()["revenue"] == "219.60"


def test_order_stats_requires_admin(app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User) -> None:
    app.dependency_overrides[get_order_stats_use_case] = lambda: mock_use_case

    response = client.get("/v1/orders/stats")

    assert response.status_code == 403
    mock_use_case.execute.assert_not_called()


def test_update_order_maps_changes(
    app: FastAPI, client: TestClient, mock_use_case: Mock, admin: User, sample_order: Order
) -> None:
    mock_use_case.execute.return_value = sample_order
    app.dependency_overrides[get_update_order_use_case] = lambda: mock_use_case

    response = client.put(f"/v1/orders/{ORDER_ID}", json={"status": "shipped", "admin_notes": "BRT 123"})

    assert response.status_code == 200
    request = mock_use_case.execute.call_args.args[0]
    assert request.order_id == ORDER_ID
    assert request.changes.status is OrderStatus.SHIPPED
    assert request.changes.payment_status is None
    assert request.changes.admin_notes == "BRT 123"


def test_delete_order(app: FastAPI, client: TestClient, mock_use_case: Mock, admin: User) -> None:
    app.dependency_overrides[get_delete_order_use_case] = lambda: mock_use_case

    response = client.delete(f"/v1/orders/{ORDER_ID}")

    assert response.status_code == 200
    assert response.json()["message"] == "Order deleted"
    mock_use_case.execute.assert_called_once_with(ORDER_ID)
