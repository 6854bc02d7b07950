"""Test suite for the /v1/tickets routes."""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from motoin.domain.errors import NotFoundError, ValidationError
from motoin.domain.tickets import Ticket, TicketMessage, TicketPriority, TicketStats, TicketStatus
from motoin.domain.uploads import StoredFile, Upload, UploadValidationError
from motoin.domain.users import Role, User
from motoin.entrypoints.http.dependencies import (
    get_count_unread_tickets_use_case,
    get_current_user,
    get_delete_ticket_use_case,
    get_list_tickets_use_case,
    get_open_ticket_use_case,
    get_post_ticket_message_use_case,
    get_read_ticket_file_use_case,
    get_take_ticket_use_case,
    get_ticket_stats_use_case,
    get_update_ticket_use_case,
    get_view_ticket_use_case,
)
from motoin.entrypoints.http.exception_handlers import register_exception_handlers
from motoin.entrypoints.http.routes.tickets import router
from motoin.use_cases.manage_tickets import (
    ListTicketsResponse,
    OpenTicketRequest,
    PostMessageRequest,
    TicketActionRequest,
    UpdateTicketRequest,
)

TICKET_ID = "7a1b2c3d-4e5f-4a6b-8c7d-9e0f1a2b3c4d"


@pytest.fixture
def app() -> FastAPI:
    """Create a test FastAPI app with the tickets router and exception handlers."""
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
    user = User(id="user-1", email="mario.rossi@example.com", password_hash="hash", first_name="Mario")
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def admin(app: FastAPI) -> User:
    user = User(id="admin-1", email="admin@motoin.it", password_hash="hash", role=Role.ADMIN)
    app.dependency_overrides[get_current_user] = lambda: user
    return user


@pytest.fixture
def sample_ticket() -> Ticket:
    return Ticket(
        id=TICKET_ID,
        ticket_number="TKT-000001",
        user_id="user-1",
        user_email="mario.rossi@example.com",
        user_name="Mario",
        title="Pastiglie non compatibili",
        messages=[
            TicketMessage(
                id="msg-1",
                sender_id="user-1",
                sender_name="Mario",
                sender_role=Role.CUSTOMER,
                message="Le pastiglie non si montano",
                created_at=datetime(2026, 10, 1, tzinfo=timezone.utc),
            )
        ],
    )


# ==============================================================================
# Customer routes
# ==============================================================================


def test_open_ticket(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, sample_ticket: Ticket
) -> None:
    mock_use_case.execute.return_value = sample_ticket
    app.dependency_overrides[get_open_ticket_use_case] = lambda: mock_use_case

    response = client.post(
        "/v1/tickets",
        data={"title": "Pastiglie non compatibili", "message": "Le pastiglie non si montano", "priority": "high"},
    )

    assert response.status_code == 201
    body = response.json()["data"]
    assert body["ticket_number"] == "TKT-000001"
    assert body["messages"][0]["sender_role"] == "customer"
    mock_use_case.execute.assert_called_once_with(
        OpenTicketRequest(
            user=customer,
            title="Pastiglie non compatibili",
            message="Le pastiglie non si montano",
            priority=TicketPriority.HIGH,
        )
    )


def test_open_ticket_forwards_uploaded_attachments(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, sample_ticket: Ticket
) -> None:
    mock_use_case.execute.return_value = sample_ticket
    app.dependency_overrides[get_open_ticket_use_case] = lambda: mock_use_case

    response = client.post(
        "/v1/tickets",
        data={"title": "Foto", "message": "Allego foto"},
        files=[
            ("attachments", ("pinza.jpg", b"jpeg-bytes", "image/jpeg")),
            ("attachments", ("rumore.mp4", b"mp4-bytes", "video/mp4")),
        ],
    )

    assert response.status_code == 201
    request = mock_use_case.execute.call_args.args[0]
    assert request.attachments == [
        Upload(filename="pinza.jpg", content_type="image/jpeg", content=b"jpeg-bytes"),
        Upload(filename="rumore.mp4", content_type="video/mp4", content=b"mp4-bytes"),
    ]


def test_open_ticket_without_title_is_rejected(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User
) -> None:
    app.dependency_overrides[get_open_ticket_use_case] = lambda: mock_use_case

    response = client.post("/v1/tickets", data={"message": "Manca il titolo"})

    assert response.status_code == 422
    mock_use_case.execute.assert_not_called()


def test_rejected_attachment_returns_422(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User
) -> None:
    mock_use_case.execute.side_effect = UploadValidationError(
        errors=[{"field": "attachments", "message": "doc.pdf: unsupported file type", "code": "UNSUPPORTED_TYPE"}]
    )
    app.dependency_overrides[get_post_ticket_message_use_case] = lambda: mock_use_case

    response = client.post(
        f"/v1/tickets/{TICKET_ID}/messages",
        data={"message": "Fattura"},
        files=[("attachments", ("doc.pdf", b"%PDF", "application/pdf"))],
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "UNSUPPORTED_TYPE"


def test_download_ticket_file(app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User) -> None:
    mock_use_case.execute.return_value = StoredFile(name="ticket-abc.png", content_type="image/png", content=b"png")
    app.dependency_overrides[get_read_ticket_file_use_case] = lambda: mock_use_case

    response = client.get("/v1/tickets/files/ticket-abc.png")

    assert response.status_code == 200
    assert response.content == b"png"
    assert response.headers["content-type"] == "image/png"
    mock_use_case.execute.assert_called_once_with("ticket-abc.png")


def test_download_missing_ticket_file(app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User) -> None:
    mock_use_case.execute.side_effect = NotFoundError("File", "ticket-missing.png")
    app.dependency_overrides[get_read_ticket_file_use_case] = lambda: mock_use_case

    response = client.get("/v1/tickets/files/ticket-missing.png")

    assert response.status_code == 404



def test_list_tickets(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, sample_ticket: Ticket
) -> None:
    mock_use_case.execute.return_value = ListTicketsResponse(tickets=[sample_ticket], total_count=1)
    app.dependency_overrides[get_list_tickets_use_case] = lambda: mock_use_case

    response = client.get("/v1/tickets", params={"status": "open"})

    assert response.status_code == 200
    assert response.json()["pagination"]["total"] == 1
    request = mock_use_case.execute.call_args.args[0]
    assert request.actor is customer
    assert request.status is TicketStatus.OPEN


def test_unread_notifications(app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User) -> None:
    mock_use_case.execute.return_value = 2
    app.dependency_overrides[get_count_unread_tickets_use_case] = lambda: mock_use_case

    response = client.get("/v1/tickets/notifications")

    assert response.status_code == 200
    assert response.json() == {"unread": 2}
    mock_use_case.execute.assert_called_once_with(customer)


def test_view_ticket(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, sample_ticket: Ticket
) -> None:
    mock_use_case.execute.return_value = sample_ticket
    app.dependency_overrides[get_view_ticket_use_case] = lambda: mock_use_case

    response = client.get(f"/v1/tickets/{TICKET_ID}")

    assert response.status_code == 200
    mock_use_case.execute.assert_called_once_with(TicketActionRequest(actor=customer, ticket_id=TICKET_ID))


def test_reply_to_closed_ticket_is_rejected(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User
) -> None:
    mock_use_case.execute.side_effect = ValidationError("Ticket is closed")
    app.dependency_overrides[get_post_ticket_message_use_case] = lambda: mock_use_case

    response = client.post(f"/v1/tickets/{TICKET_ID}/messages", data={"message": "Ancora?"})

    assert response.status_code == 422
    mock_use_case.execute.assert_called_once_with(
        PostMessageRequest(actor=customer, ticket_id=TICKET_ID, message="Ancora?")
    )


def test_owner_cancels_ticket(
    app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User, sample_ticket: Ticket
) -> None:
    mock_use_case.execute.return_value = sample_ticket
    app.dependency_overrides[get_update_ticket_use_case] = lambda: mock_use_case

    response = client.put(f"/v1/tickets/{TICKET_ID}", json={"status": "cancelled"})

    assert response.status_code == 200
    mock_use_case.execute.assert_called_once_with(
        UpdateTicketRequest(actor=customer, ticket_id=TICKET_ID, status=TicketStatus.CANCELLED)
    )


# ==============================================================================
# Admin routes
# ==============================================================================


def test_take_ticket_uses_calling_admin(
    app: FastAPI, client: TestClient, mock_use_case: Mock, admin: User, sample_ticket: Ticket
) -> None:
    mock_use_case.execute.return_value = sample_ticket
    app.dependency_overrides[get_take_ticket_use_case] = lambda: mock_use_case

    response = client.put(f"/v1/tickets/{TICKET_ID}/take")

    assert response.status_code == 200
    mock_use_case.execute.assert_called_once_with(TicketActionRequest(actor=admin, ticket_id=TICKET_ID))


def test_take_ticket_requires_admin(app: FastAPI, client: TestClient, mock_use_case: Mock, customer: User) -> None:
    app.dependency_overrides[get_take_ticket_use_case] = lambda: mock_use_case

    response = client.put(f"/v1/tickets/{TICKET_ID}/take")

    assert response.status_code == 403
    mock_use_case.execute.assert_not_called()


def test_ticket_stats(app: FastAPI, client: TestClient, mock_use_case: Mock, admin: User) -> None:
    mock_use_case.execute.return_value = TicketStats(total=4, open=2, in_progress=1, closed=1, cancelled=0)
    app.dependency_overrides[get_ticket_stats_use_case] = lambda: mock_use_case

    response = client.get("/v1/tickets/stats")

    assert response.status_code == 200
    assert response.json() == {"total": 4, "open": 2, "in_progress": 1, "closed": 1, "cancelled": 0}


def test_delete_ticket(app: FastAPI, client: TestClient, mock_use_case: Mock, admin: User) -> None:
    app.dependency_overrides[get_delete_ticket_use_case] = lambda: mock_use_case

    response = client.delete(f"/v1/tickets/{TICKET_ID}")

    assert response.status_code == 200
    assert response.json()["message"] == "Ticket deleted"
    mock_use_case.execute.assert_called_once_with(TICKET_ID)
