"""Test suite for support ticket use cases."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import Mock

import pytest

from motoin.domain.errors import ConflictError, ForbiddenError, InternalError, NotFoundError
from motoin.domain.orders import Order
from motoin.domain.paging import Paging, SearchResult
from motoin.domain.tickets import (
    Ticket,
    TicketFilters,
    TicketMessage,
    TicketPriority,
    TicketStatus,
    TicketValidationError,
)
from motoin.domain.uploads import Upload, UploadValidationError
from motoin.domain.users import Role, User
from motoin.ports.file_storage import FileStorage
from motoin.ports.order_repository import OrderRepository
from motoin.ports.ticket_repository import TicketRepository
from motoin.ports.user_repository import UserRepository
from motoin.use_cases.manage_tickets import (
    CountUnreadTickets,
    DeleteTicket,
    ListTickets,
    ListTicketsRequest,
    OpenTicket,
    OpenTicketRequest,
    PostMessageRequest,
    PostTicketMessage,
    TakeTicket,
    TicketActionRequest,
    UpdateTicket,
    UpdateTicketRequest,
    ViewTicket,
)
from motoin.use_cases.uploads import TicketAttachmentStore

TICKET_ID = "1c2d3e4f-5a6b-4c7d-8e9f-0a1b2c3d4e5f"
ORDER_ID = "2d3e4f5a-6b7c-4d8e-9f0a-1b2c3d4e5f6a"
ADMIN_ID = "3e4f5a6b-7c8d-4e9f-8a1b-2c3d4e5f6a7b"
NOW = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def customer() -> User:
    return User(id="user-1", email="mario@example.com", password_hash="x", first_name="Mario", last_name="Rossi")


@pytest.fixture
def admin() -> User:
    return User(id=ADMIN_ID, email="staff@motoin.it", password_hash="x", first_name="Anna", role=Role.ADMIN)


@pytest.fixture
def ticket(customer: User) -> Ticket:
    """An open ticket of the customer with one message."""
    return Ticket(
        id=TICKET_ID,
        ticket_number="TKT-000001",
        user_id=customer.id,
        user_email=customer.email,
        title="Wrong brake pads",
        messages=[
            TicketMessage(
                id="m1",
                sender_id=customer.id,
                sender_name="Mario Rossi",
                sender_role=Role.CUSTOMER,
                message="They do not fit",
            )
        ],
    )


@pytest.fixture
def tickets(ticket: Ticket) -> Mock:
    repository = Mock(spec=TicketRepository)
    repository.count.return_value = 0
    repository.get_by_id.return_value = ticket
    repository.add.side_effect = lambda new_ticket: new_ticket
    repository.save.side_effect = lambda saved: saved
    return repository


@pytest.fixture
def orders() -> Mock:
    return Mock(spec=OrderRepository)


# ==============================================================================
# OpenTicket
# ==============================================================================


def test_open_ticket(tickets: Mock, orders: Mock, customer: User) -> None:
    ticket = OpenTicket(tickets, orders, clock=lambda: NOW).execute(
        OpenTicketRequest(user=customer, title="  Late delivery ", message=" Where is my order? ")
    )

    assert ticket.ticket_number == "TKT-000001"
    assert ticket.title == "Late delivery"
    assert ticket.user_name == "Mario Rossi"
    assert ticket.priority is TicketPriority.MEDIUM
    assert ticket.status is TicketStatus.OPEN
    assert len(ticket.messages) == 1
    assert ticket.messages[0].message == "Where is my order?"
    assert ticket.messages[0].sender_role is Role.CUSTOMER
    assert ticket.messages[0].created_at == NOW
    orders.get_for_user.assert_not_called()


@pytest.mark.parametrize("title, message", [("", "text"), ("Title", "   "), (None, "text")])
def test_open_ticket_requires_title_and_message(
    tickets: Mock, orders: Mock, customer: User, title: str | None, message: str
) -> None:
    with pytest.raises(TicketValidationError):
        OpenTicket(tickets, orders).execute(OpenTicketRequest(user=customer, title=title, message=message))

    tickets.add.assert_not_called()


def test_open_ticket_links_own_order(tickets: Mock, orders: Mock, customer: User) -> None:
    orders.get_for_user.return_value = Order(
        id=ORDER_ID,
        order_number="MO2406-00007",
        customer_email=customer.email,
        items=[],
        subtotal=Decimal("0"),
        total=Decimal("0"),
        user_id=customer.id,
    )

    ticket = OpenTicket(tickets, orders).execute(
        OpenTicketRequest(user=customer, title="Return", message="Return it", related_order_id=ORDER_ID)
    )

    assert ticket.related_order_id == ORDER_ID
    assert ticket.related_order_number == "MO2406-00007"
    orders.get_for_user.assert_called_once_with(ORDER_ID, customer.id)


def test_open_ticket_ignores_foreign_order(tickets: Mock, orders: Mock, customer: User) -> None:
    orders.get_for_user.return_value = None

    ticket = OpenTicket(tickets, orders).execute(
        OpenTicketRequest(user=customer, title="Return", message="Return it", related_order_id=ORDER_ID)
    )

    assert ticket.related_order_id is None
    assert ticket.related_order_number is None


def test_open_ticket_retries_taken_number(tickets: Mock, orders: Mock, customer: User) -> None:
    tickets.count.return_value = 4
    tickets.add.side_effect = _fail_then_echo(2)

    ticket = OpenTicket(tickets, orders).execute(OpenTicketRequest(user=customer, title="T", message="M"))

    assert ticket.ticket_number == "TKT-000007"


def _fail_then_echo(failures: int):
    calls = {"count": 0}

    def add(ticket: Ticket) -> Ticket:
        calls["count"] += 1
        if calls["count"] <= failures:
            raise ConflictError("Ticket number taken")
        return ticket

    return add


# ==============================================================================
# ListTickets / CountUnreadTickets
# ==============================================================================


def test_customer_lists_own_tickets(tickets: Mock, customer: User) -> None:
    tickets.search.return_value = SearchResult(items=[], total_count=0)

    ListTickets(tickets).execute(ListTicketsRequest(actor=customer, paging=Paging(), status=TicketStatus.OPEN))

    tickets.search.assert_called_once_with(
        TicketFilters(user_id="user-1", status=TicketStatus.OPEN), Paging()
    )


def test_admin_lists_all_tickets(tickets: Mock, admin: User) -> None:
    tickets.search.return_value = SearchResult(items=[], total_count=0)

    ListTickets(tickets).execute(ListTicketsRequest(actor=admin, paging=Paging(), search="TKT"))

    tickets.search.assert_called_once_with(TicketFilters(search="TKT"), Paging())


def test_count_unread(tickets: Mock, customer: User) -> None:
    tickets.count_unread.return_value = 2

    assert CountUnreadTickets(tickets).execute(customer) == 2
    tickets.count_unread.assert_called_once_with("user-1")


# ==============================================================================
# ViewTicket
# ==============================================================================


def test_owner_view_clears_unread(tickets: Mock, customer: User, ticket: Ticket) -> None:
    tickets.get_by_id.return_value = replace(ticket, unread_by_user=True)

    viewed = ViewTicket(tickets).execute(TicketActionRequest(actor=customer, ticket_id=TICKET_ID))

    assert viewed.unread_by_user is False
    tickets.save.assert_called_once()


def test_admin_view_keeps_unread(tickets: Mock, admin: User, ticket: Ticket) -> None:
    tickets.get_by_id.return_value = replace(ticket, unread_by_user=True)

    viewed = ViewTicket(tickets).execute(TicketActionRequest(actor=admin, ticket_id=TICKET_ID))

    assert viewed.unread_by_user is True
    tickets.save.assert_not_called()


def test_view_foreign_ticket_is_forbidden(tickets: Mock) -> None:
    stranger = User(id="user-9", email="x@example.com", password_hash="x")

    with pytest.raises(ForbiddenError):
        ViewTicket(tickets).execute(TicketActionRequest(actor=stranger, ticket_id=TICKET_ID))


def test_view_missing_ticket(tickets: Mock, customer: User) -> None:
    tickets.get_by_id.return_value = None

    with pytest.raises(NotFoundError):
        ViewTicket(tickets).execute(TicketActionRequest(actor=customer, ticket_id=TICKET_ID))


# ==============================================================================
# PostTicketMessage
# ==============================================================================


def test_admin_reply_marks_unread(tickets: Mock, admin: User) -> None:
    ticket = PostTicketMessage(tickets, clock=lambda: NOW).execute(
        PostMessageRequest(actor=admin, ticket_id=TICKET_ID, message="We will send new ones")
    )

    assert ticket.unread_by_user is True
    assert len(ticket.messages) == 2
    reply = ticket.messages[-1]
    assert reply.sender_name == "Anna"
    assert reply.sender_role is Role.ADMIN
    assert reply.attachments == []
    assert reply.created_at == NOW


def test_owner_message_does_not_mark_unread(tickets: Mock, customer: User) -> None:
    ticket = PostTicketMessage(tickets).execute(
        PostMessageRequest(actor=customer, ticket_id=TICKET_ID, message="Thanks")
    )

    assert ticket.unread_by_user is False
    assert ticket.messages[-1].sender_role is Role.CUSTOMER


@pytest.mark.parametrize("status", [TicketStatus.CLOSED, TicketStatus.CANCELLED])
def test_cannot_post_to_final_ticket(tickets: Mock, customer: User, ticket: Ticket, status: TicketStatus) -> None:
    tickets.get_by_id.return_value = replace(ticket, status=status)

    with pytest.raises(TicketValidationError):
        PostTicketMessage(tickets).execute(PostMessageRequest(actor=customer, ticket_id=TICKET_ID, message="Hi"))

    tickets.save.assert_not_called()


def test_blank_message_rejected(tickets: Mock, customer: User) -> None:
    with pytest.raises(TicketValidationError):
        PostTicketMessage(tickets).execute(PostMessageRequest(actor=customer, ticket_id=TICKET_ID, message=" "))


# ==============================================================================
# Attachments
# ==============================================================================

JPEG = Upload(filename="pinza.jpg", content_type="image/jpeg", content=b"jpeg")


@pytest.fixture
def storage() -> Mock:
    return Mock(spec=FileStorage)


@pytest.fixture
def attachment_store(storage: Mock) -> TicketAttachmentStore:
    return TicketAttachmentStore(storage)


def test_open_ticket_stores_attachments(
    tickets: Mock, orders: Mock, customer: User, storage: Mock, attachment_store: TicketAttachmentStore
) -> None:
    clip = Upload(filename="noise.mov", content_type="video/quicktime", content=b"mov")

    ticket = OpenTicket(tickets, orders, attachment_store=attachment_store).execute(
        OpenTicketRequest(user=customer, title="Noise", message="Listen", attachments=[JPEG, clip])
    )

    urls = ticket.messages[0].attachments
    assert len(urls) == 2
    assert urls[0].startswith("/v1/tickets/files/ticket-") and urls[0].endswith(".jpg")
    assert urls[1].endswith(".mov")
    stored_names = [call.args[1] for call in storage.save.call_args_list]
    assert [f"/v1/tickets/files/{name}" for name in stored_names] == urls


def test_reply_stores_attachments(
    tickets: Mock, admin: User, storage: Mock, attachment_store: TicketAttachmentStore
) -> None:
    ticket = PostTicketMessage(tickets, attachment_store=attachment_store).execute(
        PostMessageRequest(actor=admin, ticket_id=TICKET_ID, message="See photo", attachments=[JPEG])
    )

    assert ticket.messages[-1].attachments[0].startswith("/v1/tickets/files/ticket-")
    storage.save.assert_called_once()
    assert storage.save.call_args.args[0] == "tickets"
    assert storage.save.call_args.args[2] == b"jpeg"


def test_more_than_five_attachments_rejected(
    tickets: Mock, customer: User, storage: Mock, attachment_store: TicketAttachmentStore
) -> None:
    with pytest.raises(UploadValidationError) as exc_info:
        PostTicketMessage(tickets, attachment_store=attachment_store).execute(
            PostMessageRequest(actor=customer, ticket_id=TICKET_ID, message="Photos", attachments=[JPEG] * 6)
        )

    assert exc_info.value.errors[0]["code"] == "TOO_MANY_FILES"
    storage.save.assert_not_called()
    tickets.save.assert_not_called()


def test_unsupported_attachment_rejected_before_opening(
    tickets: Mock, orders: Mock, customer: User, storage: Mock, attachment_store: TicketAttachmentStore
) -> None:
    pdf = Upload(filename="invoice.pdf", content_type="application/pdf", content=b"%PDF")

    with pytest.raises(UploadValidationError):
        OpenTicket(tickets, orders, attachment_store=attachment_store).execute(
            OpenTicketRequest(user=customer, title="Invoice", message="Attached", attachments=[pdf])
        )

    tickets.add.assert_not_called()
    storage.save.assert_not_called()


def test_attachments_not_stored_for_closed_ticket(
    tickets: Mock, customer: User, ticket: Ticket, storage: Mock, attachment_store: TicketAttachmentStore
) -> None:
    tickets.get_by_id.return_value = replace(ticket, status=TicketStatus.CLOSED)

    with pytest.raises(TicketValidationError):
        PostTicketMessage(tickets, attachment_store=attachment_store).execute(
            PostMessageRequest(actor=customer, ticket_id=TICKET_ID, message="Hi", attachments=[JPEG])
        )

    storage.save.assert_not_called()


def test_attachments_without_storage_are_an_internal_error(tickets: Mock, customer: User) -> None:
    with pytest.raises(InternalError):
        PostTicketMessage(tickets).execute(
            PostMessageRequest(actor=customer, ticket_id=TICKET_ID, message="Hi", attachments=[JPEG])
        )

    tickets.save.assert_not_called()


# ==============================================================================
# UpdateTicket / TakeTicket / DeleteTicket
# ==============================================================================


@pytest.fixture
def users(admin: User) -> Mock:
    repository = Mock(spec=UserRepository)
    repository.get_by_id.return_value = admin
    return repository


def test_owner_can_cancel(tickets: Mock, users: Mock, customer: User) -> None:
    ticket = UpdateTicket(tickets, users).execute(
        UpdateTicketRequest(actor=customer, ticket_id=TICKET_ID, status=TicketStatus.CANCELLED)
    )

    assert ticket.status is TicketStatus.CANCELLED


def test_owner_cannot_close(tickets: Mock, users: Mock, customer: User) -> None:
    with pytest.raises(ForbiddenError):
        UpdateTicket(tickets, users).execute(
            UpdateTicketRequest(actor=customer, ticket_id=TICKET_ID, status=TicketStatus.CLOSED)
        )


def test_owner_cannot_cancel_twice(tickets: Mock, users: Mock, customer: User, ticket: Ticket) -> None:
    tickets.get_by_id.return_value = replace(ticket, status=TicketStatus.CANCELLED)

    with pytest.raises(TicketValidationError):
        UpdateTicket(tickets, users).execute(
            UpdateTicketRequest(actor=customer, ticket_id=TICKET_ID, status=TicketStatus.CANCELLED)
        )


def test_admin_close_records_closer(tickets: Mock, users: Mock, admin: User) -> None:
    ticket = UpdateTicket(tickets, users, clock=lambda: NOW).execute(
        UpdateTicketRequest(actor=admin, ticket_id=TICKET_ID, status=TicketStatus.CLOSED, priority=TicketPriority.HIGH)
    )

    assert ticket.status is TicketStatus.CLOSED
    assert ticket.closed_at == NOW
    assert ticket.closed_by == ADMIN_ID
    assert ticket.priority is TicketPriority.HIGH
    assert ticket.unread_by_user is True


def test_admin_priority_change_does_not_mark_unread(tickets: Mock, users: Mock, admin: User) -> None:
    ticket = UpdateTicket(tickets, users).execute(
        UpdateTicketRequest(actor=admin, ticket_id=TICKET_ID, priority=TicketPriority.LOW)
    )

    assert ticket.priority is TicketPriority.LOW
    assert ticket.unread_by_user is False


def test_assigning_open_ticket_moves_it_in_progress(tickets: Mock, users: Mock, admin: User) -> None:
    ticket = UpdateTicket(tickets, users).execute(
        UpdateTicketRequest(actor=admin, ticket_id=TICKET_ID, assigned_to=ADMIN_ID)
    )

    assert ticket.assigned_to == ADMIN_ID
    assert ticket.assigned_to_name == "Anna"
    assert ticket.status is TicketStatus.IN_PROGRESS
    assert ticket.unread_by_user is True


def test_assigning_to_customer_is_ignored(tickets: Mock, users: Mock, admin: User, customer: User) -> None:
    users.get_by_id.return_value = customer

    ticket = UpdateTicket(tickets, users).execute(
        UpdateTicketRequest(actor=admin, ticket_id=TICKET_ID, assigned_to=ADMIN_ID)
    )

    assert ticket.assigned_to is None
    assert ticket.status is TicketStatus.OPEN


def test_take_ticket(tickets: Mock, admin: User) -> None:
    ticket = TakeTicket(tickets).execute(TicketActionRequest(actor=admin, ticket_id=TICKET_ID))

    assert ticket.assigned_to == ADMIN_ID
    assert ticket.status is TicketStatus.IN_PROGRESS
    assert ticket.unread_by_user is True


def test_delete_missing_ticket(tickets: Mock) -> None:
    tickets.delete.return_value = False

    with pytest.raises(NotFoundError):
        DeleteTicket(tickets).execute(TICKET_ID)
