"""Support tickets: customer conversations and admin triage.

Visibility: customers only ever see and act on their own tickets; admins see
all of them. Any staff-side change the customer should notice (a reply, a
status change, an assignment) sets unread_by_user; the owner viewing the
ticket clears it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable

from motoin.domain.errors import ConflictError, ForbiddenError, InternalError, NotFoundError
from motoin.domain.identifiers import new_id, validate_uuid
from motoin.domain.paging import Paging
from motoin.domain.tickets import (
    Ticket,
    TicketFilters,
    TicketMessage,
    TicketPriority,
    TicketStats,
    TicketStatus,
    TicketValidationError,
    format_ticket_number,
    require_text,
)
from motoin.domain.uploads import Upload
from motoin.domain.users import Role, User
from motoin.ports.order_repository import OrderRepository
from motoin.ports.ticket_repository import TicketRepository
from motoin.ports.user_repository import UserRepository
from motoin.use_cases.uploads import TicketAttachmentStore

logger = logging.getLogger(__name__)

RESOURCE = "Ticket"
TICKET_NUMBER_ATTEMPTS = 3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_attachments(store: TicketAttachmentStore | None, uploads: list[Upload]) -> None:
    if not uploads:
        return
    if store is None:
        raise InternalError("File uploads are not configured")
    store.validate(uploads)


def _store_attachments(store: TicketAttachmentStore | None, uploads: list[Upload]) -> list[str]:
    if not uploads or store is None:
        return []
    return store.store(uploads)


def _message_from(
    sender: User, text: str, attachments: list[str], now: datetime
) -> TicketMessage:
    return TicketMessage(
        id=new_id(),
        sender_id=sender.id,
        sender_name=sender.display_name,
        sender_role=sender.role,
        message=text,
        attachments=list(attachments),
        created_at=now,
    )


@dataclass(frozen=True, slots=True)
class OpenTicketRequest:
    user: User
    title: str | None
    message: str | None
    priority: TicketPriority | None = None
    related_order_id: str | None = None
    attachments: list[Upload] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ListTicketsRequest:
    actor: User
    paging: Paging
    status: TicketStatus | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class ListTicketsResponse:
    tickets: list[Ticket]
    total_count: int


@dataclass(frozen=True, slots=True)
class TicketActionRequest:
    actor: User
    ticket_id: str


@dataclass(frozen=True, slots=True)
class PostMessageRequest:
    actor: User
    ticket_id: str
    message: str | None
    attachments: list[Upload] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class UpdateTicketRequest:
    actor: User
    ticket_id: str
    status: TicketStatus | None = None
    priority: TicketPriority | None = None
    assigned_to: str | None = None


class _TicketAccess:
    """Shared lookup and ownership check."""

    def __init__(self, ticket_repository: TicketRepository) -> None:
        self._tickets = ticket_repository

    def _load(self, actor: User, ticket_id: str) -> Ticket:
        """
        Raises:
            ValidationError: If ticket_id is not a UUID
            NotFoundError: If the ticket does not exist
            ForbiddenError: If a customer accesses another user's ticket
        """
        validate_uuid(ticket_id, field="ticket_id")
        ticket = self._tickets.get_by_id(ticket_id)
        if ticket is None:
            raise NotFoundError(RESOURCE, ticket_id)
        if not actor.is_admin and not ticket.is_owned_by(actor.id):
            raise ForbiddenError("Access denied")
        return ticket


class OpenTicket:
    """
    Open a ticket with its first message.

    A related order is linked only when it belongs to the requesting user;
    any other order id is ignored.
    """

    def __init__(
        self,
        ticket_repository: TicketRepository,
        order_repository: OrderRepository,
        attachment_store: TicketAttachmentStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tickets = ticket_repository
        self._orders = order_repository
        self._attachments = attachment_store
        self._clock = clock

    def execute(self, request: OpenTicketRequest) -> Ticket:
        title = require_text(request.title, "title")
        text = require_text(request.message, "message")
        _check_attachments(self._attachments, request.attachments)
        user = request.user
        now = self._clock()

        related_order_id = None
        related_order_number = None
        if request.related_order_id:
            validate_uuid(request.related_order_id, field="related_order_id")
            order = self._orders.get_for_user(request.related_order_id, user.id)
            if order is not None:
                related_order_id = order.id
                related_order_number = order.order_number

        attachments = _store_attachments(self._attachments, request.attachments)
        sequence = self._tickets.count() + 1
        attempt = 0
        while True:
            ticket = Ticket(
                id=new_id(),
                ticket_number=format_ticket_number(sequence + attempt),
                user_id=user.id,
                user_email=user.email,
                user_name=user.display_name,
                title=title,
                priority=request.priority or TicketPriority.MEDIUM,
                messages=[_message_from(user, text, attachments, now)],
                related_order_id=related_order_id,
                related_order_number=related_order_number,
            )
            try:
                saved = self._tickets.add(ticket)
            except ConflictError:
                attempt += 1
                if attempt >= TICKET_NUMBER_ATTEMPTS:
                    raise
                continue
            break

        logger.info(
            "Ticket opened",
            extra={"ticket_id": saved.id, "ticket_number": saved.ticket_number, "user_id": user.id},
        )
        return saved


class ListTickets:
    def __init__(self, ticket_repository: TicketRepository) -> None:
        self._tickets = ticket_repository

    def execute(self, request: ListTicketsRequest) -> ListTicketsResponse:
        request.paging.validate()
        filters = TicketFilters(
            user_id=None if request.actor.is_admin else request.actor.id,
            status=request.status,
            search=request.search,
        )
        result = self._tickets.search(filters, request.paging)
        return ListTicketsResponse(tickets=result.items, total_count=result.total_count)


class CountUnreadTickets:
    def __init__(self, ticket_repository: TicketRepository) -> None:
        self._tickets = ticket_repository

    def execute(self, user: User) -> int:
        return self._tickets.count_unread(user.id)


class GetTicketStats:
    def __init__(self, ticket_repository: TicketRepository) -> None:
        self._tickets = ticket_repository

    def execute(self) -> TicketStats:
        return self._tickets.stats()


class ViewTicket(_TicketAccess):
    """Fetch a ticket; the owner viewing it marks staff updates as read."""

    def execute(self, request: TicketActionRequest) -> Ticket:
        ticket = self._load(request.actor, request.ticket_id)
        if not request.actor.is_admin and ticket.unread_by_user:
            ticket = self._tickets.save(replace(ticket, unread_by_user=False))
        return ticket


class PostTicketMessage(_TicketAccess):
    def __init__(
        self,
        ticket_repository: TicketRepository,
        attachment_store: TicketAttachmentStore | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        super().__init__(ticket_repository)
        self._attachments = attachment_store
        self._clock = clock

    def execute(self, request: PostMessageRequest) -> Ticket:
        """
        Raises:
            TicketValidationError: If the message is blank or the ticket is closed/cancelled
            UploadValidationError: If an attachment is not an accepted image or video
        """
        text = require_text(request.message, "message")
        _check_attachments(self._attachments, request.attachments)
        ticket = self._load(request.actor, request.ticket_id)

        if ticket.status.is_final:
            raise TicketValidationError("Cannot add messages to a closed or cancelled ticket")

        attachments = _store_attachments(self._attachments, request.attachments)
        message = _message_from(request.actor, text, attachments, self._clock())
        ticket = replace(
            ticket,
            messages=[*ticket.messages, message],
            unread_by_user=True if request.actor.is_admin else ticket.unread_by_user,
        )
        return self._tickets.save(ticket)


class UpdateTicket(_TicketAccess):
    """
    Owners may only cancel a ticket that is still open or in progress.

    Admins may change status, priority and assignee. Closing records who
    closed it and when; assigning an open ticket moves it to in progress.
    """

    def __init__(
        self,
        ticket_repository: TicketRepository,
        user_repository: UserRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        super().__init__(ticket_repository)
        self._users = user_repository
        self._clock = clock

    def execute(self, request: UpdateTicketRequest) -> Ticket:
        ticket = self._load(request.actor, request.ticket_id)

        if not request.actor.is_admin:
            return self._cancel_by_owner(ticket, request)

        status_changed = False
        if request.status is not None:
            status_changed = ticket.status is not request.status
            ticket = replace(ticket, status=request.status)
            if request.status is TicketStatus.CLOSED:
                ticket = replace(ticket, closed_at=self._clock(), closed_by=request.actor.id)

        if request.priority is not None:
            ticket = replace(ticket, priority=request.priority)

        if request.assigned_to:
            assignee = self._find_admin(request.assigned_to)
            if assignee is not None:
                ticket = replace(
                    ticket,
                    assigned_to=assignee.id,
                    assigned_to_name=assignee.display_name,
                )
                if ticket.status is TicketStatus.OPEN:
                    ticket = replace(ticket, status=TicketStatus.IN_PROGRESS)
                    status_changed = True

        if status_changed:
            ticket = replace(ticket, unread_by_user=True)

        saved = self._tickets.save(ticket)
        logger.info(
            "Ticket updated",
            extra={"ticket_id": saved.id, "status": saved.status.value, "by": request.actor.id},
        )
        return saved

    def _cancel_by_owner(self, ticket: Ticket, request: UpdateTicketRequest) -> Ticket:
        if request.status is not TicketStatus.CANCELLED:
            raise ForbiddenError("You can only cancel your own ticket")
        if ticket.status.is_final:
            raise TicketValidationError("Ticket is already closed or cancelled")

        saved = self._tickets.save(replace(ticket, status=TicketStatus.CANCELLED))
        logger.info("Ticket cancelled by owner", extra={"ticket_id": saved.id})
        return saved

    def _find_admin(self, user_id: str) -> User | None:
        validate_uuid(user_id, field="assigned_to")
        user = self._users.get_by_id(user_id)
        if user is None or user.role is not Role.ADMIN:
            return None
        return user


class TakeTicket(_TicketAccess):
    """Assign the ticket to the acting admin and move it to in progress."""

    def execute(self, request: TicketActionRequest) -> Ticket:
        ticket = self._load(request.actor, request.ticket_id)
        saved = self._tickets.save(
            replace(
                ticket,
                assigned_to=request.actor.id,
                assigned_to_name=request.actor.display_name,
                status=TicketStatus.IN_PROGRESS,
                unread_by_user=True,
            )
        )
        logger.info("Ticket taken", extra={"ticket_id": saved.id, "by": request.actor.id})
        return saved


class DeleteTicket:
    def __init__(self, ticket_repository: TicketRepository) -> None:
        self._tickets = ticket_repository

    def execute(self, ticket_id: str) -> None:
        validate_uuid(ticket_id, field="ticket_id")
        if not self._tickets.delete(ticket_id):
            raise NotFoundError(RESOURCE, ticket_id)
        logger.info("Ticket deleted", extra={"ticket_id": ticket_id})
