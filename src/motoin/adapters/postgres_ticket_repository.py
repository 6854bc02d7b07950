"""PostgreSQL implementation of TicketRepository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from motoin.adapters.json_codecs import ticket_message_from_json, ticket_message_to_json
from motoin.adapters.sql_patterns import LIKE_ESCAPE, contains_pattern
from motoin.domain.errors import ConflictError
from motoin.domain.paging import Paging, SearchResult
from motoin.domain.tickets import (
    Ticket,
    TicketFilters,
    TicketPriority,
    TicketStats,
    TicketStatus,
)
from motoin.infra.db.models.ticket import TicketRow
from motoin.ports.ticket_repository import TicketRepository


def _uuid_or_none(value: str | None) -> UUID | None:
    return UUID(value) if value else None


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value else None


class PostgresTicketRepository(TicketRepository):
    """The conversation is stored as a JSONB array on the ticket row."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def count(self) -> int:
        return self._session.execute(select(func.count()).select_from(TicketRow)).scalar() or 0

    def add(self, ticket: Ticket) -> Ticket:
        row = TicketRow(id=UUID(ticket.id))
        try:
            with self._session.begin_nested():
                self._copy_ticket(row, ticket)
                self._session.add(row)
        except IntegrityError as exc:
            raise ConflictError(
                f"Ticket number '{ticket.ticket_number}' already exists",
                ticket_number=ticket.ticket_number,
            ) from exc

        self._session.refresh(row)
        return self._to_domain(row)

    def get_by_id(self, ticket_id: str) -> Ticket | None:
        row = self._session.get(TicketRow, UUID(ticket_id))
        return self._to_domain(row) if row else None

    def save(self, ticket: Ticket) -> Ticket:
        row = self._session.get(TicketRow, UUID(ticket.id))
        if row is None:
            return self.add(ticket)
        self._copy_ticket(row, ticket)
        self._session.flush()
        self._session.refresh(row)
        return self._to_domain(row)

    def delete(self, ticket_id: str) -> bool:
        result = self._session.execute(delete(TicketRow).where(TicketRow.id == UUID(ticket_id)))
        return bool(result.rowcount)

    def search(self, filters: TicketFilters, paging: Paging) -> SearchResult[Ticket]:
        query = select(TicketRow)
        if filters.user_id is not None:
            query = query.where(TicketRow.user_id == UUID(filters.user_id))
        if filters.status is not None:
            query = query.where(TicketRow.status == filters.status.value)
        if filters.search:
            pattern = contains_pattern(filters.search)
            query = query.where(
                or_(
                    TicketRow.title.ilike(pattern, escape=LIKE_ESCAPE),
                    TicketRow.ticket_number.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        query = query.order_by(TicketRow.created_at.desc()).offset(paging.offset).limit(paging.per_page)
        rows = self._session.execute(query).scalars().all()

        return SearchResult(items=[self._to_domain(row) for row in rows], total_count=total_count)

    def count_unread(self, user_id: str) -> int:
        query = select(func.count()).where(
            TicketRow.user_id == UUID(user_id),
            TicketRow.unread_by_user.is_(True),
        )
        return self._session.execute(query).scalar() or 0

    def stats(self) -> TicketStats:
        def by_status(status: TicketStatus):
            return func.count().filter(TicketRow.status == status.value)

        query = select(
            func.count(),
            by_status(TicketStatus.OPEN),
            by_status(TicketStatus.IN_PROGRESS),
            by_status(TicketStatus.CLOSED),
            by_status(TicketStatus.CANCELLED),
        )
        total, open_, in_progress, closed, cancelled = self._session.execute(query).one()
        return TicketStats(
            total=total,
            open=open_,
            in_progress=in_progress,
            closed=closed,
            cancelled=cancelled,
        )

    @staticmethod
    def _copy_ticket(row: TicketRow, ticket: Ticket) -> None:
        row.ticket_number = ticket.ticket_number
        row.user_id = UUID(ticket.user_id)
        row.user_email = ticket.user_email
        row.user_name = ticket.user_name
        row.title = ticket.title
        row.status = ticket.status.value
        row.priority = ticket.priority.value
        row.assigned_to = _uuid_or_none(ticket.assigned_to)
        row.assigned_to_name = ticket.assigned_to_name
        row.messages = [ticket_message_to_json(message) for message in ticket.messages]
        row.closed_at = ticket.closed_at
        row.closed_by = _uuid_or_none(ticket.closed_by)
        row.unread_by_user = ticket.unread_by_user
        row.related_order_id = _uuid_or_none(ticket.related_order_id)
        row.related_order_number = ticket.related_order_number

    @staticmethod
    def _to_domain(row: TicketRow) -> Ticket:
        return Ticket(
            id=str(row.id),
            ticket_number=row.ticket_number,
            user_id=str(row.user_id),
            user_email=row.user_email,
            user_name=row.user_name,
            title=row.title,
            status=TicketStatus(row.status),
            priority=TicketPriority(row.priority),
            assigned_to=_str_or_none(row.assigned_to),
            assigned_to_name=row.assigned_to_name,
            messages=[ticket_message_from_json(data) for data in row.messages or []],
            closed_at=row.closed_at,
            closed_by=_str_or_none(row.closed_by),
            unread_by_user=row.unread_by_user,
            related_order_id=_str_or_none(row.related_order_id),
            related_order_number=row.related_order_number,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
