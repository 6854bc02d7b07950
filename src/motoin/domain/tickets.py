from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from motoin.domain.errors import ValidationError
from motoin.domain.users import Role

TICKET_NUMBER_PREFIX = "TKT"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"
    CANCELLED = "cancelled"

    @property
    def is_final(self) -> bool:
        return self in (TicketStatus.CLOSED, TicketStatus.CANCELLED)


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TicketValidationError(ValidationError):
    """Raised when a ticket or ticket message is invalid."""

    pass


@dataclass(frozen=True, slots=True)
class TicketMessage:
    id: str
    sender_id: str
    sender_name: str
    sender_role: Role
    message: str
    attachments: list[str] = field(default_factory=list)
    created_at: datetime | None = None


@dataclass(frozen=True)
class Ticket:
    id: str
    ticket_number: str
    user_id: str
    user_email: str
    title: str
    user_name: str | None = None
    status: TicketStatus = TicketStatus.OPEN
    priority: TicketPriority = TicketPriority.MEDIUM
    assigned_to: str | None = None
    assigned_to_name: str | None = None
    messages: list[TicketMessage] = field(default_factory=list)
    closed_at: datetime | None = None
    closed_by: str | None = None
    unread_by_user: bool = False
    related_order_id: str | None = None
    related_order_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_owned_by(self, user_id: str) -> bool:
        return self.user_id == user_id


@dataclass(frozen=True, slots=True)
class TicketFilters:
    """search is a case-insensitive substring of the title or ticket number."""

    user_id: str | None = None
    status: TicketStatus | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class TicketStats:
    total: int
    open: int
    in_progress: int
    closed: int
    cancelled: int


def format_ticket_number(sequence: int) -> str:
    return f"{TICKET_NUMBER_PREFIX}-{sequence:06d}"


def require_text(value: str | None, field_name: str) -> str:
    if value is None or not value.strip():
        raise TicketValidationError(
            errors=[{"field": field_name, "message": "This field is required", "code": "REQUIRED"}]
        )
    return value.strip()
