from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from motoin.entrypoints.http.dtos.common import PageQueryDTO, PaginationDTO
from motoin.entrypoints.http.dtos.users import RoleDTO


class TicketStatusDTO(str, Enum):
    open = "open"
    in_progress = "in_progress"
    closed = "closed"
    cancelled = "cancelled"


class TicketPriorityDTO(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TicketMessageDTO(BaseModel):
    id: str
    sender_id: str
    sender_name: str
    sender_role: RoleDTO
    message: str
    attachments: list[str]
    created_at: datetime | None = None


class TicketDTO(BaseModel):
    id: str
    ticket_number: str
    user_id: str
    user_email: str
    user_name: str | None = None
    title: str
    status: TicketStatusDTO
    priority: TicketPriorityDTO
    assigned_to: str | None = None
    assigned_to_name: str | None = None
    messages: list[TicketMessageDTO]
    closed_at: datetime | None = None
    closed_by: str | None = None
    unread_by_user: bool
    related_order_id: str | None = None
    related_order_number: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TicketUpdateDTO(BaseModel):
    status: TicketStatusDTO | None = None
    priority: TicketPriorityDTO | None = None
    assigned_to: str | None = Field(default=None, description="Id of an admin user")


class TicketListQueryDTO(PageQueryDTO):
    status: TicketStatusDTO | None = None
    search: str | None = Field(default=None, description="Title or ticket number contains")


class TicketResponseDTO(BaseModel):
    data: TicketDTO


class TicketPageResponseDTO(BaseModel):
    data: list[TicketDTO]
    pagination: PaginationDTO


class UnreadCountResponseDTO(BaseModel):
    unread: int


class TicketStatsResponseDTO(BaseModel):
    total: int
    open: int
    in_progress: int
    closed: int
    cancelled: int
