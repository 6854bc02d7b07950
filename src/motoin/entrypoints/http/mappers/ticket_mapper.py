from __future__ import annotations

from motoin.domain.tickets import Ticket, TicketPriority, TicketStats, TicketStatus
from motoin.entrypoints.http.dtos.tickets import (
    TicketDTO,
    TicketMessageDTO,
    TicketPageResponseDTO,
    TicketPriorityDTO,
    TicketStatsResponseDTO,
    TicketStatusDTO,
)
from motoin.entrypoints.http.dtos.users import RoleDTO
from motoin.entrypoints.http.mappers.pagination import to_pagination
from motoin.use_cases.manage_tickets import ListTicketsRequest, ListTicketsResponse


def to_status(dto: TicketStatusDTO | None) -> TicketStatus | None:
    return TicketStatus(dto.value) if dto is not None else None


def to_priority(dto: TicketPriorityDTO | None) -> TicketPriority | None:
    return TicketPriority(dto.value) if dto is not None else None


class TicketMapper:
    @staticmethod
    def to_ticket_dto(ticket: Ticket) -> TicketDTO:
        return TicketDTO(
            id=ticket.id,
            ticket_number=ticket.ticket_number,
            user_id=ticket.user_id,
            user_email=ticket.user_email,
            user_name=ticket.user_name,
            title=ticket.title,
            status=TicketStatusDTO(ticket.status.value),
            priority=TicketPriorityDTO(ticket.priority.value),
            assigned_to=ticket.assigned_to,
            assigned_to_name=ticket.assigned_to_name,
            messages=[
                TicketMessageDTO(
                    id=message.id,
                    sender_id=message.sender_id,
                    sender_name=message.sender_name,
                    sender_role=RoleDTO(message.sender_role.value),
                    message=message.message,
                    attachments=message.attachments,
                    created_at=message.created_at,
                )
                for message in ticket.messages
            ],
            closed_at=ticket.closed_at,
            closed_by=ticket.closed_by,
            unread_by_user=ticket.unread_by_user,
            related_order_id=ticket.related_order_id,
            related_order_number=ticket.related_order_number,
            created_at=ticket.created_at,
            updated_at=ticket.updated_at,
        )

    @staticmethod
    def to_page_response(
        result: ListTicketsResponse, request: ListTicketsRequest
    ) -> TicketPageResponseDTO:
        return TicketPageResponseDTO(
            data=[TicketMapper.to_ticket_dto(ticket) for ticket in result.tickets],
            pagination=to_pagination(request.paging, result.total_count),
        )

    @staticmethod
    def to_stats_dto(stats: TicketStats) -> TicketStatsResponseDTO:
        return TicketStatsResponseDTO(
            total=stats.total,
            open=stats.open,
            in_progress=stats.in_progress,
            closed=stats.closed,
            cancelled=stats.cancelled,
        )
