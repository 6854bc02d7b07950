from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import Response

from motoin.domain.users import User
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
    require_admin,
)
from motoin.entrypoints.http.dtos.common import MessageResponseDTO
from motoin.entrypoints.http.dtos.tickets import (
    TicketListQueryDTO,
    TicketPageResponseDTO,
    TicketPriorityDTO,
    TicketResponseDTO,
    TicketStatsResponseDTO,
    TicketUpdateDTO,
    UnreadCountResponseDTO,
)
from motoin.entrypoints.http.error_responses import error_responses
from motoin.entrypoints.http.mappers.pagination import to_domain_paging
from motoin.entrypoints.http.mappers.ticket_mapper import TicketMapper, to_priority, to_status
from motoin.entrypoints.http.mappers.upload_mapper import to_uploads
from motoin.use_cases.manage_tickets import (
    CountUnreadTickets,
    DeleteTicket,
    GetTicketStats,
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
from motoin.use_cases.uploads import ReadUploadedFile

router = APIRouter(prefix="/tickets", tags=["Tickets"], responses=error_responses(401))

ADMIN_RESPONSES = error_responses(403, 422)
TICKET_RESPONSES = error_responses(403, 404, 422)


@router.get(
    "",
    response_model=TicketPageResponseDTO,
    summary="List tickets",
    description="Customers see their own tickets; admins see every ticket.",
)
def list_tickets(
    query: TicketListQueryDTO = Depends(),
    user: User = Depends(get_current_user),
    use_case: ListTickets = Depends(get_list_tickets_use_case),
) -> TicketPageResponseDTO:
    request = ListTicketsRequest(
        actor=user,
        paging=to_domain_paging(query),
        status=to_status(query.status),
        search=query.search,
    )
    result = use_case.execute(request)
    return TicketMapper.to_page_response(result, request)


@router.get(
    "/notifications",
    response_model=UnreadCountResponseDTO,
    summary="Number of own tickets with unread staff updates",
)
def unread_notifications(
    user: User = Depends(get_current_user),
    use_case: CountUnreadTickets = Depends(get_count_unread_tickets_use_case),
) -> UnreadCountResponseDTO:
    return UnreadCountResponseDTO(unread=use_case.execute(user))


@router.get(
    "/stats",
    response_model=TicketStatsResponseDTO,
    summary="Ticket counts by status",
    dependencies=[Depends(require_admin)],
    responses=ADMIN_RESPONSES,
)
def ticket_stats(use_case: GetTicketStats = Depends(get_ticket_stats_use_case)) -> TicketStatsResponseDTO:
    return TicketMapper.to_stats_dto(use_case.execute())


@router.get(
    "/files/{filename}",
    response_class=Response,
    summary="Download a ticket attachment",
    dependencies=[Depends(get_current_user)],
    responses=error_responses(404),
)
def ticket_file(
    filename: str,
    use_case: ReadUploadedFile = Depends(get_read_ticket_file_use_case),
) -> Response:
    stored = use_case.execute(filename)
    return Response(content=stored.content, media_type=stored.content_type)


@router.get(
    "/{ticket_id}",
    response_model=TicketResponseDTO,
    summary="Get a ticket",
    description="When the owner views the ticket, staff updates are marked as read.",
    responses=TICKET_RESPONSES,
)
def view_ticket(
    ticket_id: str,
    user: User = Depends(get_current_user),
    use_case: ViewTicket = Depends(get_view_ticket_use_case),
) -> TicketResponseDTO:
    ticket = use_case.execute(TicketActionRequest(actor=user, ticket_id=ticket_id))
    return TicketResponseDTO(data=TicketMapper.to_ticket_dto(ticket))


@router.post(
    "",
    response_model=TicketResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Open a ticket",
    description="Multipart form. related_order_id is linked only when the order belongs to the caller.",
    responses=error_responses(422),
)
def open_ticket(
    title: str = Form(min_length=1, max_length=255),
    message: str = Form(min_length=1),
    priority: TicketPriorityDTO | None = Form(default=None),
    related_order_id: str | None = Form(default=None),
    attachments: list[UploadFile] = File(default=[], description="Up to 5 images or videos, 5 MB each"),
    user: User = Depends(get_current_user),
    use_case: OpenTicket = Depends(get_open_ticket_use_case),
) -> TicketResponseDTO:
    request = OpenTicketRequest(
        user=user,
        title=title,
        message=message,
        priority=to_priority(priority),
        related_order_id=related_order_id,
        attachments=to_uploads(attachments),
    )
    return TicketResponseDTO(data=TicketMapper.to_ticket_dto(use_case.execute(request)))


@router.post(
    "/{ticket_id}/messages",
    response_model=TicketResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to a ticket",
    description="Multipart form. Closed and cancelled tickets accept no further messages.",
    responses=TICKET_RESPONSES,
)
def post_message(
    ticket_id: str,
    message: str = Form(min_length=1),
    attachments: list[UploadFile] = File(default=[], description="Up to 5 images or videos, 5 MB each"),
    user: User = Depends(get_current_user),
    use_case: PostTicketMessage = Depends(get_post_ticket_message_use_case),
) -> TicketResponseDTO:
    request = PostMessageRequest(
        actor=user,
        ticket_id=ticket_id,
        message=message,
        attachments=to_uploads(attachments),
    )
    return TicketResponseDTO(data=TicketMapper.to_ticket_dto(use_case.execute(request)))


@router.put(
    "/{ticket_id}",
    response_model=TicketResponseDTO,
    summary="Update a ticket",
    description="""
    - Owners may only cancel a ticket that is open or in progress
    - Admins may change status, priority and assignee
    """,
    responses=TICKET_RESPONSES,
)
def update_ticket(
    ticket_id: str,
    body: TicketUpdateDTO,
    user: User = Depends(get_current_user),
    use_case: UpdateTicket = Depends(get_update_ticket_use_case),
) -> TicketResponseDTO:
    request = UpdateTicketRequest(
        actor=user,
        ticket_id=ticket_id,
        status=to_status(body.status),
        priority=to_priority(body.priority),
        assigned_to=body.assigned_to,
    )
    return TicketResponseDTO(data=TicketMapper.to_ticket_dto(use_case.execute(request)))


@router.put(
    "/{ticket_id}/take",
    response_model=TicketResponseDTO,
    summary="Take a ticket",
    description="Assigns the ticket to the calling admin and moves it to in progress.",
    responses=TICKET_RESPONSES,
)
def take_ticket(
    ticket_id: str,
    admin: User = Depends(require_admin),
    use_case: TakeTicket = Depends(get_take_ticket_use_case),
) -> TicketResponseDTO:
    ticket = use_case.execute(TicketActionRequest(actor=admin, ticket_id=ticket_id))
    return TicketResponseDTO(data=TicketMapper.to_ticket_dto(ticket))


@router.delete(
    "/{ticket_id}",
    response_model=MessageResponseDTO,
    summary="Delete a ticket",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(404)},
)
def delete_ticket(
    ticket_id: str,
    use_case: DeleteTicket = Depends(get_delete_ticket_use_case),
) -> MessageResponseDTO:
    use_case.execute(ticket_id)
    return MessageResponseDTO(message="Ticket deleted")
