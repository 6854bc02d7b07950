from fastapi import APIRouter, Depends, status

from motoin.domain.orders import OrderStatus
from motoin.domain.users import User
from motoin.entrypoints.http.dependencies import (
    get_current_user,
    get_delete_order_use_case,
    get_get_order_use_case,
    get_list_orders_use_case,
    get_order_stats_use_case,
    get_place_order_use_case,
    get_update_order_use_case,
    require_admin,
)
from motoin.entrypoints.http.dtos.common import MessageResponseDTO
from motoin.entrypoints.http.dtos.orders import (
    OrderCreateDTO,
    OrderListQueryDTO,
    OrderPageResponseDTO,
    OrderResponseDTO,
    OrderStatsResponseDTO,
    OrderUpdateDTO,
)
from motoin.entrypoints.http.error_responses import error_responses
from motoin.entrypoints.http.mappers.order_mapper import OrderMapper
from motoin.entrypoints.http.mappers.pagination import to_domain_paging
from motoin.use_cases.manage_orders import (
    DeleteOrder,
    GetOrder,
    GetOrderRequest,
    GetOrderStats,
    ListOrders,
    ListOrdersRequest,
    PlaceOrder,
    PlaceOrderRequest,
    UpdateOrder,
    UpdateOrderRequest,
)

router = APIRouter(prefix="/orders", tags=["Orders"], responses=error_responses(401))

ADMIN_RESPONSES = error_responses(403, 422)


@router.get(
    "",
    response_model=OrderPageResponseDTO,
    summary="List orders",
    description="Customers see their own orders; admins see every order. Newest first.",
)
def list_orders(
    query: OrderListQueryDTO = Depends(),
    user: User = Depends(get_current_user),
    use_case: ListOrders = Depends(get_list_orders_use_case),
) -> OrderPageResponseDTO:
    request = ListOrdersRequest(
        actor=user,
        paging=to_domain_paging(query),
        status=OrderStatus(query.status.value) if query.status else None,
        search=query.search,
    )
    result = use_case.execute(request)
    return OrderMapper.to_page_response(result, request)


@router.get(
    "/stats",
    response_model=OrderStatsResponseDTO,
    summary="Order counts and revenue",
    dependencies=[Depends(require_admin)],
    responses=ADMIN_RESPONSES,
)
def order_stats(use_case: GetOrderStats = Depends(get_order_stats_use_case)) -> OrderStatsResponseDTO:
    return OrderMapper.to_stats_dto(use_case.execute())


@router.get(
    "/{order_id}",
    response_model=OrderResponseDTO,
    summary="Get an order",
    responses=error_responses(403, 404),
)
def get_order(
    order_id: str,
    user: User = Depends(get_current_user),
    use_case: GetOrder = Depends(get_get_order_use_case),
) -> OrderResponseDTO:
    order = use_case.execute(GetOrderRequest(actor=user, order_id=order_id))
    return OrderResponseDTO(data=OrderMapper.to_order_dto(order))


@router.post(
    "",
    response_model=OrderResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
    description="""
    Subtotal and total are computed from the items and shipping cost; they
    cannot be supplied. The shipping address defaults to the billing address.

    ## Monetary Values
    All monetary values are strings (e.g., "49.90").
    """,
    responses=error_responses(422),
)
def place_order(
    body: OrderCreateDTO,
    user: User = Depends(get_current_user),
    use_case: PlaceOrder = Depends(get_place_order_use_case),
) -> OrderResponseDTO:
    order = use_case.execute(PlaceOrderRequest(customer=user, draft=OrderMapper.to_draft(body)))
    return OrderResponseDTO(data=OrderMapper.to_order_dto(order))


@router.put(
    "/{order_id}",
    response_model=OrderResponseDTO,
    summary="Update an order",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(404)},
)
def update_order(
    order_id: str,
    body: OrderUpdateDTO,
    use_case: UpdateOrder = Depends(get_update_order_use_case),
) -> OrderResponseDTO:
    order = use_case.execute(UpdateOrderRequest(order_id=order_id, changes=OrderMapper.to_changes(body)))
    return OrderResponseDTO(data=OrderMapper.to_order_dto(order))


@router.delete(
    "/{order_id}",
    response_model=MessageResponseDTO,
    summary="Delete an order",
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_RESPONSES, **error_responses(404)},
)
def delete_order(
    order_id: str,
    use_case: DeleteOrder = Depends(get_delete_order_use_case),
) -> MessageResponseDTO:
    use_case.execute(order_id)
    return MessageResponseDTO(message="Order deleted")
