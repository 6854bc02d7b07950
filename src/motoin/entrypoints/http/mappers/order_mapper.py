from __future__ import annotations

from decimal import Decimal

from motoin.domain.orders import (
    Order,
    OrderChanges,
    OrderDraft,
    OrderItem,
    OrderStats,
    OrderStatus,
    PaymentStatus,
    ShippingMethod,
)
from motoin.entrypoints.http.dtos.orders import (
    OrderCreateDTO,
    OrderDTO,
    OrderItemDTO,
    OrderPageResponseDTO,
    OrderStatsResponseDTO,
    OrderStatusDTO,
    OrderUpdateDTO,
    PaymentStatusDTO,
    ShippingMethodDTO,
)
from motoin.entrypoints.http.mappers.pagination import to_pagination
from motoin.entrypoints.http.mappers.user_mapper import to_address, to_address_dto
from motoin.use_cases.manage_orders import ListOrdersRequest, ListOrdersResponse


class OrderMapper:
    @staticmethod
    def to_draft(dto: OrderCreateDTO) -> OrderDraft:
        return OrderDraft(
            items=[
                OrderItem(
                    name=item.name,
                    price=Decimal(item.price),
                    quantity=item.quantity,
                    product_id=item.product_id,
                    image=item.image,
                )
                for item in dto.items
            ],
            billing_address=to_address(dto.billing_address),
            shipping_address=to_address(dto.shipping_address),
            shipping_method=ShippingMethod(dto.shipping_method.value),
            shipping_cost=Decimal(dto.shipping_cost),
            notes=dto.notes,
        )

    @staticmethod
    def to_changes(dto: OrderUpdateDTO) -> OrderChanges:
        return OrderChanges(
            status=OrderStatus(dto.status.value) if dto.status else None,
            payment_status=PaymentStatus(dto.payment_status.value) if dto.payment_status else None,
            admin_notes=dto.admin_notes,
            shipped_at=dto.shipped_at,
            delivered_at=dto.delivered_at,
        )

    @staticmethod
    def to_order_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            order_number=order.order_number,
            user_id=order.user_id,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    name=item.name,
                    price=str(item.price),
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in order.items
            ],
            billing_address=to_address_dto(order.billing_address),
            shipping_address=to_address_dto(order.shipping_address),
            shipping_method=ShippingMethodDTO(order.shipping_method.value),
            shipping_cost=str(order.shipping_cost),
            subtotal=str(order.subtotal),
            total=str(order.total),
            status=OrderStatusDTO(order.status.value),
            payment_status=PaymentStatusDTO(order.payment_status.value),
            payment_method=order.payment_method,
            payment_id=order.payment_id,
            notes=order.notes,
            admin_notes=order.admin_notes,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    @staticmethod
    def to_page_response(
        result: ListOrdersResponse, request: ListOrdersRequest
    ) -> OrderPageResponseDTO:
        return OrderPageResponseDTO(
            data=[OrderMapper.to_order_dto(order) for order in result.orders],
            pagination=to_pagination(request.paging, result.total_count),
        )

    @staticmethod
    def to_stats_dto(stats: OrderStats) -> OrderStatsResponseDTO:
        return OrderStatsResponseDTO(
            total=stats.total,
            pending=stats.pending,
            processing=stats.processing,
            shipped=stats.shipped,
            delivered=stats.delivered,
            cancelled=stats.cancelled,
            revenue=str(stats.revenue),
        )
