from __future__ import annotations

from uuid import UUID

from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.errors import OrderError, ValidationError
from order_lifecycle.core.domain.model.order import Order, OrderId
from order_lifecycle.core.ports.inbound.get_order import OrderLineView, OrderView


def parse_order_id(raw: str) -> Result[OrderId, OrderError]:
    try:
        return Success(OrderId(UUID(raw)))
    except (TypeError, ValueError):
        return Failure(ValidationError(message="order_id must be a valid UUID"))


def to_view(order: Order) -> OrderView:
    lines = tuple(
        OrderLineView(
            sku=it.product.sku,
            product_type=it.product.type,
            unit_price=it.product.price,
            quantity=it.quantity,
            subtotal=it.subtotal(),
        )
        for it in order.items
    )
    return OrderView(
        order_id=order.order_id,
        order_type=order.type,
        account_id=order.account.account_id,
        status=order.status,
        lines=lines,
        fees_and_discounts=dict(order.fees_and_discounts),
        subtotal=order.subtotal(),
        fees_and_discounts_total=order.fees_and_discounts_total(),
        grand_total=order.grand_total(),
        has_payment_method=order.payment_method is not None,
    )
