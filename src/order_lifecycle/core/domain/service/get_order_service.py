from __future__ import annotations

from dataclasses import dataclass

from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.errors import OrderError
from order_lifecycle.core.domain.model.invoice import Invoice
from order_lifecycle.core.domain.model.order import Order
from order_lifecycle.core.domain.service.views import parse_order_id, to_view
from order_lifecycle.core.ports.inbound.get_order import (
    GetOrderQuery,
    GetOrderUseCase,
    OrderView,
)
from order_lifecycle.core.ports.outbound.orders import OrderRepository


@dataclass(frozen=True)
class GetOrderDeps:
    orders: OrderRepository


@dataclass(frozen=True)
class GetOrderService(GetOrderUseCase):
    deps: GetOrderDeps

    def get_order(self, query: GetOrderQuery) -> Result[OrderView, OrderError]:
        return parse_order_id(query.order_id).bind(self.deps.orders.get).map(to_view)

    def get_invoice(self, query: GetOrderQuery) -> Result[Invoice, OrderError]:
        return parse_order_id(query.order_id).bind(self.deps.orders.get).bind(_invoice)


def _invoice(order: Order) -> Result[Invoice, OrderError]:
    try:
        return Success(order.invoice())
    except OrderError as err:
        return Failure(err)
