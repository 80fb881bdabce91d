from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.errors import OrderError, OrderNotFound
from order_lifecycle.core.domain.model.order import Order, OrderId
from order_lifecycle.core.ports.outbound.orders import OrderRepository


@dataclass
class InMemoryOrderRepository(OrderRepository):
    _store: Dict[str, Order] = field(default_factory=dict)

    def save(self, order: Order) -> Result[OrderId, OrderError]:
        self._store[str(order.order_id.value)] = order
        return Success(order.order_id)

    def get(self, order_id: OrderId) -> Result[Order, OrderError]:
        key = str(order_id.value)
        if key not in self._store:
            return Failure(OrderNotFound(message="order not found", order_id=key))
        return Success(self._store[key])
