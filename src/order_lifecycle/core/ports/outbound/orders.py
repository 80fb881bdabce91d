from __future__ import annotations

from typing import Protocol

from returns.result import Result

from order_lifecycle.core.domain.model.errors import OrderError
from order_lifecycle.core.domain.model.order import Order, OrderId


class OrderRepository(Protocol):
    def save(self, order: Order) -> Result[OrderId, OrderError]:
        """Insert or replace; orders are saved again after every transition."""
        ...

    def get(self, order_id: OrderId) -> Result[Order, OrderError]: ...
