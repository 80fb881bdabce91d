from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Sequence

from returns.result import Result

from order_lifecycle.core.domain.model.errors import OrderError
from order_lifecycle.core.domain.model.order import OrderId
from order_lifecycle.core.domain.model.status import OrderType


@dataclass(frozen=True)
class CreateOrderLine:
    sku: str
    quantity: int = 1


@dataclass(frozen=True)
class CreateOrderCommand:
    account_id: str
    order_type: str  # physical | digital | subscription
    lines: Sequence[CreateOrderLine]
    email: str | None = None


@dataclass(frozen=True)
class OrderReceipt:
    order_id: OrderId
    order_type: OrderType
    subtotal: Decimal


class CreateOrderUseCase(Protocol):
    def create_order(
        self, command: CreateOrderCommand
    ) -> Result[OrderReceipt, OrderError]: ...
