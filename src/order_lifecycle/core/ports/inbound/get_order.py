from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping, Protocol, Sequence

from returns.result import Result

from order_lifecycle.core.domain.model.catalog import ProductType
from order_lifecycle.core.domain.model.errors import OrderError
from order_lifecycle.core.domain.model.invoice import Invoice
from order_lifecycle.core.domain.model.order import OrderId
from order_lifecycle.core.domain.model.status import OrderStatus, OrderType


@dataclass(frozen=True)
class GetOrderQuery:
    order_id: str  # UUID string


@dataclass(frozen=True)
class OrderLineView:
    sku: str
    product_type: ProductType
    unit_price: Decimal
    quantity: int
    subtotal: Decimal


@dataclass(frozen=True)
class OrderView:
    order_id: OrderId
    order_type: OrderType
    account_id: str
    status: OrderStatus | None
    lines: Sequence[OrderLineView]
    fees_and_discounts: Mapping[str, Decimal]
    subtotal: Decimal
    fees_and_discounts_total: Decimal
    grand_total: Decimal
    has_payment_method: bool


class GetOrderUseCase(Protocol):
    def get_order(self, query: GetOrderQuery) -> Result[OrderView, OrderError]: ...

    def get_invoice(self, query: GetOrderQuery) -> Result[Invoice, OrderError]: ...
