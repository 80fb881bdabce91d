from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Mapping

from order_lifecycle.core.domain.model.catalog import Account, ProductType
from order_lifecycle.core.domain.model.errors import StateError
from order_lifecycle.core.domain.model.status import OrderStatus, OrderType, Phase

if TYPE_CHECKING:
    from order_lifecycle.core.domain.model.order import Order, OrderId


@dataclass(frozen=True)
class InvoiceLine:
    sku: str
    description: str
    product_type: ProductType
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

    @property
    def tax_free(self) -> bool:
        return self.product_type.is_tax_free


@dataclass(frozen=True)
class Invoice:
    """Snapshot of an order taken once its payment went through.

    Holds nothing beyond what the order held when it was taken; the order
    itself is never touched.
    """

    order_id: OrderId
    order_type: OrderType
    status: OrderStatus
    account: Account
    lines: tuple[InvoiceLine, ...]
    fees_and_discounts: Mapping[str, Decimal]
    subtotal: Decimal
    fees_and_discounts_total: Decimal
    grand_total: Decimal

    @classmethod
    def of(cls, order: Order) -> Invoice:
        if order.status is None or order.status.code < Phase.PAID:
            raise StateError("Invoice can only be generated after payment is complete")
        lines = tuple(
            InvoiceLine(
                sku=it.product.sku,
                description=it.product.name,
                product_type=it.product.type,
                quantity=it.quantity,
                unit_price=it.product.price,
                subtotal=it.subtotal(),
            )
            for it in order.items
        )
        return cls(
            order_id=order.order_id,
            order_type=order.type,
            status=order.status,
            account=order.account,
            lines=lines,
            fees_and_discounts=dict(order.fees_and_discounts),
            subtotal=order.subtotal(),
            fees_and_discounts_total=order.fees_and_discounts_total(),
            grand_total=order.grand_total(),
        )
