from __future__ import annotations

import logging
from dataclasses import dataclass

from returns.pipeline import flow
from returns.pointfree import bind, map_
from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.catalog import Account, Item
from order_lifecycle.core.domain.model.errors import OrderError, ValidationError
from order_lifecycle.core.domain.model.order import Order, new_order
from order_lifecycle.core.domain.model.parcel import ShippingCalculator
from order_lifecycle.core.domain.model.status import OrderType
from order_lifecycle.core.ports.inbound.create_order import (
    CreateOrderCommand,
    CreateOrderUseCase,
    OrderReceipt,
)
from order_lifecycle.core.ports.outbound.catalog import ProductCatalog
from order_lifecycle.core.ports.outbound.events import (
    EventPublisher,
    OrderCreated,
)
from order_lifecycle.core.ports.outbound.orders import OrderRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateOrderDeps:
    catalog: ProductCatalog
    orders: OrderRepository
    events: EventPublisher
    shipping: ShippingCalculator


@dataclass(frozen=True)
class CreateOrderService(CreateOrderUseCase):
    deps: CreateOrderDeps

    def create_order(
        self, command: CreateOrderCommand
    ) -> Result[OrderReceipt, OrderError]:
        return flow(
            command,
            _validate_command,
            bind(self._build_order),
            bind(self._persist),
            bind(self._publish),
            map_(_to_receipt),
        )

    def _build_order(self, cmd: CreateOrderCommand) -> Result[Order, OrderError]:
        items: list[Item] = []
        for ln in cmd.lines:
            found = self.deps.catalog.find(ln.sku)
            if isinstance(found, Failure):
                return found
            try:
                items.append(Item(found.unwrap(), ln.quantity))
            except OrderError as err:
                return Failure(err)

        account = Account(cmd.account_id, email=cmd.email)
        try:
            order = new_order(
                OrderType(cmd.order_type), items, account, shipping=self.deps.shipping
            )
        except OrderError as err:
            logger.info("order rejected for account %s: %s", cmd.account_id, err)
            return Failure(err)
        return Success(order)

    def _persist(self, order: Order) -> Result[Order, OrderError]:
        return self.deps.orders.save(order).map(lambda _: order)

    def _publish(self, order: Order) -> Result[Order, OrderError]:
        logger.info("created %s order %s", order.type.value, order.order_id.value)
        published = self.deps.events.publish(OrderCreated(order.order_id, order.type))
        if isinstance(published, Failure):
            # the order is stored already; a lost event does not undo that
            logger.warning(
                "order %s: event not published: %s",
                order.order_id.value,
                published.failure(),
            )
        return Success(order)


def _validate_command(
    cmd: CreateOrderCommand,
) -> Result[CreateOrderCommand, OrderError]:
    if not cmd.account_id.strip():
        return Failure(ValidationError("account_id is required"))
    if cmd.order_type not in {t.value for t in OrderType}:
        return Failure(
            ValidationError("order_type must be one of: physical, digital, subscription")
        )
    if not cmd.lines:
        return Failure(ValidationError("at least one line item is required"))

    for i, ln in enumerate(cmd.lines):
        if not ln.sku.strip():
            return Failure(ValidationError(f"lines[{i}].sku is required"))
        if ln.quantity <= 0:
            return Failure(ValidationError(f"lines[{i}].quantity must be > 0"))

    return Success(cmd)


def _to_receipt(order: Order) -> OrderReceipt:
    return OrderReceipt(
        order_id=order.order_id, order_type=order.type, subtotal=order.subtotal()
    )
