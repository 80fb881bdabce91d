from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.catalog import Address, PaymentMethod
from order_lifecycle.core.domain.model.errors import (
    OrderError,
    StateError,
    ValidationError,
)
from order_lifecycle.core.domain.model.order import Order, PhysicalOrder
from order_lifecycle.core.domain.model.status import OrderStatus
from order_lifecycle.core.domain.service.views import parse_order_id, to_view
from order_lifecycle.core.ports.inbound.advance_order import (
    AdvanceOrderUseCase,
    AttachPaymentMethodCommand,
    OrderRef,
    SetShippingAddressCommand,
)
from order_lifecycle.core.ports.inbound.get_order import OrderView
from order_lifecycle.core.ports.outbound.events import (
    EventPublisher,
    OrderStatusChanged,
)
from order_lifecycle.core.ports.outbound.orders import OrderRepository
from order_lifecycle.core.ports.outbound.payment import ChargeRequest, PaymentGateway

logger = logging.getLogger(__name__)

Step = Callable[[Order], Order]


@dataclass(frozen=True)
class AdvanceOrderDeps:
    orders: OrderRepository
    payment: PaymentGateway
    events: EventPublisher


@dataclass(frozen=True)
class AdvanceOrderService(AdvanceOrderUseCase):
    """Drives stored orders through their lifecycle.

    Each call loads the order, applies one domain operation, saves it and
    publishes the resulting status. Domain exceptions come back as
    ``Failure`` values; a failing step leaves the order untouched, since the
    domain only mutates after all of its checks pass. Publishing is
    best-effort: once a transition is saved the call succeeds even if the
    event is lost.
    """

    deps: AdvanceOrderDeps

    def attach_payment_method(
        self, command: AttachPaymentMethodCommand
    ) -> Result[OrderView, OrderError]:
        if not command.token.strip():
            return Failure(ValidationError("payment token is required"))
        method = PaymentMethod(token=command.token, kind=command.kind)
        return self._run(
            command.order_id, lambda o: o.with_payment_method(method), publish=False
        )

    def set_shipping_address(
        self, command: SetShippingAddressCommand
    ) -> Result[OrderView, OrderError]:
        address = Address(
            line1=command.line1,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        if not all(v.strip() for v in (address.line1, address.city, address.country)):
            return Failure(ValidationError("line1, city and country are required"))

        def step(order: Order) -> Order:
            if not isinstance(order, PhysicalOrder):
                raise ValidationError(
                    f"{order.type.value} orders do not take a shipping address"
                )
            return order.with_shipping_address(address)

        return self._run(command.order_id, step, publish=False)

    def place(self, ref: OrderRef) -> Result[OrderView, OrderError]:
        def step(order: Order) -> Order:
            # the order itself allows re-placing; callers of this service may not
            if order.status is not None:
                raise StateError("Order has been placed already")
            return order.place()

        return self._run(ref.order_id, step)

    def pay(self, ref: OrderRef) -> Result[OrderView, OrderError]:
        return (
            parse_order_id(ref.order_id)
            .bind(self.deps.orders.get)
            .bind(self._charge)
            .bind(lambda o: self._apply(o, lambda x: x.pay(), publish=True))
        )

    def fulfill(self, ref: OrderRef) -> Result[OrderView, OrderError]:
        return self._run(ref.order_id, lambda o: o.fulfill())

    def complete(self, ref: OrderRef) -> Result[OrderView, OrderError]:
        return self._run(ref.order_id, lambda o: o.complete())

    # ---- side effects ------------------------------------------------------

    def _charge(self, order: Order) -> Result[Order, OrderError]:
        # only a placed, unpaid order is charged; pay() reports anything else
        if order.status is not OrderStatus.PENDING or order.payment_method is None:
            return Success(order)
        req = ChargeRequest(
            account=order.account,
            amount=order.grand_total(),
            method=order.payment_method,
        )
        logger.info("charging %s for order %s", req.amount, order.order_id.value)
        return self.deps.payment.charge(req).map(lambda _: order)

    def _run(
        self, raw_id: str, step: Step, publish: bool = True
    ) -> Result[OrderView, OrderError]:
        return (
            parse_order_id(raw_id)
            .bind(self.deps.orders.get)
            .bind(lambda o: self._apply(o, step, publish=publish))
        )

    def _apply(
        self, order: Order, step: Step, publish: bool
    ) -> Result[OrderView, OrderError]:
        before = order.status
        try:
            step(order)
        except OrderError as err:
            logger.info("order %s: %s", order.order_id.value, err)
            return Failure(err)

        saved = self.deps.orders.save(order)
        if isinstance(saved, Failure):
            return saved

        if publish and order.status is not before:
            logger.info(
                "order %s: %s -> %s",
                order.order_id.value,
                before.value if before else None,
                order.status.value if order.status else None,
            )
            published = self.deps.events.publish(
                OrderStatusChanged(order.order_id, order.status)
            )
            if isinstance(published, Failure):
                # the transition is saved (and possibly charged); report it
                logger.warning(
                    "order %s: event not published: %s",
                    order.order_id.value,
                    published.failure(),
                )
        return Success(to_view(order))
