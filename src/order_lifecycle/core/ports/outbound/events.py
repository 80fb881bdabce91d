from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from returns.result import Result

from order_lifecycle.core.domain.model.errors import OrderError
from order_lifecycle.core.domain.model.order import OrderId
from order_lifecycle.core.domain.model.status import OrderStatus, OrderType, Phase

_PHASE_EVENTS = {
    Phase.PLACED: "order_placed",
    Phase.PAID: "order_paid",
    Phase.FULFILLED: "order_fulfilled",
    Phase.COMPLETED: "order_completed",
}


@dataclass(frozen=True)
class OrderCreated:
    order_id: OrderId
    order_type: OrderType

    @property
    def name(self) -> str:
        return "order_created"


@dataclass(frozen=True)
class OrderStatusChanged:
    order_id: OrderId
    status: OrderStatus

    @property
    def name(self) -> str:
        return _PHASE_EVENTS[self.status.phase]


OrderEvent = Union[OrderCreated, OrderStatusChanged]


class EventPublisher(Protocol):
    def publish(self, event: OrderEvent) -> Result[None, OrderError]: ...
