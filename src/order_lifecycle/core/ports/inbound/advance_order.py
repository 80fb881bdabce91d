from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from order_lifecycle.core.domain.model.errors import OrderError
from order_lifecycle.core.ports.inbound.get_order import OrderView


@dataclass(frozen=True)
class OrderRef:
    order_id: str  # UUID string


@dataclass(frozen=True)
class AttachPaymentMethodCommand:
    order_id: str
    token: str
    kind: str = "card"


@dataclass(frozen=True)
class SetShippingAddressCommand:
    order_id: str
    line1: str
    city: str
    postal_code: str
    country: str


class AdvanceOrderUseCase(Protocol):
    def attach_payment_method(
        self, command: AttachPaymentMethodCommand
    ) -> Result[OrderView, OrderError]: ...

    def set_shipping_address(
        self, command: SetShippingAddressCommand
    ) -> Result[OrderView, OrderError]: ...

    def place(self, ref: OrderRef) -> Result[OrderView, OrderError]: ...

    def pay(self, ref: OrderRef) -> Result[OrderView, OrderError]: ...

    def fulfill(self, ref: OrderRef) -> Result[OrderView, OrderError]: ...

    def complete(self, ref: OrderRef) -> Result[OrderView, OrderError]: ...
