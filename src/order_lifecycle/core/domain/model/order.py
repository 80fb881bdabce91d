"""Order contract and its physical, digital and subscription variants.

The phase guards live once in ``Order`` and are driven by each variant's
``_targets`` table (phase -> concrete status). Variants only add their
composition rule, their placement preconditions and the fee or discount they
inject on placement.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar, Mapping, Sequence
from uuid import UUID, uuid4

from order_lifecycle.core.domain.model.catalog import (
    Account,
    Address,
    Item,
    PaymentMethod,
    ProductType,
)
from order_lifecycle.core.domain.model.errors import PreconditionError, StateError
from order_lifecycle.core.domain.model.money import fold_money, round_money
from order_lifecycle.core.domain.model.parcel import (
    Parcel,
    ShippingCalculator,
    WeightBasedShipping,
)
from order_lifecycle.core.domain.model.status import OrderStatus, OrderType, Phase

if TYPE_CHECKING:
    from order_lifecycle.core.domain.model.invoice import Invoice

SHIPPING_AND_HANDLING = "shippingAndHandling"
VOUCHER = "Voucher"
VOUCHER_AMOUNT = Decimal("-10")


@dataclass(frozen=True)
class OrderId:
    value: UUID

    @staticmethod
    def new() -> "OrderId":
        return OrderId(uuid4())


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


class Order:
    type: ClassVar[OrderType]
    _accepted: ClassVar[frozenset[ProductType]]
    _composition_error: ClassVar[str]
    _targets: ClassVar[Mapping[Phase, OrderStatus]]

    def __init__(
        self,
        items: Sequence[Item],
        account: Account,
        *,
        order_id: OrderId | None = None,
        created_at: datetime | None = None,
    ) -> None:
        self._items: tuple[Item, ...] = tuple(items)
        self._account = account
        self._fees_and_discounts: dict[str, Decimal] = {}
        self._status: OrderStatus | None = None
        self.payment_method: PaymentMethod | None = None
        self.order_id = order_id or OrderId.new()
        self.created_at = created_at or now_utc()
        self._check_composition()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(order_id={self.order_id.value}, "
            f"items={len(self._items)}, status={self._status})"
        )

    # ---- fields ---------------------------------------------------------------

    @property
    def items(self) -> tuple[Item, ...]:
        return self._items

    @property
    def account(self) -> Account:
        return self._account

    @property
    def status(self) -> OrderStatus | None:
        return self._status

    @property
    def fees_and_discounts(self) -> Mapping[str, Decimal]:
        return MappingProxyType(self._fees_and_discounts)

    # ---- totals ---------------------------------------------------------------

    def subtotal(self) -> Decimal:
        return fold_money(it.subtotal() for it in self._items)

    def fees_and_discounts_total(self) -> Decimal:
        return fold_money(self._fees_and_discounts.values())

    def grand_total(self) -> Decimal:
        return self.subtotal() + self.fees_and_discounts_total()

    # ---- lifecycle ------------------------------------------------------------

    def with_payment_method(self, payment_method: PaymentMethod) -> Order:
        if payment_method is None:
            raise PreconditionError("A Payment method must be informed")
        self.payment_method = payment_method
        return self

    def place(self) -> Order:
        # a second call re-places the order; guarding that is left to callers
        self._check_placeable()
        if not self._items:
            raise PreconditionError("There must be at least one item to place the Order")
        adjustments = self._placement_adjustments()
        self._fees_and_discounts.update(adjustments)
        self._status = self._targets[Phase.PLACED]
        return self

    def pay(self) -> Order:
        return self._advance(
            Phase.PAID,
            not_ready="Order must be placed before it can be paid",
            already_done="Order Payment has been processed already",
        )

    def invoice(self) -> Invoice:
        from order_lifecycle.core.domain.model.invoice import Invoice

        return Invoice.of(self)

    def fulfill(self) -> Order:
        return self._advance(
            Phase.FULFILLED,
            not_ready="Order must be placed and paid before it can be fulfilled",
            already_done="Order Fulfillment has been processed already",
        )

    def complete(self) -> Order:
        if Phase.COMPLETED not in self._targets:
            return self
        return self._advance(
            Phase.COMPLETED,
            not_ready="Order must have been shipped/sent and confirmed, before it can be completed",
            already_done="Order has been delivered already",
        )

    # ---- variant hooks --------------------------------------------------------

    def _check_composition(self) -> None:
        if any(it.product.type not in self._accepted for it in self._items):
            raise PreconditionError(self._composition_error)

    def _check_placeable(self) -> None:
        if self.payment_method is None:
            raise PreconditionError("A Payment method must be informed to place the Order")

    def _placement_adjustments(self) -> dict[str, Decimal]:
        return {}

    # ---- shared guard ---------------------------------------------------------

    def _advance(self, phase: Phase, *, not_ready: str, already_done: str) -> Order:
        current = self._status
        if current is None or current.code < phase.previous:
            raise StateError(not_ready)
        if current.code >= phase:
            raise StateError(already_done)
        self._status = self._targets[phase]
        return self


class PhysicalOrder(Order):
    type = OrderType.PHYSICAL
    _accepted = frozenset({ProductType.PHYSICAL, ProductType.PHYSICAL_TAX_FREE})
    _composition_error = "A Physical Order may only contain Physical items"
    _targets = MappingProxyType(
        {
            Phase.PLACED: OrderStatus.PENDING,
            Phase.PAID: OrderStatus.NOT_SHIPPED,
            Phase.FULFILLED: OrderStatus.SHIPPED,
            Phase.COMPLETED: OrderStatus.DELIVERED,
        }
    )

    def __init__(
        self,
        items: Sequence[Item],
        account: Account,
        *,
        shipping: ShippingCalculator | None = None,
        order_id: OrderId | None = None,
        created_at: datetime | None = None,
    ) -> None:
        super().__init__(items, account, order_id=order_id, created_at=created_at)
        self.shipping_address: Address | None = None
        self._shipping = shipping or WeightBasedShipping()

    def with_shipping_address(self, address: Address) -> PhysicalOrder:
        if address is None:
            raise PreconditionError("Shipping Address must be informed")
        self.shipping_address = address
        return self

    def parcels(self) -> list[Parcel]:
        if self.shipping_address is None:
            raise PreconditionError("Parcels need a Shipping Address")
        return self._shipping.breakdown(self._items, self.shipping_address)

    def _check_placeable(self) -> None:
        if self.shipping_address is None:
            raise PreconditionError(
                "Shipping Address must be informed for Orders with physical delivery"
            )
        super()._check_placeable()

    def _placement_adjustments(self) -> dict[str, Decimal]:
        cost = self._shipping.shipping_cost_of(self.parcels())
        return {SHIPPING_AND_HANDLING: round_money(cost)}


class DigitalOrder(Order):
    type = OrderType.DIGITAL
    _accepted = frozenset({ProductType.DIGITAL})
    _composition_error = "A Digital Order may only contain Digital items"
    _targets = MappingProxyType(
        {
            Phase.PLACED: OrderStatus.PENDING,
            Phase.PAID: OrderStatus.UNSENT,
            Phase.FULFILLED: OrderStatus.SENT,
            Phase.COMPLETED: OrderStatus.REDEEMED,
        }
    )

    def _placement_adjustments(self) -> dict[str, Decimal]:
        return {VOUCHER: round_money(VOUCHER_AMOUNT)}


class SubscriptionOrder(Order):
    type = OrderType.SUBSCRIPTION
    _accepted = frozenset({ProductType.SUBSCRIPTION})
    _composition_error = "A Subscription Order may only contain Subscription items"
    # activation is completion: fulfill lands on the phase-400 status and
    # there is no COMPLETED entry, so complete() does nothing
    _targets = MappingProxyType(
        {
            Phase.PLACED: OrderStatus.PENDING,
            Phase.PAID: OrderStatus.PENDING_ACTIVATION,
            Phase.FULFILLED: OrderStatus.ACTIVATED,
        }
    )

    @classmethod
    def of_item(cls, item: Item, account: Account, **kwargs) -> SubscriptionOrder:
        return cls([item], account, **kwargs)

    def _check_composition(self) -> None:
        super()._check_composition()
        if len(self._items) != 1:
            raise PreconditionError(
                "A Subscription Order may only contain one Subscription item"
            )


_VARIANTS: dict[OrderType, type[Order]] = {
    OrderType.PHYSICAL: PhysicalOrder,
    OrderType.DIGITAL: DigitalOrder,
    OrderType.SUBSCRIPTION: SubscriptionOrder,
}


def new_order(
    order_type: OrderType, items: Sequence[Item], account: Account, **kwargs
) -> Order:
    """Build the variant matching ``order_type``.

    Extra keyword arguments are passed to the variant constructor
    (e.g. ``shipping=`` for physical orders).
    """
    cls = _VARIANTS[order_type]
    if cls is not PhysicalOrder:
        kwargs.pop("shipping", None)
    return cls(items, account, **kwargs)
