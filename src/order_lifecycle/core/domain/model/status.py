"""Order status scheme.

Every status belongs to one of four ordered phases. The phase code is what
the shared guards compare, so statuses of different order types that sit in
the same phase (e.g. NOT_SHIPPED, UNSENT and PENDING_ACTIVATION at 200) are
interchangeable for ordering purposes while remaining distinct members.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class OrderType(Enum):
    PHYSICAL = "physical"
    DIGITAL = "digital"
    SUBSCRIPTION = "subscription"


class Phase(IntEnum):
    PLACED = 100
    PAID = 200
    FULFILLED = 300
    COMPLETED = 400

    @property
    def previous(self) -> Phase | None:
        """The phase an order must have reached before entering this one."""
        phases = list(Phase)
        idx = phases.index(self)
        return phases[idx - 1] if idx > 0 else None


class OrderStatus(Enum):
    PENDING = "pending"
    NOT_SHIPPED = "not_shipped"
    UNSENT = "unsent"
    PENDING_ACTIVATION = "pending_activation"
    SHIPPED = "shipped"
    SENT = "sent"
    DELIVERED = "delivered"
    REDEEMED = "redeemed"
    ACTIVATED = "activated"

    @property
    def phase(self) -> Phase:
        return _PHASES[self]

    @property
    def code(self) -> int:
        return int(self.phase)


_PHASES: dict[OrderStatus, Phase] = {
    OrderStatus.PENDING: Phase.PLACED,
    OrderStatus.NOT_SHIPPED: Phase.PAID,
    OrderStatus.UNSENT: Phase.PAID,
    OrderStatus.PENDING_ACTIVATION: Phase.PAID,
    OrderStatus.SHIPPED: Phase.FULFILLED,
    OrderStatus.SENT: Phase.FULFILLED,
    OrderStatus.DELIVERED: Phase.COMPLETED,
    OrderStatus.REDEEMED: Phase.COMPLETED,
    OrderStatus.ACTIVATED: Phase.COMPLETED,
}
