from __future__ import annotations

from dataclasses import dataclass


@dataclass
class OrderError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


# ---- raised by the order core ------------------------------------------------


@dataclass
class PreconditionError(OrderError):
    """Structural or input problem; always fixable by the caller."""


@dataclass
class StateError(OrderError):
    """A transition attempted out of phase order."""


# ---- service / adapter failures ----------------------------------------------


@dataclass
class ValidationError(OrderError):
    pass


@dataclass
class ProductNotFound(OrderError):
    sku: str

    def __str__(self) -> str:
        return f"product_not_found: sku={self.sku} ({self.message})"


@dataclass
class PaymentDeclined(OrderError):
    reason: str

    def __str__(self) -> str:
        return f"payment_declined: {self.reason} ({self.message})"


@dataclass
class PersistenceError(OrderError):
    pass


@dataclass
class OrderNotFound(PersistenceError):
    order_id: str

    def __str__(self) -> str:
        return f"order_not_found: {self.order_id} ({self.message})"


@dataclass
class PublishError(OrderError):
    pass
