"""Collaborator value types consumed by the order core.

The core only reads ``Item.product.type`` and ``Item.subtotal()``; accounts,
payment methods and addresses are held as opaque references.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from order_lifecycle.core.domain.model.errors import PreconditionError


class ProductType(Enum):
    PHYSICAL = "physical"
    PHYSICAL_TAX_FREE = "physical_tax_free"
    DIGITAL = "digital"
    SUBSCRIPTION = "subscription"

    @property
    def is_physical(self) -> bool:
        return self in (ProductType.PHYSICAL, ProductType.PHYSICAL_TAX_FREE)

    @property
    def is_tax_free(self) -> bool:
        """Classification flag only; no tax is computed from it."""
        return self is ProductType.PHYSICAL_TAX_FREE


@dataclass(frozen=True)
class Product:
    sku: str
    name: str
    type: ProductType
    price: Decimal
    weight_kg: Decimal = Decimal("0")


@dataclass(frozen=True)
class Item:
    product: Product
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise PreconditionError(
                f"Item quantity must be > 0 (sku={self.product.sku})"
            )

    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity

    def weight(self) -> Decimal:
        return self.product.weight_kg * self.quantity


@dataclass(frozen=True)
class Account:
    account_id: str
    email: str | None = None


@dataclass(frozen=True)
class PaymentMethod:
    token: str
    kind: str = "card"


@dataclass(frozen=True)
class Address:
    line1: str
    city: str
    postal_code: str
    country: str
