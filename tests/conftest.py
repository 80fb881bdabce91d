from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import pytest

from order_lifecycle.core.domain.model.catalog import (
    Account,
    Address,
    Item,
    PaymentMethod,
    Product,
    ProductType,
)
from order_lifecycle.core.domain.model.parcel import Parcel


@dataclass(frozen=True)
class FixedShipping:
    cost: Decimal = Decimal("7.50")

    def breakdown(self, items, address):
        return [Parcel(address, tuple(items))]

    def shipping_cost_of(self, parcels):
        return self.cost


def product(sku: str, type_: ProductType, price: str, weight: str = "0") -> Product:
    return Product(sku, sku.lower(), type_, Decimal(price), Decimal(weight))


@pytest.fixture
def account() -> Account:
    return Account("acc-1", email="buyer@example.com")


@pytest.fixture
def address() -> Address:
    return Address("1 Main St", "Springfield", "12345", "US")


@pytest.fixture
def card() -> PaymentMethod:
    return PaymentMethod("tok_ok")


@pytest.fixture
def book() -> Item:
    return Item(product("BOOK-1", ProductType.PHYSICAL, "19.99", "0.8"))


@pytest.fixture
def bread() -> Item:
    return Item(product("BREAD-1", ProductType.PHYSICAL_TAX_FREE, "5.00", "0.5"))


@pytest.fixture
def ebook() -> Item:
    return Item(product("EBOOK-1", ProductType.DIGITAL, "29.99"))


@pytest.fixture
def plan() -> Item:
    return Item(product("PLAN-MONTHLY", ProductType.SUBSCRIPTION, "9.99"))


@pytest.fixture
def fixed_shipping() -> FixedShipping:
    return FixedShipping()


@pytest.fixture
def make_product():
    return product
