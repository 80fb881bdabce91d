from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Sequence

from order_lifecycle.core.domain.model.catalog import Address, Item
from order_lifecycle.core.domain.model.money import fold_money, round_money


@dataclass(frozen=True)
class Parcel:
    destination: Address
    items: tuple[Item, ...]

    def weight(self) -> Decimal:
        return sum((it.weight() for it in self.items), Decimal(0))


class ShippingCalculator(Protocol):
    def breakdown(self, items: Sequence[Item], address: Address) -> list[Parcel]: ...

    def shipping_cost_of(self, parcels: Sequence[Parcel]) -> Decimal: ...


@dataclass(frozen=True)
class WeightBasedShipping(ShippingCalculator):
    """Greedy packing by weight; an item line is never split across parcels."""

    max_parcel_weight: Decimal = Decimal("30")
    base_cost: Decimal = Decimal("5.00")
    cost_per_kg: Decimal = Decimal("1.50")

    def breakdown(self, items: Sequence[Item], address: Address) -> list[Parcel]:
        parcels: list[Parcel] = []
        current: list[Item] = []
        weight = Decimal(0)
        for it in items:
            w = it.weight()
            if current and weight + w > self.max_parcel_weight:
                parcels.append(Parcel(address, tuple(current)))
                current, weight = [], Decimal(0)
            current.append(it)
            weight += w
        if current:
            parcels.append(Parcel(address, tuple(current)))
        return parcels

    def shipping_cost_of(self, parcels: Sequence[Parcel]) -> Decimal:
        if not parcels:
            return round_money(0)
        return fold_money(self.base_cost + self.cost_per_kg * p.weight() for p in parcels)
