from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable

from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.catalog import Product
from order_lifecycle.core.domain.model.errors import OrderError, ProductNotFound
from order_lifecycle.core.ports.outbound.catalog import ProductCatalog


@dataclass
class InMemoryCatalog(ProductCatalog):
    products_by_sku: Dict[str, Product] = field(default_factory=dict)

    @classmethod
    def of(cls, products: Iterable[Product]) -> "InMemoryCatalog":
        return cls({p.sku: p for p in products})

    def find(self, sku: str) -> Result[Product, OrderError]:
        product = self.products_by_sku.get(sku)
        if product is None:
            return Failure(ProductNotFound(message="unknown sku", sku=sku))
        return Success(product)
