from __future__ import annotations

from typing import Protocol

from returns.result import Result

from order_lifecycle.core.domain.model.catalog import Product
from order_lifecycle.core.domain.model.errors import OrderError


class ProductCatalog(Protocol):
    def find(self, sku: str) -> Result[Product, OrderError]: ...
