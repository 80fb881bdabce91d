from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from order_lifecycle.adapters.outbound.dummy_payment import DummyPaymentGateway
from order_lifecycle.adapters.outbound.in_memory_catalog import InMemoryCatalog
from order_lifecycle.adapters.outbound.in_memory_orders import InMemoryOrderRepository
from order_lifecycle.adapters.outbound.stdout_events import StdoutEventPublisher
from order_lifecycle.config import Settings
from order_lifecycle.core.domain.model.catalog import Product, ProductType
from order_lifecycle.core.domain.model.parcel import WeightBasedShipping
from order_lifecycle.core.domain.service.advance_order_service import (
    AdvanceOrderDeps,
    AdvanceOrderService,
)
from order_lifecycle.core.domain.service.create_order_service import (
    CreateOrderDeps,
    CreateOrderService,
)
from order_lifecycle.core.domain.service.get_order_service import (
    GetOrderDeps,
    GetOrderService,
)

DEMO_PRODUCTS = (
    Product("BOOK-1", "Hardcover book", ProductType.PHYSICAL, Decimal("19.99"), Decimal("0.8")),
    Product("BREAD-1", "Sourdough loaf", ProductType.PHYSICAL_TAX_FREE, Decimal("5.00"), Decimal("0.5")),
    Product("EBOOK-1", "E-book", ProductType.DIGITAL, Decimal("29.99")),
    Product("PLAN-MONTHLY", "Monthly membership", ProductType.SUBSCRIPTION, Decimal("9.99")),
)


@dataclass(frozen=True)
class UseCases:
    create_order: CreateOrderService
    advance_order: AdvanceOrderService
    get_order: GetOrderService


def build_usecases(settings: Settings | None = None) -> UseCases:
    settings = settings or Settings()
    catalog = InMemoryCatalog.of(DEMO_PRODUCTS)
    orders = InMemoryOrderRepository()
    payment = DummyPaymentGateway(
        decline_tokens=set(settings.decline_tokens),
        max_amount=settings.payment_max_amount,
    )
    events = StdoutEventPublisher()
    shipping = WeightBasedShipping(
        max_parcel_weight=settings.max_parcel_weight,
        base_cost=settings.shipping_base_cost,
        cost_per_kg=settings.shipping_cost_per_kg,
    )

    create_order = CreateOrderService(
        CreateOrderDeps(catalog=catalog, orders=orders, events=events, shipping=shipping)
    )
    advance_order = AdvanceOrderService(
        AdvanceOrderDeps(orders=orders, payment=payment, events=events)
    )
    get_order = GetOrderService(GetOrderDeps(orders=orders))

    return UseCases(
        create_order=create_order, advance_order=advance_order, get_order=get_order
    )
