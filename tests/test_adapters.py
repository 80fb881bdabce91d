"""Tests for the outbound adapters."""

from decimal import Decimal

from returns.result import Failure, Success

from order_lifecycle.adapters.outbound.dummy_payment import DummyPaymentGateway
from order_lifecycle.adapters.outbound.in_memory_catalog import InMemoryCatalog
from order_lifecycle.adapters.outbound.in_memory_orders import InMemoryOrderRepository
from order_lifecycle.adapters.outbound.stdout_events import StdoutEventPublisher
from order_lifecycle.core.domain.model.catalog import PaymentMethod
from order_lifecycle.core.domain.model.errors import OrderNotFound, PaymentDeclined, PublishError
from order_lifecycle.core.domain.model.order import DigitalOrder, OrderId
from order_lifecycle.core.domain.model.status import OrderStatus, OrderType
from order_lifecycle.core.ports.outbound.events import OrderCreated, OrderStatusChanged
from order_lifecycle.core.ports.outbound.payment import ChargeRequest


class TestInMemoryOrderRepository:
    def test_save_and_get(self, ebook, account):
        repo = InMemoryOrderRepository()
        order = DigitalOrder([ebook], account)
        assert repo.save(order) == Success(order.order_id)
        assert repo.get(order.order_id).unwrap() is order

    def test_save_replaces(self, ebook, account):
        repo = InMemoryOrderRepository()
        order = DigitalOrder([ebook], account)
        repo.save(order)
        assert isinstance(repo.save(order), Success)

    def test_missing(self):
        result = InMemoryOrderRepository().get(OrderId.new())
        assert isinstance(result.failure(), OrderNotFound)


class TestInMemoryCatalog:
    def test_find(self, ebook):
        catalog = InMemoryCatalog.of([ebook.product])
        assert catalog.find("EBOOK-1").unwrap() == ebook.product
        assert isinstance(catalog.find("X"), Failure)


class TestDummyPaymentGateway:
    def _req(self, account, token, amount):
        return ChargeRequest(account, Decimal(amount), PaymentMethod(token))

    def test_ok(self, account):
        assert DummyPaymentGateway().charge(self._req(account, "tok", "10")) == Success(None)

    def test_declined_token(self, account):
        gw = DummyPaymentGateway(decline_tokens={"bad"})
        err = gw.charge(self._req(account, "bad", "10")).failure()
        assert isinstance(err, PaymentDeclined)
        assert err.reason == "token_blacklisted"

    def test_limit(self, account):
        gw = DummyPaymentGateway(max_amount=Decimal("5"))
        assert gw.charge(self._req(account, "tok", "5.01")).failure().reason == "limit_exceeded"


class TestStdoutEventPublisher:
    def test_prints_event_name(self, capsys):
        oid = OrderId.new()
        StdoutEventPublisher().publish(OrderStatusChanged(oid, OrderStatus.SHIPPED))
        assert capsys.readouterr().out.strip() == f"[event] order_fulfilled: {oid.value}"

    def test_creation_has_its_own_event(self, capsys):
        oid = OrderId.new()
        StdoutEventPublisher().publish(OrderCreated(oid, OrderType.PHYSICAL))
        assert capsys.readouterr().out.strip() == f"[event] order_created: {oid.value}"

    def test_placed_status_is_not_reported_as_creation(self):
        event = OrderStatusChanged(OrderId.new(), OrderStatus.PENDING)
        assert event.name == "order_placed"

    def test_fail(self):
        event = OrderCreated(OrderId.new(), OrderType.DIGITAL)
        result = StdoutEventPublisher(fail=True).publish(event)
        assert isinstance(result.failure(), PublishError)
