"""Tests for the FastAPI adapter."""

import pytest
from fastapi.testclient import TestClient

from order_lifecycle.adapters.inbound.web.fastapi_app import create_app
from order_lifecycle.bootstrap import build_usecases

ADDRESS = {"line1": "1 Main St", "city": "Springfield", "postal_code": "12345", "country": "US"}


@pytest.fixture
def client():
    uc = build_usecases()
    return TestClient(create_app(uc.create_order, uc.advance_order, uc.get_order))


def _create(client, order_type, *lines):
    resp = client.post(
        "/orders",
        json={"account_id": "acc-1", "order_type": order_type, "lines": list(lines)},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["order_id"]


class TestHttp:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_digital_flow(self, client):
        oid = _create(client, "digital", {"sku": "EBOOK-1"})
        resp = client.put(f"/orders/{oid}/payment-method", json={"token": "tok_ok"})
        assert resp.json()["has_payment_method"] is True

        placed = client.post(f"/orders/{oid}/place").json()
        assert placed["status"] == "pending"
        assert placed["status_code"] == 100
        assert placed["fees_and_discounts"] == {"Voucher": "-10.00"}
        assert placed["grand_total"] == "19.99"

        assert client.post(f"/orders/{oid}/pay").json()["status"] == "unsent"
        invoice = client.get(f"/orders/{oid}/invoice").json()
        assert invoice["grand_total"] == "19.99"
        assert invoice["lines"][0]["sku"] == "EBOOK-1"

        assert client.post(f"/orders/{oid}/fulfill").json()["status"] == "sent"
        assert client.post(f"/orders/{oid}/complete").json()["status"] == "redeemed"

    def test_physical_flow(self, client):
        oid = _create(client, "physical", {"sku": "BOOK-1"}, {"sku": "BREAD-1"})
        client.put(f"/orders/{oid}/payment-method", json={"token": "tok_ok"})
        client.put(f"/orders/{oid}/shipping-address", json=ADDRESS)
        placed = client.post(f"/orders/{oid}/place").json()
        # 5.00 base + 1.3 kg * 1.50
        assert placed["fees_and_discounts"] == {"shippingAndHandling": "6.95"}
        assert placed["subtotal"] == "24.99"
        assert placed["grand_total"] == "31.94"

    def test_location_header(self, client):
        resp = client.post(
            "/orders",
            json={"account_id": "a", "order_type": "digital", "lines": [{"sku": "EBOOK-1"}]},
        )
        assert resp.headers["Location"] == f"/orders/{resp.json()['order_id']}"

    def test_state_error_is_409(self, client):
        oid = _create(client, "digital", {"sku": "EBOOK-1"})
        resp = client.post(f"/orders/{oid}/pay")
        assert resp.status_code == 409
        assert resp.json()["type"] == "StateError"

    def test_invoice_before_payment_is_409(self, client):
        oid = _create(client, "digital", {"sku": "EBOOK-1"})
        assert client.get(f"/orders/{oid}/invoice").status_code == 409

    def test_precondition_error_is_422(self, client):
        oid = _create(client, "physical", {"sku": "BOOK-1"})
        resp = client.post(f"/orders/{oid}/place")
        assert resp.status_code == 422
        assert resp.json()["type"] == "PreconditionError"

    def test_composition_error_is_422(self, client):
        resp = client.post(
            "/orders",
            json={"account_id": "a", "order_type": "physical", "lines": [{"sku": "EBOOK-1"}]},
        )
        assert resp.status_code == 422

    def test_declined_payment_is_402(self, client):
        oid = _create(client, "digital", {"sku": "EBOOK-1"})
        client.put(f"/orders/{oid}/payment-method", json={"token": "tok_declined"})
        client.post(f"/orders/{oid}/place")
        assert client.post(f"/orders/{oid}/pay").status_code == 402

    def test_unknown_order_is_404(self, client):
        resp = client.get("/orders/00000000-0000-0000-0000-000000000000")
        assert resp.status_code == 404

    def test_bad_uuid_is_400(self, client):
        assert client.get("/orders/not-a-uuid").status_code == 400

    def test_unknown_sku_is_400(self, client):
        resp = client.post(
            "/orders",
            json={"account_id": "a", "order_type": "digital", "lines": [{"sku": "NOPE"}]},
        )
        assert resp.status_code == 400
        assert resp.json()["type"] == "ProductNotFound"

    def test_request_validation_is_400(self, client):
        resp = client.post("/orders", json={"account_id": "a", "order_type": "gift", "lines": []})
        assert resp.status_code == 400
        assert resp.json()["type"] == "RequestValidationError"

    def test_unknown_step_is_400(self, client):
        oid = _create(client, "digital", {"sku": "EBOOK-1"})
        assert client.post(f"/orders/{oid}/cancel").status_code == 400
