"""Tests for the CLI adapter."""

import json

from order_lifecycle.adapters.inbound.cli import run_cli
from order_lifecycle.bootstrap import build_usecases


def _run(payload):
    return run_cli(build_usecases(), json.dumps(payload))


class TestRunCli:
    def test_full_subscription_lifecycle(self, capsys):
        code = _run(
            {
                "account_id": "acc-1",
                "order_type": "subscription",
                "payment_token": "tok_ok",
                "lines": [{"sku": "PLAN-MONTHLY"}],
            }
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "'status': 'activated'" in out
        assert "[invoice]" in out

    def test_stop_after_place_has_no_invoice(self, capsys):
        code = _run(
            {
                "account_id": "acc-1",
                "order_type": "digital",
                "payment_token": "tok_ok",
                "lines": [{"sku": "EBOOK-1"}],
                "until": "place",
            }
        )
        out = capsys.readouterr().out
        assert code == 0
        assert "'status': 'pending'" in out
        assert "'grand_total': '19.99'" in out
        assert "[invoice]" not in out

    def test_physical_with_address(self, capsys):
        code = _run(
            {
                "account_id": "acc-1",
                "order_type": "physical",
                "payment_token": "tok_ok",
                "shipping_address": {"line1": "1 Main St", "city": "Springfield", "country": "US"},
                "lines": [{"sku": "BOOK-1", "quantity": 2}],
            }
        )
        assert code == 0
        assert "'status': 'delivered'" in capsys.readouterr().out

    def test_missing_payment_method(self, capsys):
        code = _run({"account_id": "acc-1", "order_type": "digital", "lines": [{"sku": "EBOOK-1"}]})
        assert code == 1
        assert "[ng] A Payment method" in capsys.readouterr().out

    def test_domain_failure_at_creation(self, capsys):
        code = _run({"account_id": "acc-1", "order_type": "physical", "lines": [{"sku": "EBOOK-1"}]})
        assert code == 1
        assert "[ng]" in capsys.readouterr().out

    def test_invalid_json(self, capsys):
        assert run_cli(build_usecases(), "{not json") == 2
        assert "invalid_input" in capsys.readouterr().out

    def test_invalid_until(self, capsys):
        code = _run({"account_id": "a", "order_type": "digital", "lines": [], "until": "ship"})
        assert code == 2

    def test_address_missing_fields(self, capsys):
        code = _run(
            {
                "account_id": "a",
                "order_type": "physical",
                "lines": [{"sku": "BOOK-1"}],
                "shipping_address": {"city": "Springfield"},
            }
        )
        assert code == 2
