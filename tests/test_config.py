"""Tests for order_lifecycle.config."""

from decimal import Decimal

import pytest

from order_lifecycle.bootstrap import build_usecases
from order_lifecycle.config import Settings


class TestSettings:
    def test_defaults(self):
        s = Settings.from_env({})
        assert s == Settings()
        assert s.decline_tokens == frozenset({"tok_declined"})

    def test_overrides(self):
        s = Settings.from_env(
            {
                "ORDER_LIFECYCLE_PORT": "9000",
                "ORDER_LIFECYCLE_LOG_LEVEL": "debug",
                "ORDER_LIFECYCLE_DECLINE_TOKENS": "a, b,",
                "ORDER_LIFECYCLE_SHIPPING_BASE_COST": "2.50",
            }
        )
        assert s.port == 9000
        assert s.log_level == "DEBUG"
        assert s.decline_tokens == frozenset({"a", "b"})
        assert s.shipping_base_cost == Decimal("2.50")

    def test_blank_values_fall_back(self):
        assert Settings.from_env({"ORDER_LIFECYCLE_HOST": "  "}).host == "0.0.0.0"

    def test_bad_int(self):
        with pytest.raises(ValueError, match="ORDER_LIFECYCLE_PORT"):
            Settings.from_env({"ORDER_LIFECYCLE_PORT": "eighty"})

    def test_bad_decimal(self):
        with pytest.raises(ValueError, match="PAYMENT_MAX_AMOUNT"):
            Settings.from_env({"ORDER_LIFECYCLE_PAYMENT_MAX_AMOUNT": "lots"})

    def test_settings_reach_adapters(self):
        uc = build_usecases(Settings(payment_max_amount=Decimal("5")))
        assert uc.advance_order.deps.payment.max_amount == Decimal("5")
        assert uc.create_order.deps.shipping.base_cost == Decimal("5.00")
