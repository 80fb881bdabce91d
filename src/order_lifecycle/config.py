"""Runtime settings read from ``ORDER_LIFECYCLE_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Mapping

PREFIX = "ORDER_LIFECYCLE_"


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    payment_max_amount: Decimal = Decimal("1000000.00")
    decline_tokens: frozenset[str] = field(
        default_factory=lambda: frozenset({"tok_declined"})
    )
    shipping_base_cost: Decimal = Decimal("5.00")
    shipping_cost_per_kg: Decimal = Decimal("1.50")
    max_parcel_weight: Decimal = Decimal("30")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from the environment, falling back to defaults.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str) -> str | None:
            value = env.get(PREFIX + name)
            return value.strip() if value is not None and value.strip() else None

        tokens = get("DECLINE_TOKENS")
        return cls(
            host=get("HOST") or defaults.host,
            port=_int(get("PORT"), defaults.port, "PORT"),
            log_level=(get("LOG_LEVEL") or defaults.log_level).upper(),
            payment_max_amount=_decimal(
                get("PAYMENT_MAX_AMOUNT"), defaults.payment_max_amount, "PAYMENT_MAX_AMOUNT"
            ),
            decline_tokens=(
                frozenset(t.strip() for t in tokens.split(",") if t.strip())
                if tokens is not None
                else defaults.decline_tokens
            ),
            shipping_base_cost=_decimal(
                get("SHIPPING_BASE_COST"), defaults.shipping_base_cost, "SHIPPING_BASE_COST"
            ),
            shipping_cost_per_kg=_decimal(
                get("SHIPPING_COST_PER_KG"),
                defaults.shipping_cost_per_kg,
                "SHIPPING_COST_PER_KG",
            ),
            max_parcel_weight=_decimal(
                get("MAX_PARCEL_WEIGHT"), defaults.max_parcel_weight, "MAX_PARCEL_WEIGHT"
            ),
        )


def _int(raw: str | None, default: int, name: str) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{PREFIX}{name} must be an integer, got {raw!r}") from None


def _decimal(raw: str | None, default: Decimal, name: str) -> Decimal:
    if raw is None:
        return default
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{PREFIX}{name} must be a decimal, got {raw!r}") from None
