from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from returns.result import Result

from order_lifecycle.core.domain.model.catalog import Account, PaymentMethod
from order_lifecycle.core.domain.model.errors import OrderError


@dataclass(frozen=True)
class ChargeRequest:
    account: Account
    amount: Decimal
    method: PaymentMethod


class PaymentGateway(Protocol):
    def charge(self, request: ChargeRequest) -> Result[None, OrderError]: ...
