from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.errors import OrderError, PaymentDeclined
from order_lifecycle.core.ports.outbound.payment import ChargeRequest, PaymentGateway

logger = logging.getLogger(__name__)


@dataclass
class DummyPaymentGateway(PaymentGateway):
    decline_tokens: set[str] | None = None
    max_amount: Decimal = Decimal("1000000.00")

    def charge(self, request: ChargeRequest) -> Result[None, OrderError]:
        decline = self.decline_tokens or set()
        if request.method.token in decline:
            logger.warning("declined token for account %s", request.account.account_id)
            return Failure(
                PaymentDeclined(message="token declined", reason="token_blacklisted")
            )
        if request.amount > self.max_amount:
            return Failure(
                PaymentDeclined(message="amount too large", reason="limit_exceeded")
            )
        return Success(None)
