from __future__ import annotations

from dataclasses import dataclass

from returns.result import Failure, Result, Success

from order_lifecycle.core.domain.model.errors import OrderError, PublishError
from order_lifecycle.core.ports.outbound.events import (
    EventPublisher,
    OrderEvent,
)


@dataclass
class StdoutEventPublisher(EventPublisher):
    fail: bool = False

    def publish(self, event: OrderEvent) -> Result[None, OrderError]:
        if self.fail:
            return Failure(PublishError(message="publisher is down"))
        print(f"[event] {event.name}: {event.order_id.value}")
        return Success(None)
