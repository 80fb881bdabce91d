from __future__ import annotations

import json
from typing import Any

from returns.result import Failure, Result, Success

from order_lifecycle.bootstrap import UseCases
from order_lifecycle.core.domain.model.errors import OrderError
from order_lifecycle.core.domain.model.invoice import Invoice
from order_lifecycle.core.ports.inbound.advance_order import (
    AttachPaymentMethodCommand,
    OrderRef,
    SetShippingAddressCommand,
)
from order_lifecycle.core.ports.inbound.create_order import (
    CreateOrderCommand,
    CreateOrderLine,
)
from order_lifecycle.core.ports.inbound.get_order import GetOrderQuery, OrderView

STEPS = ("place", "pay", "fulfill", "complete")


def run_cli(usecases: UseCases, raw: str) -> int:
    """
    raw: JSON string.
    Example:
      {"account_id":"acc-1","order_type":"physical","payment_token":"tok_ok",
       "shipping_address":{"line1":"1 Main St","city":"Springfield",
                           "postal_code":"12345","country":"US"},
       "lines":[{"sku":"BOOK-1","quantity":1}],"until":"complete"}
    """
    try:
        payload = json.loads(raw)
        cmd = _parse_command(payload)
        address = _parse_address(payload.get("shipping_address"))
        token = payload.get("payment_token")
        until = str(payload.get("until", "complete"))
        if until not in STEPS:
            raise ValueError(f"until must be one of: {', '.join(STEPS)}")
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        print(f"invalid_input: {e}")
        return 2

    created = usecases.create_order.create_order(cmd)
    if isinstance(created, Failure):
        print("[ng]", str(created.failure()))
        return 1
    order_id = str(created.unwrap().order_id.value)

    result = _prepare(usecases, order_id, token, address)
    advance = usecases.advance_order
    for step in STEPS[: STEPS.index(until) + 1]:
        result = result.bind(lambda _, s=step: getattr(advance, s)(OrderRef(order_id)))

    if isinstance(result, Failure):
        print("[ng]", str(result.failure()))
        return 1

    print("[ok]", _order_out(result.unwrap()))
    invoice = usecases.get_order.get_invoice(GetOrderQuery(order_id))
    if isinstance(invoice, Success):
        print("[invoice]", _invoice_out(invoice.unwrap()))
    return 0


def _prepare(
    usecases: UseCases,
    order_id: str,
    token: Any,
    address: dict[str, str] | None,
) -> Result[OrderView, OrderError]:
    advance = usecases.advance_order
    result = usecases.get_order.get_order(GetOrderQuery(order_id))
    if token is not None:
        result = result.bind(
            lambda _: advance.attach_payment_method(
                AttachPaymentMethodCommand(order_id=order_id, token=str(token))
            )
        )
    if address is not None:
        result = result.bind(
            lambda _: advance.set_shipping_address(
                SetShippingAddressCommand(order_id=order_id, **address)
            )
        )
    return result


def _parse_address(raw: dict[str, Any] | None) -> dict[str, str] | None:
    if raw is None:
        return None
    return {
        "line1": str(raw["line1"]),
        "city": str(raw["city"]),
        "postal_code": str(raw.get("postal_code", "")),
        "country": str(raw["country"]),
    }


def _parse_command(payload: dict[str, Any]) -> CreateOrderCommand:
    lines = [
        CreateOrderLine(sku=str(x["sku"]), quantity=int(x.get("quantity", 1)))
        for x in payload.get("lines", [])
    ]
    return CreateOrderCommand(
        account_id=str(payload.get("account_id", "")),
        order_type=str(payload.get("order_type", "")).lower(),
        lines=lines,
        email=payload.get("email"),
    )


def _order_out(view: OrderView) -> dict[str, Any]:
    return {
        "order_id": str(view.order_id.value),
        "type": view.order_type.value,
        "status": view.status.value if view.status else None,
        "subtotal": str(view.subtotal),
        "fees_and_discounts": {k: str(v) for k, v in view.fees_and_discounts.items()},
        "grand_total": str(view.grand_total),
    }


def _invoice_out(invoice: Invoice) -> dict[str, Any]:
    return {
        "account_id": invoice.account.account_id,
        "lines": [
            {
                "sku": ln.sku,
                "quantity": ln.quantity,
                "subtotal": str(ln.subtotal),
                "tax_free": ln.tax_free,
            }
            for ln in invoice.lines
        ],
        "grand_total": str(invoice.grand_total),
    }
