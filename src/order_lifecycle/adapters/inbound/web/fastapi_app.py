from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from returns.result import Success

from order_lifecycle.core.domain.model.errors import (
    OrderError,
    OrderNotFound,
    PaymentDeclined,
    PersistenceError,
    PreconditionError,
    ProductNotFound,
    PublishError,
    StateError,
    ValidationError,
)
from order_lifecycle.core.domain.model.invoice import Invoice
from order_lifecycle.core.ports.inbound.advance_order import (
    AdvanceOrderUseCase,
    AttachPaymentMethodCommand,
    OrderRef,
    SetShippingAddressCommand,
)
from order_lifecycle.core.ports.inbound.create_order import (
    CreateOrderCommand,
    CreateOrderLine,
    CreateOrderUseCase,
)
from order_lifecycle.core.ports.inbound.get_order import (
    GetOrderQuery,
    GetOrderUseCase,
    OrderView,
)

logger = logging.getLogger(__name__)

# ---- HTTP DTOs (adapter layer) ---------------------------------------------


class CreateOrderLineIn(BaseModel):
    sku: str = Field(min_length=1, examples=["BOOK-1"])
    quantity: int = Field(1, gt=0, examples=[2])


class CreateOrderRequest(BaseModel):
    account_id: str = Field(min_length=1, examples=["acc-1"])
    order_type: Literal["physical", "digital", "subscription"]
    email: str | None = None
    lines: list[CreateOrderLineIn] = Field(min_length=1)


class PaymentMethodRequest(BaseModel):
    token: str = Field(min_length=1, examples=["tok_ok"])
    kind: str = "card"


class ShippingAddressRequest(BaseModel):
    line1: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = ""
    country: str = Field(min_length=1, examples=["US"])


class OrderReceiptResponse(BaseModel):
    order_id: str
    order_type: str
    subtotal: str


class OrderLineOut(BaseModel):
    sku: str
    product_type: str
    unit_price: str
    quantity: int
    subtotal: str


class OrderResponse(BaseModel):
    order_id: str
    order_type: str
    account_id: str
    status: str | None
    status_code: int | None
    lines: list[OrderLineOut]
    fees_and_discounts: dict[str, str]
    subtotal: str
    fees_and_discounts_total: str
    grand_total: str
    has_payment_method: bool


class InvoiceLineOut(BaseModel):
    sku: str
    description: str
    quantity: int
    unit_price: str
    subtotal: str
    tax_free: bool


class InvoiceResponse(BaseModel):
    order_id: str
    order_type: str
    status: str
    account_id: str
    lines: list[InvoiceLineOut]
    fees_and_discounts: dict[str, str]
    subtotal: str
    fees_and_discounts_total: str
    grand_total: str


class ErrorResponse(BaseModel):
    type: str
    message: str
    details: list[dict[str, Any]] | None = None


def _map_error_to_http(err: OrderError) -> tuple[int, ErrorResponse]:
    body = ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, (ValidationError, ProductNotFound)):
        return 400, body

    if isinstance(err, PreconditionError):
        return 422, body

    if isinstance(err, PaymentDeclined):
        return 402, body

    if isinstance(err, OrderNotFound):
        return 404, body

    if isinstance(err, StateError):
        return 409, body

    if isinstance(err, PublishError):
        return 503, body

    if isinstance(err, PersistenceError):
        return 500, body

    return 500, body


def _order_out(view: OrderView) -> OrderResponse:
    return OrderResponse(
        order_id=str(view.order_id.value),
        order_type=view.order_type.value,
        account_id=view.account_id,
        status=view.status.value if view.status else None,
        status_code=view.status.code if view.status else None,
        lines=[
            OrderLineOut(
                sku=ln.sku,
                product_type=ln.product_type.value,
                unit_price=str(ln.unit_price),
                quantity=ln.quantity,
                subtotal=str(ln.subtotal),
            )
            for ln in view.lines
        ],
        fees_and_discounts={k: str(v) for k, v in view.fees_and_discounts.items()},
        subtotal=str(view.subtotal),
        fees_and_discounts_total=str(view.fees_and_discounts_total),
        grand_total=str(view.grand_total),
        has_payment_method=view.has_payment_method,
    )


def _invoice_out(invoice: Invoice) -> InvoiceResponse:
    return InvoiceResponse(
        order_id=str(invoice.order_id.value),
        order_type=invoice.order_type.value,
        status=invoice.status.value,
        account_id=invoice.account.account_id,
        lines=[
            InvoiceLineOut(
                sku=ln.sku,
                description=ln.description,
                quantity=ln.quantity,
                unit_price=str(ln.unit_price),
                subtotal=str(ln.subtotal),
                tax_free=ln.tax_free,
            )
            for ln in invoice.lines
        ],
        fees_and_discounts={k: str(v) for k, v in invoice.fees_and_discounts.items()},
        subtotal=str(invoice.subtotal),
        fees_and_discounts_total=str(invoice.fees_and_discounts_total),
        grand_total=str(invoice.grand_total),
    )


_TRANSITION_ERRORS = {
    400: {"model": ErrorResponse},
    402: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def create_app(
    create_order_uc: CreateOrderUseCase,
    advance_order_uc: AdvanceOrderUseCase,
    get_order_uc: GetOrderUseCase,
) -> FastAPI:
    app = FastAPI(title="order_lifecycle")

    # --- exception handlers --------------------------------------------------

    @app.exception_handler(OrderError)
    async def handle_domain_error(_: Request, exc: OrderError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        return JSONResponse(status_code=status, content=body.model_dump())

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error")
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump())

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/orders",
        response_model=OrderReceiptResponse,
        status_code=201,
        responses={
            400: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
            503: {"model": ErrorResponse},
        },
    )
    def create_order(req: CreateOrderRequest, response: Response) -> Any:
        cmd = CreateOrderCommand(
            account_id=req.account_id,
            order_type=req.order_type,
            email=req.email,
            lines=tuple(
                CreateOrderLine(sku=ln.sku, quantity=ln.quantity) for ln in req.lines
            ),
        )

        result = create_order_uc.create_order(cmd)

        if isinstance(result, Success):
            receipt = result.unwrap()
            order_id = str(receipt.order_id.value)
            response.headers["Location"] = f"/orders/{order_id}"
            return OrderReceiptResponse(
                order_id=order_id,
                order_type=receipt.order_type.value,
                subtotal=str(receipt.subtotal),
            )

        raise result.failure()

    @app.get(
        "/orders/{order_id}",
        response_model=OrderResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def get_order(order_id: str) -> Any:
        result = get_order_uc.get_order(GetOrderQuery(order_id=order_id))
        if isinstance(result, Success):
            return _order_out(result.unwrap())
        raise result.failure()

    @app.get(
        "/orders/{order_id}/invoice",
        response_model=InvoiceResponse,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
        },
    )
    def get_invoice(order_id: str) -> Any:
        result = get_order_uc.get_invoice(GetOrderQuery(order_id=order_id))
        if isinstance(result, Success):
            return _invoice_out(result.unwrap())
        raise result.failure()

    @app.put(
        "/orders/{order_id}/payment-method",
        response_model=OrderResponse,
        responses=_TRANSITION_ERRORS,
    )
    def attach_payment_method(order_id: str, req: PaymentMethodRequest) -> Any:
        result = advance_order_uc.attach_payment_method(
            AttachPaymentMethodCommand(order_id=order_id, token=req.token, kind=req.kind)
        )
        if isinstance(result, Success):
            return _order_out(result.unwrap())
        raise result.failure()

    @app.put(
        "/orders/{order_id}/shipping-address",
        response_model=OrderResponse,
        responses=_TRANSITION_ERRORS,
    )
    def set_shipping_address(order_id: str, req: ShippingAddressRequest) -> Any:
        result = advance_order_uc.set_shipping_address(
            SetShippingAddressCommand(
                order_id=order_id,
                line1=req.line1,
                city=req.city,
                postal_code=req.postal_code,
                country=req.country,
            )
        )
        if isinstance(result, Success):
            return _order_out(result.unwrap())
        raise result.failure()

    @app.post(
        "/orders/{order_id}/{step}",
        response_model=OrderResponse,
        responses=_TRANSITION_ERRORS,
    )
    def advance(
        order_id: str, step: Literal["place", "pay", "fulfill", "complete"]
    ) -> Any:
        transition = getattr(advance_order_uc, step)
        result = transition(OrderRef(order_id=order_id))
        if isinstance(result, Success):
            return _order_out(result.unwrap())
        raise result.failure()

    return app
