"""Checkout and receipt printing routes."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .catalog import get_product
from .deps.session import get_order_ids, get_printer_session
from .domain import CartLine, OrderIds, PaymentMethod, Sale
from .printing import PrinterSession
from .utils.responses import ok

logger = logging.getLogger("api")

router = APIRouter(prefix="/api")


class CheckoutItem(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: int = Field(
        validation_alias=AliasChoices("productId", "product_id", "id")
    )
    quantity: int = Field(ge=1)


class CheckoutPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[CheckoutItem] = []
    payment_method: PaymentMethod


@router.post("/receipts/print")
async def print_receipt(
    sale: Sale, session: PrinterSession = Depends(get_printer_session)
) -> dict:
    """Print a receipt for a sale the UI already totalled."""
    job = await session.print_receipt(sale)
    return ok(job)


@router.post("/receipts/render")
async def render_receipt(
    sale: Sale, session: PrinterSession = Depends(get_printer_session)
) -> Response:
    """Return the ESC/POS bytes for ``sale`` without printing."""
    data = session.render(sale)
    return Response(content=data, media_type="application/octet-stream")


@router.post("/checkout")
async def checkout(
    payload: CheckoutPayload,
    session: PrinterSession = Depends(get_printer_session),
    order_ids: OrderIds = Depends(get_order_ids),
) -> dict:
    """Price the cart from the catalog, create the sale and print it."""
    if not payload.items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    lines = []
    for item in payload.items:
        product = get_product(item.product_id)
        if product is None:
            raise HTTPException(
                status_code=400, detail=f"Unknown product {item.product_id}"
            )
        lines.append(CartLine.from_product(product, item.quantity))

    sale = Sale.checkout(lines, payload.payment_method, order_ids=order_ids)
    logger.info("sale created", extra={"order_id": sale.order_id})
    job = await session.print_receipt(sale)
    return ok({"sale": sale, "job": job})
