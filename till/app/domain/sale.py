"""Catalog products, cart lines and completed sales."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Annotated, Iterable, Sequence

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

TAX_RATE = Decimal("0.10")
CENT = Decimal("0.01")
_TOTAL_FIELDS = ("subtotal", "tax", "total")

# Amounts stay Decimal internally and go out as JSON numbers for the till UI.
Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


def round2(value: Decimal | int | str) -> Decimal:
    """Return ``value`` rounded half-up to whole cents."""

    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class PaymentMethod(str, Enum):
    """Tender used to settle a sale."""

    CASH = "cash"
    CARD = "card"
    MOBILE = "mobile"


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class Product(_Frozen):
    """Catalog entry shown on the product grid."""

    id: int
    name: str
    price: Money = Field(ge=0)
    category: str


class CartLine(_Frozen):
    """One product in the cart with the quantity being bought."""

    product_id: int = Field(
        validation_alias=AliasChoices("productId", "product_id", "id")
    )
    name: str
    price: Money = Field(ge=0)
    quantity: int = Field(ge=1)

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartLine":
        return cls(
            product_id=product.id,
            name=product.name,
            price=product.price,
            quantity=quantity,
        )

    @property
    def line_total(self) -> Decimal:
        return round2(self.price * self.quantity)


def compute_totals(lines: Iterable[CartLine]) -> tuple[Decimal, Decimal, Decimal]:
    """Return ``(subtotal, tax, total)`` for ``lines``.

    ``subtotal`` is the sum of the line totals, ``tax`` is ``subtotal`` times
    :data:`TAX_RATE` rounded to cents and ``total`` is their sum.
    """

    subtotal = round2(sum((line.line_total for line in lines), Decimal("0")))
    tax = round2(subtotal * TAX_RATE)
    return subtotal, tax, subtotal + tax


class OrderIds:
    """Issue order ids from the wall clock in milliseconds.

    Two sales created within the same millisecond still get distinct,
    increasing ids.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def issue(self, now: datetime | None = None) -> int:
        now = now or datetime.now(timezone.utc)
        stamp = int(now.timestamp() * 1000)
        with self._lock:
            self._last = max(stamp, self._last + 1)
            return self._last


class Sale(_Frozen):
    """A completed checkout, ready to be printed."""

    order_id: int = Field(ge=0)
    items: tuple[CartLine, ...] = ()
    subtotal: Money
    tax: Money
    total: Money
    payment_method: PaymentMethod = PaymentMethod.CASH
    timestamp: datetime

    @field_validator("subtotal", "tax", "total")
    @classmethod
    def _reconcile(cls, value: Decimal, info: ValidationInfo) -> Decimal:
        # Clients send unrounded float totals; anything within a cent of the
        # item totals is replaced by the exact figure.
        items = info.data.get("items")
        if items is None:
            return round2(value)
        expected = dict(zip(_TOTAL_FIELDS, compute_totals(items)))[info.field_name]
        if abs(value - expected) > CENT:
            raise ValueError(
                f"{info.field_name} {value} does not match items ({expected})"
            )
        return expected

    @classmethod
    def checkout(
        cls,
        lines: Sequence[CartLine],
        payment_method: PaymentMethod,
        now: datetime | None = None,
        order_ids: OrderIds | None = None,
    ) -> "Sale":
        """Build a sale for ``lines``, computing totals and the order id."""

        now = now or datetime.now(timezone.utc)
        if order_ids is not None:
            order_id = order_ids.issue(now)
        else:
            order_id = int(now.timestamp() * 1000)
        subtotal, tax, total = compute_totals(lines)
        return cls(
            order_id=order_id,
            items=tuple(lines),
            subtotal=subtotal,
            tax=tax,
            total=total,
            payment_method=payment_method,
            timestamp=now,
        )
