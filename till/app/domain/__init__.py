"""Domain models and helpers."""

from .sale import (
    TAX_RATE,
    CartLine,
    OrderIds,
    PaymentMethod,
    Product,
    Sale,
    compute_totals,
    round2,
)

__all__ = [
    "TAX_RATE",
    "CartLine",
    "OrderIds",
    "PaymentMethod",
    "Product",
    "Sale",
    "compute_totals",
    "round2",
]
