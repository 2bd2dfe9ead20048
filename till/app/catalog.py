# catalog.py

"""Static product catalog served to the till UI."""

from __future__ import annotations

from decimal import Decimal

from .domain import Product

PRODUCTS: tuple[Product, ...] = (
    Product(id=1, name="Burger", price=Decimal("5.99"), category="Food"),
    Product(id=2, name="Pizza", price=Decimal("8.99"), category="Food"),
    Product(id=3, name="Fries", price=Decimal("2.99"), category="Sides"),
    Product(id=4, name="Coke", price=Decimal("1.99"), category="Drinks"),
    Product(id=5, name="Coffee", price=Decimal("2.49"), category="Drinks"),
    Product(id=6, name="Sandwich", price=Decimal("4.99"), category="Food"),
    Product(id=7, name="Salad", price=Decimal("6.99"), category="Food"),
    Product(id=8, name="Ice Cream", price=Decimal("3.99"), category="Desserts"),
    Product(id=9, name="Water", price=Decimal("0.99"), category="Drinks"),
    Product(id=10, name="Cake", price=Decimal("4.99"), category="Desserts"),
)

_BY_ID = {product.id: product for product in PRODUCTS}


def get_products() -> tuple[Product, ...]:
    """Return the full catalog in display order."""

    return PRODUCTS


def get_product(product_id: int) -> Product | None:
    return _BY_ID.get(product_id)


def categories() -> list[str]:
    """Return ``"All"`` followed by each distinct category in catalog order."""

    seen = dict.fromkeys(product.category for product in PRODUCTS)
    return ["All", *seen]
