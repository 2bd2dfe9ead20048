"""Product catalog routes used to build the product grid."""
from __future__ import annotations

from fastapi import APIRouter

from .catalog import categories, get_products
from .utils.responses import ok

router = APIRouter(prefix="/api")


@router.get("/products")
async def list_products() -> dict:
    """Return every catalog product."""
    return ok(list(get_products()))


@router.get("/categories")
async def list_categories() -> dict:
    """Return category tabs, ``All`` first."""
    return ok(categories())
