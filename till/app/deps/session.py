"""Dependency helpers for objects owned by the running app."""

from fastapi import Request

from ..domain import OrderIds
from ..printing import PrinterSession


def get_printer_session(request: Request) -> PrinterSession:
    """Return the printer session created by the app factory."""
    return request.app.state.printer_session


def get_order_ids(request: Request) -> OrderIds:
    return request.app.state.order_ids
