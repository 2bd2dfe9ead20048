"""Printer discovery and selection routes."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from .deps.session import get_printer_session
from .printing import PrinterSession
from .utils.responses import ok

router = APIRouter(prefix="/api/printers")


class SelectPrinterPayload(BaseModel):
    printer: str = Field(min_length=1)


def _selection(session: PrinterSession) -> dict:
    return ok({"printer": session.target, "state": session.state.value})


@router.get("")
async def list_printers(session: PrinterSession = Depends(get_printer_session)) -> dict:
    """Return POS printers known to the spooler.

    An empty list is a successful answer; only a failing spooler query is
    reported as an error.
    """
    printers = await session.list_printers()
    return ok({"printers": printers})


@router.get("/selected")
async def selected_printer(
    session: PrinterSession = Depends(get_printer_session),
) -> dict:
    return _selection(session)


@router.put("/selected")
async def select_printer(
    payload: SelectPrinterPayload,
    session: PrinterSession = Depends(get_printer_session),
) -> dict:
    """Bind the session to ``payload.printer`` without discovery."""
    session.bind(payload.printer)
    return _selection(session)


@router.delete("/selected")
async def clear_printer(session: PrinterSession = Depends(get_printer_session)) -> dict:
    """Unbind so the next print discovers a printer again."""
    session.clear()
    return _selection(session)
