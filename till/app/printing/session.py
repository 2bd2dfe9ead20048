"""Printer selection and the format-then-dispatch flow for receipts."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..domain import Sale
from ..routes_metrics import receipt_print_failures_total, receipts_printed_total
from .discovery import PrinterDiscovery
from .errors import NoPrinterFoundError, PrintingError
from .receipt import ReceiptFormatter
from .spool import SpoolDispatcher

logger = logging.getLogger("printing")


class SessionState(str, Enum):
    UNBOUND = "unbound"
    BOUND = "bound"


class PrintJob(BaseModel):
    """Outcome of a successful print request."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    order_id: int
    printer: str
    spooler_output: str


class PrinterSession:
    """Own the selected printer for the lifetime of the application.

    The session starts unbound. The first :meth:`print_receipt` (or an
    explicit :meth:`init`) discovers printers and binds to the first POS
    candidate. A bound target is kept until :meth:`clear`; a printer that went
    away is only noticed when a dispatch fails.
    """

    def __init__(
        self,
        discovery: PrinterDiscovery,
        dispatcher: SpoolDispatcher,
        formatter: ReceiptFormatter,
    ) -> None:
        self.discovery = discovery
        self.dispatcher = dispatcher
        self.formatter = formatter
        self._target: str | None = None
        self._bind_lock = asyncio.Lock()
        self._dispatch_lock = asyncio.Lock()

    @property
    def target(self) -> str | None:
        return self._target

    @property
    def state(self) -> SessionState:
        return SessionState.BOUND if self._target else SessionState.UNBOUND

    def bind(self, target: str) -> None:
        """Select ``target`` without running discovery."""

        if not target:
            raise ValueError("printer name must not be empty")
        self._target = target
        logger.info("printer selected", extra={"printer": target})

    def clear(self) -> None:
        """Forget the selected printer; the next print re-discovers."""

        self._target = None

    async def list_printers(self) -> List[str]:
        return await self.discovery.list_candidates()

    async def init(self) -> str:
        """Discover printers and bind to the first candidate.

        Raises :class:`NoPrinterFoundError` when the spooler lists no POS
        printer; discovery failures propagate unchanged.
        """

        async with self._bind_lock:
            if self._target:
                return self._target
            printers = await self.discovery.list_candidates()
            if not printers:
                raise NoPrinterFoundError("No POS printer found")
            self.bind(printers[0])
            return printers[0]

    def render(self, sale: Sale) -> bytes:
        return self.formatter.format(sale)

    async def print_receipt(self, sale: Sale) -> PrintJob:
        """Print ``sale`` on the bound printer, binding first if needed."""

        try:
            target = self._target or await self.init()
            # Fully formatted before any I/O so a failure never leaves a
            # partial receipt on the printer.
            data = self.render(sale)
            async with self._dispatch_lock:
                reply = await self.dispatcher.send(target, data)
        except PrintingError as exc:
            receipt_print_failures_total.labels(code=exc.code).inc()
            logger.error(
                "receipt printing failed",
                extra={"order_id": sale.order_id, "printer": self._target},
            )
            raise
        receipts_printed_total.inc()
        logger.info(
            "receipt printed", extra={"order_id": sale.order_id, "printer": target}
        )
        return PrintJob(order_id=sale.order_id, printer=target, spooler_output=reply)
