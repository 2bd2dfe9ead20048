"""ESC/POS receipt rendering and CUPS dispatch."""

from .discovery import PrinterDiscovery, parse_candidates
from .errors import (
    DiscoveryError,
    EncodingFallbackExhausted,
    NoPrinterFoundError,
    PrintDispatchError,
    PrintingError,
)
from .receipt import ReceiptFormatter, encode_qr
from .session import PrinterSession, PrintJob, SessionState
from .spool import SpoolDispatcher

__all__ = [
    "DiscoveryError",
    "EncodingFallbackExhausted",
    "NoPrinterFoundError",
    "PrintDispatchError",
    "PrintJob",
    "PrinterDiscovery",
    "PrinterSession",
    "PrintingError",
    "ReceiptFormatter",
    "SessionState",
    "SpoolDispatcher",
    "encode_qr",
    "parse_candidates",
]
