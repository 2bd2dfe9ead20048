"""Failures raised by the receipt printing pipeline."""

from __future__ import annotations


class PrintingError(Exception):
    """Base class carrying an envelope code and HTTP status."""

    code = "PRINTING_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DiscoveryError(PrintingError):
    """The spooler query failed or the spooler could not be reached."""

    code = "DISCOVERY_FAILED"
    status_code = 503


class NoPrinterFoundError(PrintingError):
    """The spooler answered but no device matched the POS marker."""

    code = "NO_PRINTER"
    status_code = 503


class PrintDispatchError(PrintingError):
    """The raw print command failed."""

    code = "PRINT_FAILED"
    status_code = 502


class EncodingFallbackExhausted(PrintingError):
    """No QR dialect could frame the payload."""

    code = "QR_ENCODING_FAILED"
    status_code = 500
