"""Turn a :class:`~till.app.domain.Sale` into an ESC/POS byte stream."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Sequence
from zoneinfo import ZoneInfo

from ..domain import Sale, round2
from ..routes_metrics import qr_fallback_total
from . import commands as cmd
from .commands import DEFAULT_QR_DIALECTS, QrDialect
from .errors import EncodingFallbackExhausted

logger = logging.getLogger("printing")

DEFAULT_STORE_NAME = "ASG SHOP"
SEPARATOR = b"-" * cmd.CHARS_PER_LINE_FONT_A + b"\n"
FOOTER_LINES = ("Thank you for shopping!", "Please come again")


def encode_qr(payload: str, dialects: Sequence[QrDialect] = DEFAULT_QR_DIALECTS) -> bytes:
    """Return QR commands for ``payload`` from the first dialect able to frame it.

    Dialects are tried in order. Raises :class:`EncodingFallbackExhausted` when
    none of them accepts the payload.
    """

    for position, dialect in enumerate(dialects):
        encoded = dialect.encode(payload)
        if encoded is None:
            logger.warning(
                "qr dialect rejected payload",
                extra={"dialect": dialect.name, "payload_len": len(payload)},
            )
            continue
        if position:
            qr_fallback_total.labels(dialect=dialect.name).inc()
            logger.info("qr fallback dialect used", extra={"dialect": dialect.name})
        return encoded
    raise EncodingFallbackExhausted(
        f"no QR dialect could encode a {len(payload)} character payload"
    )


def _text(line: str) -> bytes:
    return f"{line}\n".encode(cmd.TEXT_ENCODING)


def _money(value: Decimal) -> str:
    return f"${round2(value)}"


def format_timestamp(ts: datetime, tz: ZoneInfo | timezone = timezone.utc) -> str:
    """Render ``ts`` as ``M/D/YYYY, h:MM:SS AM`` in ``tz``.

    Naive timestamps are taken to be UTC.
    """

    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    local = ts.astimezone(tz)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


class ReceiptFormatter:
    """Lay out the fixed 58mm receipt.

    ``format`` has no side effects; the same sale always yields the same
    bytes for a given store name and time zone.
    """

    def __init__(
        self,
        store_name: str = DEFAULT_STORE_NAME,
        tz: str = "UTC",
        dialects: Sequence[QrDialect] = DEFAULT_QR_DIALECTS,
    ) -> None:
        self.store_name = store_name
        self.tz = ZoneInfo(tz)
        self.dialects = tuple(dialects)

    def fragments(self, sale: Sale) -> List[bytes]:
        """Return the ordered command fragments for ``sale``."""

        out: List[bytes] = [cmd.INIT]

        # Header
        out += [
            cmd.ALIGN_CENTER,
            cmd.DOUBLE_ON,
            cmd.BOLD_ON,
            _text(self.store_name),
            cmd.BOLD_OFF,
            cmd.DOUBLE_OFF,
        ]

        out += [
            cmd.FONT_A,
            _text(f"Order #: {sale.order_id}"),
            _text(f"Date: {format_timestamp(sale.timestamp, self.tz)}"),
            SEPARATOR,
        ]

        out.append(cmd.ALIGN_LEFT)
        for item in sale.items:
            out.append(_text(item.name))
            out.append(
                _text(
                    f"{item.quantity} x {_money(item.price)} = {_money(item.line_total)}"
                )
            )

        out += [
            SEPARATOR,
            cmd.ALIGN_RIGHT,
            _text(f"Subtotal: {_money(sale.subtotal)}"),
            _text(f"Tax: {_money(sale.tax)}"),
            cmd.BOLD_ON,
            _text(f"TOTAL: {_money(sale.total)}"),
            cmd.BOLD_OFF,
        ]

        # QR code carries only the order id
        out += [
            cmd.ALIGN_CENTER,
            _text("\nScan to verify order:"),
            cmd.FEED_LINE,
            encode_qr(str(sale.order_id), self.dialects),
            cmd.FEED_LINE,
        ]

        out.append(cmd.FONT_B)
        out += [_text(line) for line in FOOTER_LINES]
        out += [cmd.feed_lines(3), cmd.CUT_FULL]
        return out

    def format(self, sale: Sale) -> bytes:
        return b"".join(self.fragments(sale))
