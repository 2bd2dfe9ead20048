#!/usr/bin/env python3
"""Print (or dump) a sample receipt to check a POS printer end to end."""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from config import get_settings
from till.app.catalog import get_products
from till.app.domain import CartLine, PaymentMethod, Sale
from till.app.main import build_session
from till.app.printing import PrintingError


def sample_sale() -> Sale:
    burger, pizza, *_ = get_products()
    lines = [CartLine.from_product(burger, 2), CartLine.from_product(pizza, 1)]
    return Sale.checkout(lines, PaymentMethod.CASH)


async def run(printer: str | None, out: Path | None) -> int:
    session = build_session(get_settings())
    sale = sample_sale()
    if out is not None:
        out.write_bytes(session.render(sale))
        print(f"wrote {out} order={sale.order_id}")
        return 0
    if printer:
        session.bind(printer)
    try:
        job = await session.print_receipt(sale)
    except PrintingError as exc:
        print(f"{exc.code}: {exc.message}", file=sys.stderr)
        return 1
    print(f"printer={job.printer} order={job.order_id} {job.spooler_output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--printer", help="CUPS destination; discovered when omitted")
    parser.add_argument("--out", type=Path, help="write the ESC/POS bytes here instead")
    args = parser.parse_args(argv)
    return asyncio.run(run(args.printer, args.out))


if __name__ == "__main__":
    sys.exit(main())
