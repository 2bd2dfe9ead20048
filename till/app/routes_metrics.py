# routes_metrics.py

"""Prometheus metrics and /metrics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, generate_latest

receipts_printed_total = Counter(
    "receipts_printed_total", "Total receipts handed to the spooler"
)
receipts_printed_total.inc(0)

receipt_print_failures_total = Counter(
    "receipt_print_failures_total", "Total failed receipt print requests", ["code"]
)
receipt_print_failures_total.labels(code="PRINT_FAILED").inc(0)

qr_fallback_total = Counter(
    "qr_fallback_total", "QR codes encoded with a fallback dialect", ["dialect"]
)
qr_fallback_total.labels(dialect="model2").inc(0)

router = APIRouter()


@router.get("/metrics")
def metrics() -> Response:
    """Expose Prometheus metrics."""

    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
