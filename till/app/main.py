# main.py

"""FastAPI application backing the till UI."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, get_settings

from .domain import OrderIds
from .middlewares import RequestLogMiddleware
from .obs.logging import configure_logging
from .printing import (
    PrinterDiscovery,
    PrinterSession,
    PrintingError,
    ReceiptFormatter,
    SpoolDispatcher,
)
from .routes_catalog import router as catalog_router
from .routes_metrics import router as metrics_router
from .routes_printers import router as printers_router
from .routes_receipts import router as receipts_router
from .utils.responses import err, ok

logger = logging.getLogger("api")


def build_session(settings: Settings) -> PrinterSession:
    """Wire discovery, formatter and dispatcher from ``settings``."""

    return PrinterSession(
        discovery=PrinterDiscovery(
            command=settings.lpstat_command,
            marker=settings.printer_marker,
            timeout=settings.spooler_timeout_secs,
        ),
        dispatcher=SpoolDispatcher(
            command=settings.lp_command,
            spool_dir=settings.spool_dir,
            timeout=settings.spooler_timeout_secs,
        ),
        formatter=ReceiptFormatter(
            store_name=settings.store_name, tz=settings.receipt_timezone
        ),
    )


def create_app(
    settings: Settings | None = None, session: PrinterSession | None = None
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(getattr(logging, settings.log_level.upper(), logging.INFO))

    app = FastAPI(title="Till")
    app.state.settings = settings
    app.state.printer_session = session or build_session(settings)
    app.state.order_ids = OrderIds()

    app.add_middleware(RequestLogMiddleware)

    @app.exception_handler(PrintingError)
    async def printing_error_handler(request: Request, exc: PrintingError):
        logger.warning(
            exc.message,
            extra={"status": exc.status_code, "route": request.url.path},
        )
        return JSONResponse(err(exc.code, exc.message), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            exc.detail,
            extra={"status": exc.status_code, "route": request.url.path},
        )
        return JSONResponse(err(exc.status_code, exc.detail), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = {"errors": jsonable_encoder(exc.errors())}
        return JSONResponse(err(422, "Invalid request", details), status_code=422)

    @app.get("/health")
    async def health() -> dict:
        return ok({"status": "ok"})

    app.include_router(catalog_router)
    app.include_router(printers_router)
    app.include_router(receipts_router)
    app.include_router(metrics_router)
    return app


app = create_app()
