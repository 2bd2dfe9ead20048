import json
import logging
import os
import random
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..utils.responses import err

# Read by the log filter and the error envelope
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

# Successful catalog polls are noisy; print requests are always logged
LOG_SAMPLE_2XX = float(os.getenv("LOG_SAMPLE_2XX", "0.1"))
ALWAYS_LOG_PREFIXES = ("/api/receipts", "/api/checkout", "/api/printers")

logger = logging.getLogger("api")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Assign a request id and emit one structured line per request."""

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(req_id)
        request.state.request_id = req_id

        start = time.perf_counter()
        error_id = None
        try:
            try:
                response = await call_next(request)
            except Exception:
                error_id = str(uuid.uuid4())
                logger.exception(json.dumps({"req_id": req_id, "error_id": error_id}))
                payload = err(500, "Internal Server Error")
                payload["error_id"] = error_id
                response = JSONResponse(payload, status_code=500)
        finally:
            request_id_ctx.reset(token)

        dur_ms = int((time.perf_counter() - start) * 1000)
        status = response.status_code
        entry = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": "ERROR" if status >= 500 else "INFO",
            "req_id": req_id,
            "method": request.method,
            "route": request.url.path,
            "status": status,
            "latency_ms": dur_ms,
        }
        if error_id:
            entry["error_id"] = error_id

        should_log = True
        if 200 <= status < 300 and not request.url.path.startswith(ALWAYS_LOG_PREFIXES):
            should_log = random.random() < LOG_SAMPLE_2XX
        if should_log:
            log_fn = logger.error if status >= 500 else logger.info
            log_fn(json.dumps(entry))

        response.headers["X-Request-ID"] = req_id
        return response
