import json
import logging
from datetime import datetime, timezone
from typing import Any

from ..middlewares.logging import request_id_ctx

# Extra attributes copied from ``logger.x(..., extra={...})`` into the JSON line
EXTRA_FIELDS = (
    "printer",
    "printers",
    "order_id",
    "dialect",
    "detail",
    "payload_len",
    "bytes",
    "reply",
    "route",
    "status",
)


class RequestIdFilter(logging.Filter):
    """Attach request id from context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - trivial
        record.req_id = request_id_ctx.get(None)
        return True


class JsonFormatter(logging.Formatter):
    """Render logs as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "req_id": getattr(record, "req_id", None),
            "msg": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                data[key] = value
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logger with JSON formatting."""

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
