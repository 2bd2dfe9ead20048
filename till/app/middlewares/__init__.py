from .logging import RequestLogMiddleware, request_id_ctx

__all__ = ["RequestLogMiddleware", "request_id_ctx"]
