from typing import Any, Dict

from fastapi.encoders import jsonable_encoder


def ok(data: Any) -> Dict[str, Any]:
    """Return a success envelope."""
    return {"ok": True, "data": jsonable_encoder(data, by_alias=True)}


def err(
    code: int | str,
    message: str,
    details: Dict[str, Any] | None = None,
) -> Dict[str, Any]:
    """Return an error envelope tagged with the current request id."""
    from ..middlewares.logging import request_id_ctx

    error: Dict[str, Any] = {"code": code, "message": message}
    if details:
        error["details"] = details

    return {"ok": False, "request_id": request_id_ctx.get(None), "error": error}
