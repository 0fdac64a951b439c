"""Response envelopes shared by the routes and the error handlers."""

from typing import Any, Dict, Mapping

from fastapi.responses import JSONResponse

from ..errors import KitchenError, StorageUnavailable

# Seconds a caller should wait before retrying after a storage outage.
STORAGE_RETRY_AFTER = 1


def ok(data: Any) -> Dict[str, Any]:
    return {"ok": True, "data": data}


def err(code: int | str, message: str, hint: str | None = None) -> Dict[str, Any]:
    """Return an error envelope tagged with the current request id."""
    # Imported lazily: the middlewares package imports this module.
    from ..middlewares.request_id import request_id_ctx

    error: Dict[str, Any] = {"code": code, "message": message}
    if hint:
        error["hint"] = hint
    return {"ok": False, "request_id": request_id_ctx.get(), "error": error}


def error_response(
    code: int | str,
    message: str,
    status_code: int,
    hint: str | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(err(code, message, hint=hint), status_code=status_code, headers=headers)


def kitchen_error(exc: KitchenError) -> JSONResponse:
    """Map a domain error to its status, adding retry advice for outages."""
    if isinstance(exc, StorageUnavailable):
        return error_response(
            exc.code,
            exc.message,
            exc.status_code,
            hint=f"retry in {STORAGE_RETRY_AFTER}s",
            headers={"Retry-After": str(STORAGE_RETRY_AFTER)},
        )
    return error_response(exc.code, exc.message, exc.status_code)
