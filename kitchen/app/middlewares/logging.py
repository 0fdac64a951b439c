import json
import logging
import os
import random
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..utils.responses import err
from .request_id import REQUEST_ID_HEADER, request_id_ctx, resolve_request_id

LOG_SAMPLE_2XX = float(os.getenv("LOG_SAMPLE_2XX", "1.0"))


logger = logging.getLogger("api")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Emit structured inbound/outbound request logs with a request ID."""

    async def dispatch(self, request: Request, call_next):
        req_id = resolve_request_id(request)
        token = None
        if request_id_ctx.get() != req_id:
            # Bind it here when RequestIdMiddleware does not wrap this one.
            token = request_id_ctx.set(req_id)

        inbound = {
            "path": request.url.path,
            "method": request.method,
            "ip": request.client.host if request.client else None,
            "ua": request.headers.get("user-agent"),
        }

        start = time.perf_counter()
        error_id = None
        try:
            response = await call_next(request)
        except Exception:
            error_id = str(uuid.uuid4())
            logger.exception("unhandled_error", extra={"route": request.url.path})
            payload = err(500, "Internal Server Error")
            payload["error_id"] = error_id
            response = JSONResponse(payload, status_code=500)
        dur_ms = int((time.perf_counter() - start) * 1000)
        status = response.status_code
        extra = {"route": request.url.path, "status": status, "latency_ms": dur_ms}

        should_log = not (200 <= status < 300 and random.random() >= LOG_SAMPLE_2XX)
        if should_log:
            logger.info(json.dumps({"inbound": inbound}), extra={"route": request.url.path})
            outbound = {"error_id": error_id} if error_id else {}
            if status >= 500:
                logger.error(json.dumps({"outbound": outbound}), extra=extra)
            else:
                logger.info(json.dumps({"outbound": outbound}), extra=extra)

        response.headers[REQUEST_ID_HEADER] = req_id

        if token is not None:
            request_id_ctx.reset(token)
        return response
