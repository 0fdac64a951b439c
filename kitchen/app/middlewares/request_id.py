"""Request id propagation.

Each request carries one id from the first middleware that sees it to the
response header, the error envelopes and every log record. The id comes from
the ``X-Request-ID`` header when the caller sends a usable one and is a fresh
uuid4 otherwise.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"

# Ids are echoed into headers and logs, so only short printable tokens pass.
_USABLE_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def resolve_request_id(request: Request) -> str:
    """Return the id already bound to ``request``, binding a new one if needed."""

    req_id = getattr(request.state, "request_id", None)
    if req_id:
        return req_id
    header = request.headers.get(REQUEST_ID_HEADER, "")
    req_id = header if _USABLE_ID.match(header) else str(uuid.uuid4())
    request.state.request_id = req_id
    return req_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind the request id for the handlers and echo it on the response."""

    async def dispatch(self, request: Request, call_next):
        req_id = resolve_request_id(request)
        token = request_id_ctx.set(req_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers[REQUEST_ID_HEADER] = req_id
        return response
