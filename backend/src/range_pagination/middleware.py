"""FastAPI middleware for request tracing."""

import uuid
from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag every request with an ID and bind it, with the Range header, to the log context.

    The ID comes from X-Request-ID when the client sends one and is echoed
    back on the response. Pagination log events (range_rejected,
    long_poll_exhausted, ...) then carry both without passing them around.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        if "range" in request.headers:
            structlog.contextvars.bind_contextvars(range=request.headers["range"])

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
