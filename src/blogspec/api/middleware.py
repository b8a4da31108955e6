"""HTTP middleware binding a correlation ID to each request."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from starlette.middleware.base import BaseHTTPMiddleware

from ..correlation import correlation_scope

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Adopts ``X-Correlation-ID`` from the request, or generates one.

    The ID is bound to the context for the whole request, so messages built
    by the routes and every log record inherit it, and it is echoed on the
    response.
    """

    def __init__(self, app: Any, *, header_name: str = CORRELATION_HEADER) -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        incoming = request.headers.get(self.header_name) or None
        with correlation_scope(incoming) as correlation_id:
            response: Response = await call_next(request)
        response.headers[self.header_name] = correlation_id
        return response
