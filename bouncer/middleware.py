"""Bouncer Middleware

Sets up the per-request value bag and Bouncer, and binds a correlation ID for
structured logs:

    app.add_middleware(BouncerMiddleware, get_query=lambda request: {...})

    @app.get("/users")
    async def list_users(bouncer: Bouncer = Depends(get_bouncer)):
        bouncer.validate_query("limit").default_to(20).to_int().clamp(1, 100)
        ...
"""
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from bouncer.binding import Bouncer, Getter, load_body
from bouncer.logging import (
    bind_context,
    clear_context,
    generate_correlation_id,
    http_logger,
)

log = http_logger()


class BouncerMiddleware(BaseHTTPMiddleware):
    """Creates ``request.state.vals`` and ``request.state.bouncer`` for every request."""

    def __init__(
        self,
        app: ASGIApp,
        get_params: Getter | None = None,
        get_query: Getter | None = None,
        get_body: Getter | None = None,
    ):
        super().__init__(app)
        self.get_params = get_params
        self.get_query = get_query
        self.get_body = get_body

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID") or generate_correlation_id()
        clear_context()
        bind_context(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )

        request.state.vals = {}
        request.state.bouncer = Bouncer(
            request,
            request.state.vals,
            get_params=self.get_params,
            get_query=self.get_query,
            get_body=self.get_body,
        )
        log.debug("bouncer_initialized")

        try:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


async def get_bouncer(request: Request) -> Bouncer:
    """FastAPI dependency returning the request's Bouncer with its body loaded."""
    bouncer = getattr(request.state, "bouncer", None)
    if bouncer is None:
        raise RuntimeError("BouncerMiddleware is not installed on this application")
    if not hasattr(request.state, "body"):
        request.state.body = await load_body(request)
    return bouncer
