"""Application factory.

    from bouncer.app import create_app

    app = create_app()

    @app.get("/search")
    async def search(bouncer: Bouncer = Depends(get_bouncer)):
        q = bouncer.validate_query("q").required().is_string().trim().value()
        ...
"""
from fastapi import FastAPI

from bouncer.binding import Getter
from bouncer.config import settings
from bouncer.errors import register_error_handlers
from bouncer.logging import SERVICE_VERSION, configure_logging
from bouncer.middleware import BouncerMiddleware


def create_app(
    *,
    title: str = "Bouncer",
    get_params: Getter | None = None,
    get_query: Getter | None = None,
    get_body: Getter | None = None,
    configure: bool = True,
) -> FastAPI:
    """Build a FastAPI app with the bouncer middleware and error handlers installed.

    Args:
        title: OpenAPI title of the app
        get_params: Override for the route-params getter
        get_query: Override for the query-string getter
        get_body: Override for the body getter
        configure: Configure logging from settings
    """
    if configure:
        configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    app = FastAPI(title=title, version=SERVICE_VERSION)
    register_error_handlers(app)
    app.add_middleware(
        BouncerMiddleware,
        get_params=get_params,
        get_query=get_query,
        get_body=get_body,
    )
    return app
