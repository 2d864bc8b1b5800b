"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, exception
handlers and configures lifespan.

Dependencies: fastapi, explorely.api, explorely.observability, explorely.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from explorely.api.routers import (
    admin_router,
    auth_router,
    comments_router,
    communities_router,
    explore_router,
    health_router,
    itineraries_router,
    notifications_router,
    posts_router,
    reports_router,
    review_comments_router,
    reviews_router,
    search_router,
    user_itineraries_router,
    users_router,
)
from explorely.api.routers.router_utils.error_handling import SERVER_ERROR_MESSAGE
from explorely.configs import Settings, get_settings
from explorely.core.context import AppContext
from explorely.observability.logger import configure_logging
from explorely.observability.middleware import (
    AuthLoggingMiddleware,
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


def _first_error_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = first.get("msg", "Invalid request")
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    """Shape every error body as {"message": ...}."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info(
            "Request validation failed",
            extra={"path": request.url.path, "error_count": len(exc.errors())},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": _first_error_message(exc),
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            extra={"path": request.url.path, "error": str(exc)},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": SERVER_ERROR_MESSAGE},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to build the app with; environment settings
            when omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan context manager.

        Builds the shared AppContext on startup and disposes the engine
        on shutdown.
        """
        # Startup
        configure_logging(settings.log_level)
        context = AppContext.build(settings)
        try:
            if settings.database.create_tables_on_startup:
                await context.create_tables()
        except Exception as e:
            logger.exception("Failed to initialize database", extra={"error": str(e)})
            await context.close()
            raise
        app.state.context = context
        logger.info(
            "Application startup complete",
            extra={"environment": settings.environment},
        )

        yield

        # Shutdown
        await context.close()
        logger.info("Application shutdown")

    app = FastAPI(
        title="Explorely API",
        description="Travel community platform: communities, reviews, itineraries",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(AuthLoggingMiddleware, prefix="/auth")
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware; cookies require explicit origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(communities_router)
    app.include_router(posts_router)
    app.include_router(comments_router)
    app.include_router(reviews_router)
    app.include_router(review_comments_router)
    app.include_router(itineraries_router)
    app.include_router(user_itineraries_router)
    app.include_router(notifications_router)
    app.include_router(reports_router)
    app.include_router(search_router)
    app.include_router(explore_router)
    app.include_router(admin_router)
    app.include_router(health_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "explorely.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.debug,
    )
