"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
exception handlers and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from deliverybase.core.config import get_settings
from deliverybase.core.errors import (
    BadRequestError,
    ConflictError,
    DeliveryBaseError,
    ExternalServiceError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
)
from deliverybase.core.logging import configure_logging, get_logger
from deliverybase.infrastructure.persistence.database import (
    close_database,
    init_database,
)

logger = get_logger(__name__)

# Most specific classes first
ERROR_STATUS_CODES: list[tuple[type[DeliveryBaseError], int]] = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (BadRequestError, 400),
    (ForbiddenError, 403),
    (UnauthenticatedError, 401),
    (ExternalServiceError, 502),
]


def status_code_for(exc: DeliveryBaseError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_class, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Initializes the database and runs the notification dispatcher for the
    lifetime of the application.
    """
    from deliverybase.infrastructure.api.dependencies import create_notification_dispatcher

    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting DeliveryBase",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    dispatcher = create_notification_dispatcher()
    app.state.notification_dispatcher = dispatcher
    await dispatcher.start()

    yield

    logger.info("Shutting down DeliveryBase")
    await dispatcher.stop()
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Order and delivery management API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check. Does not check dependencies."""
        return {
            "status": "healthy",
            "service": "DeliveryBase",
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check, including database connectivity."""
        from deliverybase.infrastructure.persistence.database import get_db_manager

        if await get_db_manager().check_connection():
            return {
                "status": "ready",
                "service": "DeliveryBase",
                "version": get_settings().app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": "DeliveryBase",
                "database": "disconnected",
            },
        )

    @app.get("/live", tags=["health"])
    async def liveness_check():
        """Liveness check."""
        return {
            "status": "alive",
            "service": "DeliveryBase",
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
    """
    from deliverybase.infrastructure.api.routes import (
        addresses_router,
        auth_router,
        orders_router,
        roles_router,
        routes_router,
        users_router,
    )

    settings = get_settings()
    prefix = settings.api_prefix

    app.include_router(auth_router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(users_router, prefix=f"{prefix}/users", tags=["users"])
    app.include_router(roles_router, prefix=f"{prefix}/roles", tags=["roles"])
    app.include_router(addresses_router, prefix=f"{prefix}/addresses", tags=["addresses"])
    app.include_router(orders_router, prefix=f"{prefix}/orders", tags=["orders"])
    app.include_router(routes_router, prefix=f"{prefix}/routes", tags=["routes"])

    @app.get(prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Domain errors become ``{"error": kind, "message": ...}`` responses.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(DeliveryBaseError)
    async def domain_exception_handler(request: Request, exc: DeliveryBaseError):
        """Handle expected business rule violations."""
        status_code = status_code_for(exc)
        message = exc.message
        if isinstance(exc, ExternalServiceError):
            logger.error(
                "External service failure",
                service=exc.service,
                path=str(request.url.path),
                error=exc.message,
            )
            message = "External service error"
        else:
            logger.info(
                "Request rejected",
                path=str(request.url.path),
                error=exc.kind,
                message=exc.message,
            )

        headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.kind, "message": message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report request validation failures as 400."""
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={
                "error": "bad_request",
                "message": "Invalid request",
                "details": details,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal",
                "message": str(exc) if get_settings().debug else "Internal server error",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request, call_next):
        """Log every request and propagate a correlation ID."""
        from deliverybase.core.logging import bind_correlation_id, clear_context, new_correlation_id

        correlation_id = request.headers.get("X-Correlation-ID") or new_correlation_id()
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
