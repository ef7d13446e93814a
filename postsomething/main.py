"""PostSomething API - Main Application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from postsomething.auth.router import router as auth_router
from postsomething.auth.service import AuthService
from postsomething.comments.repository import CommentRepository
from postsomething.comments.router import router as comments_router
from postsomething.comments.service import CommentsService
from postsomething.config import get_settings
from postsomething.core.context import get_request_id
from postsomething.core.database import init_async_cassandra, shutdown_async_cassandra
from postsomething.core.logging import configure_structlog, get_logger
from postsomething.core.middleware import RequestContextMiddleware
from postsomething.email.service import EmailSender, LoggingEmailSender
from postsomething.health.router import router as health_router
from postsomething.posts.repository import PostRepository
from postsomething.posts.router import router as posts_router


# Configure logging early (before creating logger)
settings = get_settings()
configure_structlog(settings, log_dir=Path(settings.log_dir))

logger = get_logger(__name__)


# Application state for dependency injection
class AppState:
    """Application state container."""

    cassandra_session: Any = None
    auth_service: AuthService | None = None
    post_repository: PostRepository | None = None
    comment_repository: CommentRepository | None = None
    comments_service: CommentsService | None = None
    email_sender: EmailSender | None = None


app_state = AppState()


def get_auth_service() -> AuthService:
    """Get AuthService instance from app state."""
    if app_state.auth_service is None:
        msg = "AuthService not initialized"
        raise RuntimeError(msg)
    return app_state.auth_service


def get_email_sender() -> EmailSender:
    """Get EmailSender instance from app state."""
    if app_state.email_sender is None:
        msg = "EmailSender not initialized"
        raise RuntimeError(msg)
    return app_state.email_sender


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info(
        "starting_application",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    # Email sender does not depend on the database
    app_state.email_sender = LoggingEmailSender(log_body=settings.is_development)

    # Initialize Cassandra (async)
    try:
        app_state.cassandra_session = await init_async_cassandra()
        logger.info("cassandra_initialized")

        app_state.auth_service = AuthService(
            session=app_state.cassandra_session,
            keyspace=settings.cassandra_keyspace,
        )
        logger.info("auth_service_initialized")

        app_state.post_repository = PostRepository(
            session=app_state.cassandra_session,
            keyspace=settings.cassandra_keyspace,
        )
        app_state.comment_repository = CommentRepository(
            session=app_state.cassandra_session,
            keyspace=settings.cassandra_keyspace,
        )
        app_state.comments_service = CommentsService(
            comment_repository=app_state.comment_repository,
            post_repository=app_state.post_repository,
            user_directory=app_state.auth_service,
        )
        # Also set on app.state for dependency injection via request.app.state
        app.state.post_repository = app_state.post_repository
        app.state.comments_service = app_state.comments_service
        logger.info("content_services_initialized")
    except Exception as e:
        logger.warning(
            "database_init_skipped",
            error=str(e),
            message="Running without database connection",
        )

    yield

    # Shutdown
    logger.info("shutting_down_application")
    await shutdown_async_cassandra()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    # SECURITY: Always set debug=False to prevent Starlette's ServerErrorMiddleware
    # from exposing stack traces in responses. Our custom exception handlers will
    # log full details internally while returning safe error messages to users.
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="PostSomething - blogging API",
        debug=False,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
    )

    # Request context middleware (must be added first - outermost)
    app.add_middleware(
        RequestContextMiddleware,
        log_requests=settings.log_requests,
        exclude_paths=settings.log_exclude_paths,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )

    def _get_request_id_safe(request: Request) -> str | None:
        """Get request_id from request state or context."""
        if hasattr(request.state, "request_id"):
            return request.state.request_id
        return get_request_id()

    # Global exception handlers (security: never expose stack traces)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> ORJSONResponse:
        """Handle HTTP exceptions with safe error messages.

        Structured details (dicts) are merged into the response body.
        """
        request_id = _get_request_id_safe(request)

        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )

        extra: dict[str, Any] = {}
        message = str(exc.detail)
        if isinstance(exc.detail, dict):
            extra = {k: v for k, v in exc.detail.items() if k != "message"}
            message = str(exc.detail.get("message", ""))
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            extra = {}
            message = "Internal server error"

        return ORJSONResponse(
            status_code=exc.status_code,
            content={
                **extra,
                "error": True,
                "message": message,
                "status_code": exc.status_code,
                "request_id": request_id,
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Handle validation errors with safe error messages."""
        request_id = _get_request_id_safe(request)

        logger.warning(
            "validation_error",
            errors=exc.errors(),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": True,
                "message": "Validation error",
                "status_code": 422,
                "request_id": request_id,
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in err.get("loc", [])),
                        "message": err.get("msg", "Invalid value"),
                    }
                    for err in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> ORJSONResponse:
        """Catch-all handler for unhandled exceptions.

        SECURITY: Never expose stack traces or internal error details to users.
        """
        request_id = _get_request_id_safe(request)

        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            error_message=str(exc),
            path=request.url.path,
            method=request.method,
        )

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "message": "An unexpected error occurred. Please try again later.",
                "status_code": 500,
                "request_id": request_id,
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(posts_router)
    app.include_router(comments_router)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "PostSomething API",
            "version": settings.app_version,
            "docs": f"{request.url}docs",
        }

    return app


# Configure router dependencies before creating app
from postsomething.auth.dependencies import (  # noqa: E402
    set_auth_service_getter,
    set_email_sender_getter,
)


set_auth_service_getter(get_auth_service)
set_email_sender_getter(get_email_sender)


app = create_app()
