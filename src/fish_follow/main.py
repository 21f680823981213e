"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from fish_follow import __version__
from fish_follow.config import get_settings
from fish_follow.contacts.router import router as contacts_router
from fish_follow.follow_up.router import router as follow_up_router
from fish_follow.organizations.router import router as organizations_router
from fish_follow.shared.database import get_database_manager
from fish_follow.shared.exceptions import AppError
from fish_follow.shared.logging import get_logger, setup_logging
from fish_follow.shared.middleware import CorrelationIdMiddleware
from fish_follow.users.router import roles_router
from fish_follow.users.router import router as users_router

# Register every table on Base.metadata
import fish_follow.contacts.models  # noqa: F401
import fish_follow.follow_up.models  # noqa: F401
import fish_follow.organizations.models  # noqa: F401
import fish_follow.users.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    settings = get_settings()
    db_manager = get_database_manager()

    logger.info("Application starting", extra={"env": settings.app_env})

    if settings.db_create_all:
        await db_manager.create_all()
        logger.info("Database tables ensured")

    yield

    logger.info("Shutting down application")
    await db_manager.close()
    logger.info("Application shutdown complete")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map a domain exception to its HTTP status and JSON body."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"path": request.url.path, "code": exc.code, "error": exc.message},
        )
    content: dict[str, Any] = {"detail": exc.message, "code": exc.code}
    field = getattr(exc, "field", None)
    if field:
        content["field"] = field
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Fish & Follow API",
        description="Contact management and follow-up tracking for outreach teams",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Map domain exceptions to HTTP responses
    app.add_exception_handler(AppError, app_error_handler)

    @app.exception_handler(SQLAlchemyError)
    async def _storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error(
            "Database operation failed",
            exc_info=exc,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Operation failed", "code": "STORAGE_ERROR"},
        )

    # Request validation (FastAPI/Pydantic) -> consistent 422 payload
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = []
        for error in exc.errors():
            field = ".".join(str(loc) for loc in error["loc"])
            errors.append(
                {
                    "field": field,
                    "message": error["msg"],
                    "type": error["type"],
                }
            )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "errors": errors,
                }
            },
        )

    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(contacts_router)
    app.include_router(follow_up_router)
    app.include_router(organizations_router)
    app.include_router(users_router)
    app.include_router(roles_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()
