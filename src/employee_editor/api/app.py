"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from employee_editor.api.routes import employees_router, form_sessions_router, health_router
from employee_editor.api.sessions import FormSessionRegistry, SessionNotFoundError
from employee_editor.config import Settings, get_settings
from employee_editor.errors import InvalidTransitionError, StoreError, UnknownFieldError
from employee_editor.store import SqlGateway, build_gateway
from employee_editor.store.base import RecordStoreGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    gateway = app.state.gateway
    if isinstance(gateway, SqlGateway):
        await gateway.create_schema()
    logger.info("Employee editor started with %s store", gateway.store_name)
    yield
    # Shutdown
    await gateway.aclose()


def _error(status_code: int, detail: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail, "code": code})


def create_app(
    gateway: RecordStoreGateway | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    gateway = gateway or build_gateway(settings)

    app = FastAPI(
        title="Employee Editor API",
        description="Change employee information backed by a remote record store",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.gateway = gateway
    app.state.sessions = FormSessionRegistry(
        gateway, timeout=settings.request_timeout_seconds
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        """Surface record store failures as-is."""
        return _error(status.HTTP_502_BAD_GATEWAY, exc.message, "STORE_ERROR")

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found_handler(
        request: Request, exc: SessionNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc), "SESSION_NOT_FOUND")

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition_handler(
        request: Request, exc: InvalidTransitionError
    ) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc), "INVALID_STATE")

    @app.exception_handler(UnknownFieldError)
    async def unknown_field_handler(
        request: Request, exc: UnknownFieldError
    ) -> JSONResponse:
        return _error(422, str(exc), "UNKNOWN_FIELD")

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            "INTERNAL_ERROR",
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(form_sessions_router, prefix="/api/v1")

    return app
