"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from employee_mgmt import __version__
from employee_mgmt.api.routes import (
    auth_router,
    employees_router,
    health_router,
    lookups_router,
    payroll_router,
    reports_router,
)
from employee_mgmt.api.sessions import SessionRegistry
from employee_mgmt.config import Settings, get_settings
from employee_mgmt.database import Database
from employee_mgmt.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database(app.state.settings)
    logger.info("Employee management API starting")
    yield
    if owns_database:
        await app.state.database.dispose()
        app.state.database = None
    logger.info("Employee management API stopped")


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Pass ``database`` to share an existing handle (tests, embedding);
    otherwise the lifespan builds one from settings and disposes it on
    shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Employee Management API",
        description="Employees, payroll, salary adjustments and HR reports",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.sessions = SessionRegistry()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    app.include_router(health_router)
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(employees_router, prefix="/api/v1")
    app.include_router(lookups_router, prefix="/api/v1")
    app.include_router(payroll_router, prefix="/api/v1")
    app.include_router(reports_router, prefix="/api/v1")

    return app
