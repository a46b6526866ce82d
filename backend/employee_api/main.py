"""
Employee API: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) builds the Database handle, registers middleware,
       exception handlers and routers, and returns the app. uvicorn imports
       the module-level `app` (uvicorn employee_api.main:app), and the
       `employee-api` console script calls run().

Application Layout:
    Middleware:   RequestID → Logging → GZip → CORS
    Routes:       /api/employees/*     envelope responses
                  /api/employeelist/*  bare responses (frontend compatibility)
                  /api/health
                  /{path}              pre-built frontend (registered last)
    Errors:       ValidationError → 400 │ InvalidIdentifierError → 400
                  NotFoundError → 404   │ DatabaseError / Exception → 500

Lifecycle:
    Startup:  configure logging, open and verify the database connection
              (failure is fatal: startup aborts), create tables if enabled
    Shutdown: dispose the engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api import __version__
from employee_api.config import Settings, settings as default_settings
from employee_api.database import Database
from employee_api.exceptions import (
    DatabaseError,
    EmployeeAPIError,
    InvalidIdentifierError,
    NotFoundError,
    ValidationError,
)
from employee_api.middleware.logging import RequestLoggingMiddleware
from employee_api.middleware.request_id import RequestIDMiddleware, request_id_var
from employee_api.responses import error_body
from employee_api.routes import employeelist, employees, frontend, health

logger = logging.getLogger(__name__)

GENERIC_ERROR_DETAIL = "Something went wrong"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout.
    Called once during startup, before the database connection is opened.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Connect to the database; an unreachable database aborts startup
    Shutdown:
        1. Dispose the engine (close pooled connections)
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("Employee API %s starting (environment=%s)", __version__, app_settings.environment)

    try:
        await database.connect()
    except Exception as e:
        logger.error("Database connection error: %s", str(e))
        await database.dispose()
        raise

    logger.info("Server running on port %d", app_settings.port)
    logger.info("API endpoints available at http://localhost:%d/api/", app_settings.port)

    yield

    logger.info("Employee API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI, app_settings: Settings) -> None:
    """
    Map exception types to HTTP status codes and the JSON error envelope.

    Handler hierarchy:
        ValidationError          → 400 {success, message, errors?}
        InvalidIdentifierError   → 400 {success, message}
        NotFoundError            → 404 {success, message}
        DatabaseError            → 500 {success, message: "Server Error", error}
        EmployeeAPIError (base)  → exc.status_code
        HTTPException (routing)  → its status, envelope body
        Exception (fallback)     → 500 {success, message: "Internal server error", error}

    `error` holds the underlying detail only in development.
    """

    def detail(text: str) -> str:
        return text if app_settings.is_development else GENERIC_ERROR_DETAIL

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s %s", request_id_var.get(""), exc.message, exc.errors)
        return JSONResponse(
            status_code=400,
            content=error_body(exc.message, errors=exc.errors or None),
        )

    @app.exception_handler(InvalidIdentifierError)
    async def handle_invalid_identifier(request: Request, exc: InvalidIdentifierError):
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        original = exc.context.get("original_error", exc.message)
        return JSONResponse(
            status_code=500,
            content=error_body("Server Error", error=detail(original)),
        )

    @app.exception_handler(EmployeeAPIError)
    async def handle_app_error(request: Request, exc: EmployeeAPIError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = "API endpoint not found" if request.url.path.startswith("/api") else "Not found"
        elif exc.status_code == 405:
            message = "Method not allowed"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = [str(err.get("msg", err)) for err in exc.errors()]
        return JSONResponse(status_code=400, content=error_body("Validation Error", errors=errors))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unhandled error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_body("Internal server error", error=detail(str(exc))),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: configuration to use; defaults to the environment-driven
            module-level settings. Tests pass their own (SQLite, temp frontend).
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Employee Management API",
        description="CRUD API for employee records plus the pre-built frontend.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = Database(app_settings)

    # Middleware executes in reverse order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app, app_settings)

    app.include_router(employees.router)
    app.include_router(employeelist.router)
    app.include_router(health.router)
    # Catch-all GET; must stay last
    app.include_router(frontend.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "employee_api.main:app",
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )
