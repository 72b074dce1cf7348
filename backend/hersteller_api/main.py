"""
Hersteller Service — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the service container, registers middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn hersteller_api.main:app`) and the test suite.

Application Layout:
    ┌───────────────────────────────────────────────────────┐
    │                     FastAPI App                       │
    │  Middleware:  Request ID → Access Log → GZip → CORS   │
    │  Routes:      /rest  /graphql  /health                │
    │  Handlers:    NotFound→404  Database→500  other→500   │
    │  State:       app.state.services (validator, reader,  │
    │               writer)                                 │
    └───────────────────────────────────────────────────────┘

Only infrastructure faults reach the exception handlers. Business outcomes
(constraint violations, stale versions, ...) are mapped to responses by the
routes themselves.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from hersteller_api import __version__
from hersteller_api.config import settings
from hersteller_api.database import dispose_engine
from hersteller_api.dependencies import build_services
from hersteller_api.exceptions import DatabaseError, HerstellerServiceError, NotFoundError
from hersteller_api.middleware.logging import RequestLoggingMiddleware
from hersteller_api.middleware.request_id import RequestIDMiddleware, request_id_var
from hersteller_api.routes import graphql_router, health, hersteller_read, hersteller_write
from hersteller_api.services.mail_service import MailService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] hersteller_api.services.write_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Hersteller service %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: reads and health checks still work without mail
        logger.error("Configuration error: %s", str(e))

    logger.info("Mail notifications: %s", "SMTP" if settings.mail_activated else "log only")
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Hersteller service shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map infrastructure faults to JSON error responses.

        NotFoundError           → 404
        DatabaseError           → 500 (generic message, details logged)
        HerstellerServiceError  → 500
        Exception               → 500 (stack trace logged only)

    Responses never contain SQL, driver messages or stack traces.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(HerstellerServiceError)
    async def handle_service_error(request: Request, exc: HerstellerServiceError):
        rid = request_id_var.get("")
        logger.error("[%s] Service error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(mail_service: Optional[MailService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        mail_service: Notification collaborator for the writer. Defaults to
                      the one selected by Settings (SMTP or log only).
    """
    app = FastAPI(
        title="Hersteller API",
        description=(
            "Manufacturer records over REST (HAL links, ETag / If-Match) and GraphQL, "
            "with optimistic locking on every update."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.services = build_services(mail_service)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag", "Location", "X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(hersteller_read.router)
    app.include_router(hersteller_write.router)
    app.include_router(graphql_router.create_graphql_router(), prefix="/graphql")
    app.include_router(health.router)

    return app


# uvicorn hersteller_api.main:app
app = create_app()
