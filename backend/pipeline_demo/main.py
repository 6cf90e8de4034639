"""
Pipeline Demo — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       error handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own settings and its own UserStore.
Who:   Called by uvicorn (uvicorn pipeline_demo.main:app), the CLI, the test
       harness and the pytest fixtures.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐              │
    │  │  Request ID  │→│  Logging        │              │
    │  └──────────────┘ └─────────────────┘              │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────┐ ┌─────────┐ ┌───────────────────────┐    │
    │  │ GET /│ │ /health │ │ GET, POST /api/users  │    │
    │  └──────┘ └─────────┘ └───────────────────────┘    │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ ValidationError→400 │ no route→404 │ *→500   │  │
    │  └──────────────────────────────────────────────┘  │
    │                                                     │
    │  State: settings, user_store                        │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pipeline_demo import __version__
from pipeline_demo.config import Settings, settings as default_settings
from pipeline_demo.exceptions import PipelineDemoError, ValidationError
from pipeline_demo.middleware.logging import RequestLoggingMiddleware
from pipeline_demo.middleware.request_id import RequestIDMiddleware, request_id_var
from pipeline_demo.routes import health, root, users
from pipeline_demo.schemas.user import ErrorResponse
from pipeline_demo.store import UserStore

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"
INTERNAL_ERROR = "Internal server error"
GENERIC_ERROR_DETAIL = "Something went wrong"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Writes to stdout so CI job logs capture service and harness output
    interleaved in order.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and announce the environment.
    Shutdown: log it. There are no connections or files to release.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Pipeline Demo %s starting up", __version__)
    logger.info("Environment: %s", app_settings.environment)
    logger.info("Seed users: %d (persist created users: %s)",
                len(app.state.user_store), app.state.user_store.persist_created)

    yield

    logger.info("Pipeline Demo shutting down")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, **fields) -> JSONResponse:
    body = ErrorResponse(**fields).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _original_path(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the error envelope.

    Handler hierarchy:
        ValidationError         → 400 {success, error}
        HTTPException 404/405   → 404 {success, error: "Route not found", path}
        HTTPException (other)   → its status, {success, error: detail}
        PipelineDemoError       → 500 {success, error, message}
        Exception (fallback)    → 500 {success, error, message}

    500 detail: the exception text in the development environment,
    "Something went wrong" anywhere else. Tracebacks are only logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | Context: %s", rid, exc.message, exc.context)
        return _error(400, error=exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # A known path with an unsupported method is treated as an unknown route
        if exc.status_code in (404, 405):
            return _error(404, error=ROUTE_NOT_FOUND, path=_original_path(request))
        return _error(exc.status_code, error=str(exc.detail))

    def _internal_error(request: Request, exc: Exception, with_traceback: bool) -> JSONResponse:
        app_settings: Settings = request.app.state.settings
        # request.state shares the scope dict the request ID middleware wrote to
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s", rid, exc,
            exc_info=exc if with_traceback else None,
        )
        detail = str(exc) if app_settings.is_development else GENERIC_ERROR_DETAIL
        response = _error(500, error=INTERNAL_ERROR, message=detail)
        if rid:
            response.headers["X-Request-ID"] = rid
        return response

    @app.exception_handler(PipelineDemoError)
    async def handle_app_error(request: Request, exc: PipelineDemoError):
        return _internal_error(request, exc, with_traceback=True)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Fallback for anything no other handler claimed.

        Starlette runs this handler in ServerErrorMiddleware, outside the
        request ID and logging middleware, and re-raises the exception once
        the response is sent. The server then logs the traceback, so only a
        one-line summary is logged here. The request ID is copied onto the
        response by hand because the request ID middleware never sees it.
        """
        return _internal_error(request, exc, with_traceback=False)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[UserStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use (defaults to the environment-loaded singleton)
        store: User store to serve (defaults to a freshly seeded one)

    Returns:
        Fully configured FastAPI instance ready to receive requests.

    Why factory (not module-level app only):
        Each test and each harness run builds its own app with its own store,
        so no user data leaks between them.
    """
    app_settings = settings or default_settings

    app = FastAPI(
        title="Pipeline Demo API",
        description="Toy user service used to demonstrate a CI/CD test gate.",
        version=__version__,
        lifespan=lifespan,
        # "/api/users/" is an unknown route (JSON 404), not a bodiless 307
        redirect_slashes=False,
    )

    app.state.settings = app_settings
    app.state.user_store = store if store is not None else UserStore(
        persist_created=app_settings.persist_created_users,
    )

    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(users.router)

    return app


# uvicorn expects `pipeline_demo.main:app` to be importable
app = create_app()
