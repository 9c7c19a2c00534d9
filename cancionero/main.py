"""
Cancionero - Main Application

Single FastAPI service that serves:
- REST API endpoints for the songbook CRUD (``/canciones``)
- Health check endpoint
- Static client files from the ``public`` folder, when present

Every response allows any origin so the client can be opened from
``file://`` or from another port.
"""

import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from loguru import logger

from cancionero.config import (
    APP_ENV,
    APP_HOST,
    APP_PORT,
    APP_VERSION,
    CORS_HEADERS,
    DATA_PATH,
    DEBUG,
    LOG_LEVEL,
    MSG_INTERNAL_ERROR,
    MSG_MISSING_FIELDS,
    PUBLIC_DIR,
)
from cancionero.errors import RepertorioError
from cancionero.routes.api import router as api_router
from cancionero.storage import JsonFileStorage, SongStorage

# ---------------------------------------------------------------------------
# Logging setup (stdout only)
# ---------------------------------------------------------------------------
logger.remove()

logger.add(
    sys.stdout,
    level="DEBUG" if DEBUG else LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True,
)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown.  The songbook itself needs no setup."""
    logger.info("🚀 Starting Cancionero v{}", APP_VERSION)
    logger.info("📋 Environment: {} | Debug: {}", APP_ENV, DEBUG)
    logger.info("📂 Songbook file: {}", getattr(app.state.storage, "path", "(in memory)"))
    logger.success("✅ Servidor escuchando en http://localhost:{}", APP_PORT)

    yield

    logger.info("👋 Shutdown complete")


# ---------------------------------------------------------------------------
# Error responses
# ---------------------------------------------------------------------------
def _message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing, empty or malformed body fields are reported as a plain 400."""
    logger.debug("Rejected body for {} {}: {}", request.method, request.url.path, exc.errors())
    return _message_response(400, MSG_MISSING_FIELDS)


async def _repertorio_error_handler(request: Request, exc: RepertorioError):
    if exc.status_code >= 500:
        logger.opt(exception=exc).error(
            "❌ {} {} — {}", request.method, request.url.path, exc.message
        )
        return _message_response(exc.status_code, MSG_INTERNAL_ERROR)
    return _message_response(exc.status_code, exc.message)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(
    storage: Optional[SongStorage] = None,
    public_dir: Optional[Path] = PUBLIC_DIR,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Cancionero",
        description="CRUD API for a songbook stored as a JSON document.",
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if DEBUG else None,
        redoc_url="/redoc" if DEBUG else None,
    )
    app.state.storage = storage if storage is not None else JsonFileStorage(DATA_PATH)

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(RepertorioError, _repertorio_error_handler)

    # ------------------------------------------------------------------
    # Request logging middleware (also the catch-all for unhandled errors)
    # ------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every incoming HTTP request with timing information."""
        start = time.time()
        try:
            response = await call_next(request)
        except Exception:
            duration = round(time.time() - start, 3)
            logger.exception(
                "❌ {method} {path} — unhandled error after {duration}s",
                method=request.method,
                path=request.url.path,
                duration=duration,
            )
            return _message_response(500, MSG_INTERNAL_ERROR)

        duration = round(time.time() - start, 3)
        status = response.status_code

        if status >= 500:
            log = logger.error
        elif status >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            "📤 {method} {path} — {status} [{duration}s]",
            method=request.method,
            path=request.url.path,
            status=status,
            duration=duration,
        )
        return response

    # ------------------------------------------------------------------
    # CORS middleware (outermost: preflight never reaches the routes)
    # ------------------------------------------------------------------
    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    # ------------------------------------------------------------------
    # Register routers
    # ------------------------------------------------------------------
    app.include_router(api_router)

    # Static client (must be last so it never shadows the API)
    if public_dir is not None and Path(public_dir).is_dir():
        app.mount("/", StaticFiles(directory=str(public_dir), html=True), name="public")

    return app


# ---------------------------------------------------------------------------
# Create the app instance (used by Uvicorn)
# ---------------------------------------------------------------------------
app = create_app()


# ---------------------------------------------------------------------------
# Direct execution (development)
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cancionero.main:app",
        host=APP_HOST,
        port=APP_PORT,
        reload=DEBUG,
        log_level="debug" if DEBUG else "info",
    )
