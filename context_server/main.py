import logging
import traceback
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from . import __version__
from .config import Settings, get_settings
from .utils.central_logging import setup_central_logging
from .utils.cors import OpenCORSMiddleware
from .utils.errors import INTERNAL_ERROR_MESSAGE
from .utils.logging_middleware import LoggingMiddleware

# Import the router object from each route module
from .routes.contexts import router as contexts_router
from .routes.discovery import router as discovery_router
from .routes.health import router as health_router

logger = logging.getLogger("context_server.main")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_central_logging(settings.log_level, settings.log_dir)

    app = FastAPI(
        title=settings.server_name,
        version=__version__,
        redirect_slashes=False,
    )

    if settings is not get_settings():
        app.dependency_overrides[get_settings] = lambda: settings

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        if isinstance(exc.detail, dict) and "error" in exc.detail:
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.detail,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global Unhandled Exception on {request.url.path}: {exc}")
        logger.error(traceback.format_exc())

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )

    app.include_router(discovery_router, tags=["Discovery"])
    app.include_router(contexts_router, tags=["MCP"])
    app.include_router(health_router, tags=["Monitoring"])

    app.add_middleware(LoggingMiddleware)
    # Registered last, so CORS wraps everything and pre-flight never reaches routing
    app.add_middleware(
        OpenCORSMiddleware,
        allow_origin=settings.cors_allow_origin,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Static assets (icon.png) after the API routes so they never shadow them
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir)), name="static")
        logger.info(f"Serving static files from {static_dir}")

    return app


# Uvicorn Entry
app = create_app()
