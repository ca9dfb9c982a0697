"""
Main entrypoint for the Hotel Booking API.

This module assembles the FastAPI application: it sets up logging,
connects the document store, builds the services, registers the error
handlers and includes the routers.  ``create_app`` builds and
configures the app, which is then instantiated at module import time as
``app`` so it can be served with uvicorn::

    uvicorn hotel_booking_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.endpoints import info
from .api.router import router as api_router
from .core.config import settings
from .core.db import DocumentStore
from .core.exceptions import InvalidArgument, ServiceError, Unauthenticated
from .core.logging_config import setup_logging
from .services import build_services


logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def setup_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"success": false, "message": ...}``."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = InvalidArgument("Invalid request", error=_format_validation_errors(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"success": False, "message": "Server error"})


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DocumentStore]
        Document store to serve from.  Defaults to a MongoDB connection
        built from the settings; tests pass an in-memory store.

    Returns
    -------
    FastAPI
        A configured FastAPI instance ready to be served.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    if store is None:
        store = DocumentStore.from_settings()
    app.state.store = store
    app.state.services = build_services(store)

    setup_exception_handlers(app)

    app.include_router(info.router, tags=["info"])
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    def startup_event() -> None:
        app.state.store.init()

    @app.on_event("shutdown")
    def shutdown_event() -> None:
        app.state.store.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
