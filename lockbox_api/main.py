#!/usr/bin/env python3
"""
FastAPI application for the Lockbox file service.

``create_app`` builds the application from a ``Settings`` object: it wires
the session cookie, the security headers, the upload store and the
routers, and turns guard failures into redirects to the login page.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
import uvicorn

from lockbox.auth.credentials import CredentialValidator
from lockbox.auth.sessions import SessionRegistry
from lockbox.config import Settings, get_settings
from lockbox.storage.catalog import FileCatalog
from lockbox.storage.store import UploadStore
from lockbox_api.dependencies import LoginRequired
from lockbox_api.middleware.security import add_security_middleware
from lockbox_api.models.responses import HealthResponse
from lockbox_api.routers import auth, files

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the Lockbox application.

    Args:
        settings: Settings to run with; read from the environment if omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Lockbox",
        description="Password protected file upload service",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
    )

    store = UploadStore(settings.UPLOAD_DIR, strict_unique_names=settings.STRICT_UNIQUE_NAMES)
    store.ensure_directory()

    app.state.settings = settings
    app.state.store = store
    app.state.catalog = FileCatalog(store)
    app.state.validator = CredentialValidator(settings.USER_NAME, settings.USER_PASSWORD)
    app.state.sessions = SessionRegistry()

    add_security_middleware(app)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        max_age=settings.SESSION_MAX_AGE,
        same_site="lax",
    )

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse("/login", status_code=302)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # a non-file value in the upload field counts as no file
        if request.url.path == "/upload" and any(
            tuple(error.get("loc", ()))[:2] == ("body", "file") for error in exc.errors()
        ):
            return PlainTextResponse("No file uploaded.", status_code=400)
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return PlainTextResponse("Internal Server Error", status_code=500)

    app.include_router(auth.router, tags=["Auth"])
    app.include_router(files.router, tags=["Files"])

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="ok",
            message="Service is healthy",
            upload_dir=str(store.directory),
        )

    logger.info(
        f"Lockbox ready: uploads in {store.directory}, "
        f"strict unique names {'on' if settings.STRICT_UNIQUE_NAMES else 'off'}"
    )
    return app


if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)
