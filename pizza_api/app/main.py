"""
Main entrypoint for the Pizza Storefront API.

This module assembles the FastAPI application, sets up logging and
includes the versioned routers.  The ``create_app`` function builds
and configures the app, which is then instantiated at module import
time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn pizza_api.app.main:app --reload

The record store, upload storage and services are created in the
startup handler and kept on ``app.state``.  A data file or upload
directory that cannot be opened aborts startup.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import PizzaAPIError, StorageError
from .core.logging_config import setup_logging
from .core.store import JsonFileRecordStore
from .core.uploads import UploadStorage
from .services.ingredient_service import IngredientService
from .services.order_service import OrderService
from .services.session_service import AdminIdentity, AdminSessionService, StaticIdentityProvider


def build_services(app: FastAPI, settings: Settings) -> None:
    """Create the store and services and attach them to ``app.state``."""
    store = JsonFileRecordStore(settings.data_path)
    uploads = UploadStorage(settings.upload_path)
    identity = AdminIdentity(
        id=settings.admin_id,
        email=settings.admin_email,
        password=settings.admin_password,
    )
    app.state.store = store
    app.state.uploads = uploads
    app.state.ingredient_service = IngredientService(
        store, uploads, remove_stale_uploads=settings.remove_stale_uploads
    )
    app.state.order_service = OrderService(store)
    app.state.session_service = AdminSessionService(
        StaticIdentityProvider(identity),
        secret_key=settings.secret_key,
        token_lifetime_seconds=settings.access_token_expire_minutes * 60,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the startup
    # handler can log.
    setup_logging(settings.log_level, settings.log_file)
    logger = logging.getLogger(__name__)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        docs_url="/api-docs",
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
        # Log the cause but never send it to the client
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.public_message})

    @app.exception_handler(PizzaAPIError)
    async def api_error_handler(request: Request, exc: PizzaAPIError) -> JSONResponse:
        content = {"detail": exc.message}
        if exc.errors:
            content["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=content)

    app.include_router(v1_router, prefix=settings.api_prefix)

    # Uploaded images are served as static files keyed by file name.
    # The directory is created in the startup handler.
    app.mount(
        settings.uploads_url,
        StaticFiles(directory=str(settings.upload_path), check_dir=False),
        name="uploads",
    )

    @app.on_event("startup")
    async def startup_event() -> None:
        build_services(app, settings)
        logger.info(
            "Using data file %s and upload directory %s",
            settings.data_path,
            settings.upload_path,
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
