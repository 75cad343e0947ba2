"""
Main entrypoint for the Audio Library API.

This module assembles the FastAPI application, sets up logging,
installs the error handler and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn audio_library_api.app.main:app --reload

or with ``python -m audio_library_api``.

The SQLite store is opened when the application starts and closed when
it shuts down; in between the ``AudioService`` built on top of it is
available as ``app.state.audio_service``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.assets import DefaultImageProvider
from .core.config import Settings, get_database_path, resolve_path, settings as default_settings
from .core.db import AudioStore
from .core.errors import AudioServiceError
from .core.logging_config import setup_logging
from .services.audio_service import AudioService

logger = logging.getLogger(__name__)


async def audio_service_error_handler(request: Request, exc: AudioServiceError) -> JSONResponse:
    """Render service errors as ``{"error": message}``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


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

    # Initialise logging before anything else so that the lifespan and
    # request handlers can log.
    setup_logging(settings.log_level, settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store = AudioStore(get_database_path(settings))
        await store.open()
        app.state.audio_service = AudioService(
            store,
            DefaultImageProvider(resolve_path(settings.default_image_path)),
        )
        try:
            yield
        finally:
            await store.close()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.add_exception_handler(AudioServiceError, audio_service_error_handler)
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
