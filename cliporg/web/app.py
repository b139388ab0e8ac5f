"""
Application FastAPI de ClipOrg.

Initialise l'application web avec le Container DI, monte les routes et
convertit les erreurs fatales de reconciliation en reponses HTTP :
- InvalidRootError -> 400
- RootNotFoundError -> 404
- SessionStateError -> 409
- CatalogUnavailableError -> 503
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..container import Container
from ..core.errors import (
    CatalogUnavailableError,
    InvalidRootError,
    RootNotFoundError,
    SessionStateError,
)
from .routes.settings import router as settings_router
from .routes.sync import router as sync_router

_ERROR_STATUS = {
    InvalidRootError: 400,
    RootNotFoundError: 404,
    SessionStateError: 409,
    CatalogUnavailableError: 503,
}


async def _error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = next(
        code for error_type, code in _ERROR_STATUS.items() if isinstance(exc, error_type)
    )
    logger.warning(
        "{method} {path} -> {status}: {error}",
        method=request.method,
        path=request.url.path,
        status=status_code,
        error=str(exc),
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Construit l'application (un container peut etre fourni, ex: tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au démarrage."""
        app_container = container or Container()
        app_container.database.init()
        app.state.container = app_container
        yield

    app = FastAPI(title="ClipOrg", version=__version__, lifespan=lifespan)

    for error_type in _ERROR_STATUS:
        app.add_exception_handler(error_type, _error_handler)

    # Routes
    app.include_router(sync_router)
    app.include_router(settings_router)
    return app


app = create_app()
