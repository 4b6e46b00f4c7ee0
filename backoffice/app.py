"""
FastAPI application entry point for the back office API.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backoffice.admin_routes import router as admin_router
from backoffice.config import get_settings
from backoffice.content import NotFoundError, ValidationError
from backoffice.ordering import OrderStoreError
from backoffice.routes import router
from backoffice.storage import StorageError

logger = logging.getLogger(__name__)


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app() -> FastAPI:
    settings = get_settings()
    if settings.secret_key == "change-me":
        logger.warning("SECRET_KEY is not set; session tokens use the default key")
    app = FastAPI(title="Back Office API", version="0.1.0")
    app.add_exception_handler(ValidationError, _error_handler(400))
    app.add_exception_handler(NotFoundError, _error_handler(404))
    app.add_exception_handler(StorageError, _error_handler(502))
    app.add_exception_handler(OrderStoreError, _error_handler(503))
    app.include_router(router, prefix=settings.api_prefix)
    app.include_router(admin_router, prefix=settings.api_prefix)
    return app


app = create_app()
