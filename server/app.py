"""FastAPI web server for the research group website."""
from __future__ import annotations

import logging
import sqlite3
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from labsite.config import Settings, get_settings
from labsite.db.store import Store
from labsite.errors import InvalidDocumentError, RecordNotFoundError
from labsite.utils.logging import configure_logging
from server.routes import ROUTERS

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # drop the leading "body"/"query"/"path" segment
        loc = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        message = _validation_message(exc)
        logger.info(f"{request.method} {request.url.path} rejected: {message}")
        return _error(400, message)

    @app.exception_handler(RecordNotFoundError)
    async def record_not_found(request: Request, exc: RecordNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(sqlite3.IntegrityError)
    async def integrity_error(request: Request, exc: sqlite3.IntegrityError):
        logger.warning(f"{request.method} {request.url.path} constraint violation: {exc}")
        return _error(400, "Constraint violation")

    @app.exception_handler(InvalidDocumentError)
    async def invalid_document(request: Request, exc: InvalidDocumentError):
        logger.error(f"{request.method} {request.url.path}: {exc}")
        return _error(500, "Stored data could not be read")

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return _error(500, "Internal server error")


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Build the application around an explicitly constructed ``Store``."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    store = store or Store.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Server started - DB: {store.db.path}")
        yield
        store.close()
        logger.info("Server shutting down")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Content API for the research group website",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _install_error_handlers(app)

    @app.get("/api/health")
    async def health():
        return {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "version": settings.APP_VERSION,
        }

    for router in ROUTERS:
        app.include_router(router)
    return app
