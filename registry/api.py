"""
FastAPI app entry point. Keep as `uvicorn registry.api:app`.

The AssetStore is owned by the app (`app.state.store`): opened on startup
unless one was injected, closed on shutdown.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .db import get_db_path
from .logs import setup_logging
from .services.asset_store import AssetStore, DataStore
from .version import APP_NAME, VERSION

logger = logging.getLogger(__name__)


def validation_detail(exc: RequestValidationError) -> str:
    """`body.icoAmount: Input should be a finite number` style summary of pydantic errors."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def create_app(store: DataStore | None = None) -> FastAPI:
    app = FastAPI(title=APP_NAME, version=VERSION)
    app.state.store = store

    # malformed requests are caller errors like any other: 400, not 422
    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError):
        detail = validation_detail(exc)
        logger.info("rejected %s %s: %s", request.method, request.url.path, detail)
        return JSONResponse(status_code=400, content={"detail": detail})

    @app.on_event("startup")
    def on_startup():
        setup_logging()
        if app.state.store is None:
            path = get_db_path()
            app.state.store = AssetStore.open(path)
            logger.info("asset store opened at %s", path)

    @app.on_event("shutdown")
    def on_shutdown():
        if app.state.store is not None:
            app.state.store.close()
            app.state.store = None
            logger.info("asset store closed")

    from .routes import base as base_routes
    from .routes import assets as assets_routes

    app.include_router(base_routes.router)
    app.include_router(assets_routes.router)
    return app


app = create_app()
