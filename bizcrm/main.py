"""Application entrypoint for the bizcrm API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bizcrm.api.v1 import get_api_router
from bizcrm.core.config import get_config
from bizcrm.core.exceptions import DatabaseError
from bizcrm.core.startup import bootstrap
from bizcrm.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    bootstrap()
    yield


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, lifespan=lifespan)
    app.include_router(get_api_router())

    @app.exception_handler(DatabaseError)
    def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
        logger.error("api.database_error path=%s", request.url.path, extra={"event": "api.database_error"})
        body = ErrorEnvelope(error_code="database_error", detail="Database operation failed.")
        return JSONResponse(status_code=500, content=body.model_dump())

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn bizcrm.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    cfg = get_config()
    uvicorn.run(app, host=cfg.API_HOST, port=cfg.API_PORT)
