"""
FastAPI application for Activity Log.

The Notion client is built once in the lifespan handler and shared by
every request through `app.state`. Tests pass their own storage to
`create_app` instead.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from activity_log import __version__
from activity_log.api import activities
from activity_log.audit.logger import (
    AuditLogger,
    configure_logging,
    create_correlation_id,
    get_logger,
)
from activity_log.config import get_settings
from activity_log.services.storage import (
    ActivityStorageInterface,
    NotionActivityStorage,
    NotionClient,
)


logger = get_logger(__name__)


def create_app(storage: Optional[ActivityStorageInterface] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        storage: Storage to use. If None, a Notion-backed storage is
                 created from settings when the app starts.
    """
    app_settings = get_settings().app
    configure_logging(
        level=app_settings.log_level,
        json=app_settings.log_json and not app_settings.debug_mode,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client: Optional[NotionClient] = None
        if storage is None:
            client = NotionClient(get_settings().notion)
            app.state.storage = NotionActivityStorage(client)
        logger.info(
            "api_started",
            environment=app_settings.app_environment,
            storage=type(app.state.storage).__name__,
        )
        try:
            yield
        finally:
            if client is not None:
                await client.aclose()
            logger.info("api_stopped")

    app = FastAPI(title="Activity Log API", version=__version__, lifespan=lifespan)
    app.state.storage = storage
    app.state.audit_logger = AuditLogger()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=list(activities.ALLOWED_METHODS),
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(create_correlation_id())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(StarletteHTTPException)
    async def activities_method_not_allowed(request: Request, exc: StarletteHTTPException):
        # Methods the route does not register are rejected by the router
        if exc.status_code == 405 and request.url.path == activities.ACTIVITIES_PATH:
            return activities.method_not_allowed(request.method)
        return await http_exception_handler(request, exc)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "version": __version__}

    app.include_router(activities.router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings().app
    uvicorn.run(
        "activity_log.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
