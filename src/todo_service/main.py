from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import ErrorKind, TodoServiceError
from .logging_setup import setup_logging
from .repositories import TodoStore, open_store
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .utils import Clock

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "CRUD operations for Todo items with status filtering and pagination.",
    },
]

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_FAILURE: 500,
    ErrorKind.SERIALIZATION_FAILURE: 500,
}


async def service_error_handler(request: Request, exc: TodoServiceError) -> JSONResponse:
    """
    Map a TodoServiceError to its HTTP status. Only the client-safe message is sent.
    """
    return JSONResponse(
        status_code=_STATUS_BY_KIND[exc.kind],
        content={"error": exc.kind.value, "detail": exc.message},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent 400 JSON structure for request validation errors.

    Response format:
        {
            "error": "validation",
            "message": "Request validation failed",
            "detail": [{"loc": [...], "msg": "...", "type": "..."}, ...]
        }
    """
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={
            "error": ErrorKind.VALIDATION.value,
            "message": "Request validation failed",
            "detail": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
                for err in exc.errors()
            ],
        },
    )


# PUBLIC_INTERFACE
def create_app(
    store: Optional[TodoStore] = None,
    settings: Optional[Settings] = None,
    clock: Clock = time.time,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Store to serve from. When omitted, the lifespan opens the store
            described by ``settings`` at startup.
        settings: Application settings; read from the environment when omitted.
        clock: Time source for created/updated stamps.

    The store is closed exactly once when the application shuts down.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            app.state.store = store
        else:
            try:
                app.state.store = open_store(settings)
            except Exception:
                logger.critical("Could not open %s store, aborting startup", settings.persistence_backend)
                raise
        logger.info("Todo store ready (backend=%s)", settings.persistence_backend)
        try:
            yield
        finally:
            app.state.store.close()
            logger.info("Todo store released")

    app = FastAPI(
        title="Todo Service",
        description="Resource API for Todo records backed by a Cassandra/ScyllaDB store.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.clock = clock
    app.state.settings = settings

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TodoServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": settings.persistence_backend}

    app.include_router(todos_router.router)
    return app


app = create_app()
