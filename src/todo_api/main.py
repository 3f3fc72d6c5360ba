from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import StorageError, TodoError
from .handler import TodoHandler
from .logging_config import setup_logging
from .repositories import Repository, get_repository
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "List, create, complete and delete Todo items.",
    },
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    When `repository` is given it is used as-is (and left open on shutdown);
    otherwise the lifespan builds one from settings at startup and closes it
    on shutdown. Failing to reach the database at startup is fatal: the error
    is logged and re-raised so the server refuses to start.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = repository is None
        if owned:
            try:
                repo = get_repository(settings)
            except StorageError as exc:
                logger.critical("Cannot connect to MongoDB at startup: %s", exc.message)
                raise
        else:
            repo = repository
        logger.info("Todo API using %s backend", repo.backend_name)
        app.state.todo_handler = TodoHandler(repo)
        try:
            yield
        finally:
            if owned:
                repo.close()

    app = FastAPI(
        title="Todo API",
        description="CRUD API for todo items stored in a MongoDB collection.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TodoError)
    async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
        """
        Render domain errors as {"error": <kind>, "message": <text>}.
        """
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for undecodable requests.

        Response format:
            {
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": [... pydantic/fastapi error details ...]
            }
        """
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check(request: Request):
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        handler: Optional[TodoHandler] = getattr(request.app.state, "todo_handler", None)
        backend = handler.repository.backend_name if handler else settings.persistence_backend
        return {"message": "Healthy", "backend": backend}

    app.include_router(todos_router.router)
    return app


app = create_app()


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the module-level app with uvicorn on HOST:PORT."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
