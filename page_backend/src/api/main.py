from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logging_config import setup_logging
from .repositories import InMemoryPageStore, PageRepository, get_store
from .routers import pages as pages_router
from .routers import queries as queries_router
from .routers.graphql_api import create_graphql_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "pages",
        "description": "Create, read, replace and delete pages.",
    },
    {
        "name": "queries",
        "description": "Look up pages by tag or by due date.",
    },
]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    logger.warning("validation error on %s", request.url.path, extra={"path": request.url.path})
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


def health_check(store: PageRepository = Depends(get_store)):
    """
    Health check endpoint.

    Returns:
        A JSON object indicating service health and the number of stored pages.
    """
    return {"message": "Healthy", "pages": store.count()}


# PUBLIC_INTERFACE
def create_app(store: Optional[PageRepository] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: The page store the app serves; a fresh InMemoryPageStore when omitted.
        settings: Settings to use; loaded from the environment when omitted.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Page Backend",
        description="In-memory page store served over REST and GraphQL.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.store = store if store is not None else InMemoryPageStore()
    app.state.settings = settings

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_api_route("/", health_check, methods=["GET"], summary="Health Check", tags=["health"])

    app.include_router(pages_router.router)
    app.include_router(queries_router.router)
    if settings.enable_graphql:
        app.include_router(create_graphql_router(), prefix="/graphql", include_in_schema=False)

    return app


app = create_app()


# PUBLIC_INTERFACE
def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = app.state.settings
    logger.info("listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
