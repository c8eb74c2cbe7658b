"""FastAPI application entrypoint."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import cast
from uuid import uuid4

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response

from ensembl_dictionary import __version__
from ensembl_dictionary.platform.config import get_settings
from ensembl_dictionary.platform.context import request_id_ctx
from ensembl_dictionary.platform.errors import (
    AppError,
    app_error_handler,
    http_exception_handler,
    validation_exception_handler,
)
from ensembl_dictionary.platform.logging import get_logger, setup_logging
from ensembl_dictionary.services.dictionary import (
    EnsemblDictionary,
    EnsemblDictionaryConfig,
)
from ensembl_dictionary.transport.http.routers import dictionary as dictionary_router
from ensembl_dictionary.transport.http.routers import health

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan handler."""
    setup_logging()
    dictionary: EnsemblDictionary = app.state.dictionary
    logger.info(
        "Starting Ensembl dictionary API",
        version=__version__,
        matches_url=dictionary.urls.matches_url,
    )

    yield

    logger.info("Shutting down Ensembl dictionary API")
    await dictionary.close()


def create_app(dictionary: EnsemblDictionary | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    :param dictionary: Dictionary to serve; built from settings when omitted.
    """
    settings = get_settings()

    app = FastAPI(
        title="Ensembl Dictionary API",
        description="Ensembl gene dictionary backed by EBI Search",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.api_docs_enabled else None,
        redoc_url="/redoc" if settings.api_docs_enabled else None,
    )
    app.state.dictionary = dictionary or EnsemblDictionary(
        EnsemblDictionaryConfig.from_settings(settings)
    )

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(
        request: StarletteRequest,
        call_next: Callable[[StarletteRequest], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request_id_ctx.set(request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    # Exception handlers
    app.add_exception_handler(
        AppError,
        cast(
            Callable[[StarletteRequest, Exception], Awaitable[Response]],
            app_error_handler,
        ),
    )
    app.add_exception_handler(
        HTTPException,
        cast(
            Callable[[StarletteRequest, Exception], Awaitable[Response]],
            http_exception_handler,
        ),
    )
    app.add_exception_handler(
        RequestValidationError,
        cast(
            Callable[[StarletteRequest, Exception], Awaitable[Response]],
            validation_exception_handler,
        ),
    )

    app.include_router(health.router)
    app.include_router(dictionary_router.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "ensembl_dictionary.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )
