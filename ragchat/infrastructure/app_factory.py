from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Dict, List, Optional

import anyio
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from ..modules.common.exceptions import DomainError, InputValidationError
from ..modules.common.result import FieldError
from ..modules.common.utils.error_handler import error_response, register_exception_handlers
from .config.settings import DatabaseSettings, EnvironmentOption, Settings, get_settings
from .container import ServiceContainer
from .database.session import create_tables, engine
from .logging import get_logger
from .storage.pgvector_store import translate_storage_errors

logger = get_logger(__name__)


async def set_threadpool_tokens(number_of_tokens: int = 100) -> None:
    """Configure the number of threadpool tokens for anyio."""
    limiter = anyio.to_thread.current_default_thread_limiter()
    limiter.total_tokens = number_of_tokens


def lifespan_factory(
    settings: Settings,
    create_tables_on_startup: bool = True,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Create the lifespan context for the app.

    On startup the schema is created when configured and a ``ServiceContainer`` is
    stored on ``app.state.container``. A database that is down at startup is
    logged, not fatal: requests report it until it comes back.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        await set_threadpool_tokens()

        if isinstance(settings, DatabaseSettings) and create_tables_on_startup:
            try:
                async with translate_storage_errors():
                    await create_tables()
            except DomainError as e:
                logger.error(f"Could not create tables on startup: {e.message}")

        container = ServiceContainer(settings)
        app.state.container = container
        try:
            yield
        finally:
            await container.aclose()
            await engine.dispose()

    return lifespan


def register_validation_handler(app: FastAPI) -> None:
    """Report request-body validation failures as 400 with field-level details."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = []
        for item in exc.errors():
            loc = [str(part) for part in item.get("loc", ()) if part != "body"]
            errors.append(FieldError(field=".".join(loc) or "body", message=item.get("msg", "Invalid value")))
        return error_response(InputValidationError(errors))


def create_application(
    router: APIRouter,
    settings: Optional[Settings] = None,
    lifespan: Optional[Callable[[FastAPI], AbstractAsyncContextManager[None]]] = None,
    create_tables_on_startup: Optional[bool] = None,
    enable_cors: Optional[bool] = None,
    cors_origins: Optional[List[str]] = None,
    enable_gzip: Optional[bool] = None,
    **kwargs: Any,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        router: The APIRouter containing the routes for the application
        settings: Application settings (uses get_settings() if None)
        lifespan: Lifespan context; defaults to ``lifespan_factory(settings)``.
        create_tables_on_startup: Defaults to settings.CREATE_TABLES_ON_STARTUP.
        enable_cors: Defaults to settings.CORS_ENABLED.
        cors_origins: Defaults to settings.CORS_ORIGINS_LIST.
        enable_gzip: Defaults to settings.GZIP_ENABLED.
        **kwargs: Passed to the FastAPI constructor (title, description, ...).
    """
    if settings is None:
        settings = get_settings()

    _create_tables_on_startup = (
        create_tables_on_startup if create_tables_on_startup is not None else settings.CREATE_TABLES_ON_STARTUP
    )
    _enable_cors = enable_cors if enable_cors is not None else settings.CORS_ENABLED
    _cors_origins = cors_origins if cors_origins is not None else settings.CORS_ORIGINS_LIST
    _enable_gzip = enable_gzip if enable_gzip is not None else settings.GZIP_ENABLED

    metadata: Dict[str, Any] = {
        "title": settings.APP_NAME,
        "description": settings.APP_DESCRIPTION,
        "version": settings.VERSION,
        "docs_url": settings.DOCS_URL,
        "redoc_url": settings.REDOC_URL,
        "openapi_url": settings.OPENAPI_URL,
    }
    metadata.update(kwargs)

    hide_docs = settings.ENVIRONMENT == EnvironmentOption.PRODUCTION and not settings.ENABLE_DOCS_IN_PRODUCTION
    if hide_docs:
        metadata.update({"docs_url": None, "redoc_url": None, "openapi_url": None})

    if lifespan is None:
        lifespan = lifespan_factory(settings, create_tables_on_startup=_create_tables_on_startup)

    application = FastAPI(lifespan=lifespan, **metadata)
    application.include_router(router)

    register_exception_handlers(application)
    register_validation_handler(application)

    if _enable_cors:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
            allow_methods=settings.CORS_ALLOW_METHODS.split(","),
            allow_headers=settings.CORS_ALLOW_HEADERS.split(","),
        )

    if _enable_gzip:
        application.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)

    return application
