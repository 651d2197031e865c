"""Utility functions for mapping domain exceptions to HTTP responses."""

from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_STATUS_MAPPING
from ..exceptions import DomainError

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Failed to process the request"


def status_for(error: DomainError) -> int:
    """Return the HTTP status code for a domain exception."""
    for exception_class, status_code in EXCEPTION_STATUS_MAPPING.items():
        if isinstance(error, exception_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(error: DomainError) -> Dict[str, Any]:
    """Build the structured error payload shared by every endpoint."""
    return {
        "error": error.message,
        "code": error.code,
        "details": [detail.to_dict() for detail in error.details],
    }


def error_response(error: DomainError) -> JSONResponse:
    return JSONResponse(status_code=status_for(error), content=error_body(error))


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for domain and unexpected exceptions."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Convert domain exceptions to appropriate HTTP responses."""
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected: [{exc.code}] {exc.message}")
        return JSONResponse(status_code=status_code, content=error_body(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Render anything that escaped the domain layer as a generic 500."""
        logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": UNEXPECTED_ERROR_MESSAGE, "code": DomainError.code, "details": []},
        )
