"""Common constants used across the application."""

from typing import Dict, Type

from fastapi import status

from .exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    DomainError,
    EmbeddingProviderError,
    InputValidationError,
    ProviderAuthenticationError,
    ProviderQuotaError,
    ProviderUnavailableError,
    SchemaMissingError,
    StorageError,
    StorageUnavailableError,
)

# Ordered from most to least specific; the first isinstance match wins.
EXCEPTION_STATUS_MAPPING: Dict[Type[DomainError], int] = {
    InputValidationError: status.HTTP_400_BAD_REQUEST,
    ProviderQuotaError: status.HTTP_429_TOO_MANY_REQUESTS,
    ProviderAuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ProviderUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    EmbeddingProviderError: status.HTTP_502_BAD_GATEWAY,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    SchemaMissingError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    DimensionMismatchError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

MAX_CONTENT_LENGTH = 10_000
MAX_SOURCE_LENGTH = 255
