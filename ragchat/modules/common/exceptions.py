"""Domain exception classes for retrieval, embedding and storage errors.

Every class carries a ``code`` that ends up in API error bodies so callers can
branch on the category without parsing messages.
"""

from typing import List, Optional

from .result import FieldError


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    code = "internal_error"

    def __init__(self, message: str, *, details: Optional[List[FieldError]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class InputValidationError(DomainError):
    """Raised when request input fails field validation."""

    code = "validation_error"

    def __init__(self, errors: List[FieldError], message: str = "Validation failed"):
        super().__init__(message, details=errors)
        self.errors = errors


class ConfigurationError(DomainError):
    """Raised when a required setting (API key, connection string) is missing."""

    code = "configuration_error"


class EmbeddingProviderError(DomainError):
    """Raised when the embedding or chat provider fails for an unclassified reason."""

    code = "provider_error"


class ProviderQuotaError(EmbeddingProviderError):
    """Raised when the provider rejects a call because quota or rate limits are exhausted."""

    code = "provider_quota_exceeded"


class ProviderAuthenticationError(EmbeddingProviderError):
    """Raised when the provider rejects the configured credentials."""

    code = "provider_authentication_failed"


class ProviderUnavailableError(EmbeddingProviderError):
    """Raised when the provider cannot be reached or does not answer in time."""

    code = "provider_unavailable"


class StorageError(DomainError):
    """Base class for vector store failures."""

    code = "storage_error"


class SchemaMissingError(StorageError):
    """Raised when the chunk table does not exist; the operator must run the setup."""

    code = "schema_missing"


class StorageUnavailableError(StorageError):
    """Raised when the database cannot be reached or a query times out."""

    code = "storage_unavailable"


class DimensionMismatchError(StorageError):
    """Raised when a vector's length differs from the configured embedding dimension."""

    code = "dimension_mismatch"

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Embedding dimension mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
