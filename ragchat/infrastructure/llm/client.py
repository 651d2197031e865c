"""Shared ``AsyncOpenAI`` client for embeddings and chat completions."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import openai
from openai import AsyncOpenAI

from ...modules.common.exceptions import (
    ConfigurationError,
    EmbeddingProviderError,
    ProviderAuthenticationError,
    ProviderQuotaError,
    ProviderUnavailableError,
)
from ..config.settings import Settings


def create_openai_client(settings: Settings) -> AsyncOpenAI:
    """Build a client with per-call timeouts and no automatic retries.

    Raises:
        ConfigurationError: If ``OPENAI_API_KEY`` is not set.
    """
    if not settings.OPENAI_API_KEY:
        raise ConfigurationError("OpenAI API key not configured. Please set OPENAI_API_KEY environment variable.")

    return AsyncOpenAI(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL or None,
        timeout=settings.OPENAI_TIMEOUT,
        max_retries=settings.OPENAI_MAX_RETRIES,
    )


@asynccontextmanager
async def translate_provider_errors() -> AsyncIterator[None]:
    """Convert OpenAI SDK exceptions into provider domain errors.

    Order matters: ``APITimeoutError`` subclasses ``APIConnectionError`` and both
    subclass ``APIError``.
    """
    try:
        yield
    except openai.RateLimitError as e:
        if _error_code(e) == "insufficient_quota":
            raise ProviderQuotaError("OpenAI API quota exceeded. Please check your billing and usage.") from e
        raise ProviderQuotaError("OpenAI API rate limit reached. Please retry later.") from e
    except openai.AuthenticationError as e:
        raise ProviderAuthenticationError("Invalid OpenAI API key. Please check your configuration.") from e
    except openai.APITimeoutError as e:
        raise ProviderUnavailableError("OpenAI API request timed out.") from e
    except openai.APIConnectionError as e:
        raise ProviderUnavailableError("Could not reach the OpenAI API.") from e
    except openai.APIError as e:
        raise EmbeddingProviderError(f"OpenAI API error: {e.message}") from e


def _error_code(error: openai.APIStatusError) -> str | None:
    code = getattr(error, "code", None)
    if code:
        return code
    body = error.body if isinstance(error.body, dict) else {}
    inner = body.get("error", body)
    return inner.get("code") if isinstance(inner, dict) else None
