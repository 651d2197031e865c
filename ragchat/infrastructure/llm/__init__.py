"""OpenAI client construction and provider error translation."""

from .client import create_openai_client, translate_provider_errors

__all__ = ["create_openai_client", "translate_provider_errors"]
