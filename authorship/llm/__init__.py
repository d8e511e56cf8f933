"""LLM provider abstraction layer."""

from .provider import (
    LLMProvider,
    LLMError,
    LLMRateLimitError,
    LLMTimeoutError,
    LLMResponseError,
    LLMCancelledError,
    get_provider,
    create_provider_from_config,
    register_provider,
)

# Import providers to register them
from .openrouter import OpenRouterProvider

__all__ = [
    "LLMProvider",
    "LLMError",
    "LLMRateLimitError",
    "LLMTimeoutError",
    "LLMResponseError",
    "LLMCancelledError",
    "get_provider",
    "create_provider_from_config",
    "register_provider",
    "OpenRouterProvider",
]
