"""LLM providers for text generation.

The tracker only needs `LLMProvider.generate`; hosts plug in their own
backend. MockLLMProvider serves tests and offline development.
"""

from story_tracker.providers.llm.base import (
    AuthenticationError,
    LLMMessage,
    LLMProvider,
    LLMResponse,
    ModelError,
    ProviderError,
    RateLimitError,
    TokenUsage,
)
from story_tracker.providers.llm.mock import MockLLMProvider

__all__ = [
    "AuthenticationError",
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "MockLLMProvider",
    "ModelError",
    "ProviderError",
    "RateLimitError",
    "TokenUsage",
]
