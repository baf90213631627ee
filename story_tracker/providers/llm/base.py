"""LLM provider interface, data models and error types.

This module provides the types the tracker updater talks to:
- LLMMessage: Input message format
- LLMResponse: Output response format
- TokenUsage: Token counting
- LLMProvider: Abstract provider interface
- Error types for different failure modes
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from story_tracker.exceptions import StoryTrackerError


class LLMMessage(BaseModel):
    """A message in a conversation."""

    role: str = Field(..., description="Role: system, user, or assistant")
    content: str = Field(..., description="Message content")


class TokenUsage(BaseModel):
    """Token usage statistics."""

    prompt_tokens: int = Field(..., description="Tokens in prompt")
    completion_tokens: int = Field(..., description="Tokens in completion")
    total_tokens: int = Field(..., description="Total tokens used")


class LLMResponse(BaseModel):
    """Response from an LLM call."""

    content: str = Field(..., description="Generated text")
    model: str = Field(..., description="Model used")
    finish_reason: str | None = Field(
        default=None, description="Why generation stopped"
    )
    usage: TokenUsage | None = Field(default=None, description="Token usage stats")


class LLMProvider(ABC):
    """Abstract interface for text generation backends."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def generate(
        self,
        messages: list[LLMMessage],
        *,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.3,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a completion for a message list.

        Raises:
            ProviderError: On any backend failure
        """
        pass


# ============================================================================
# Error Types
# ============================================================================


class ProviderError(StoryTrackerError):
    """Base exception for LLM provider errors."""

    pass


class AuthenticationError(ProviderError):
    """Invalid or missing API key."""

    pass


class RateLimitError(ProviderError):
    """Rate limit exceeded."""

    pass


class ModelError(ProviderError):
    """Model not found or unavailable."""

    pass
