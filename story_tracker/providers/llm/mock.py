"""Mock LLM provider for testing."""

import asyncio
from typing import Any

from story_tracker.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TokenUsage,
)


class MockLLMProvider(LLMProvider):
    """Mock LLM provider for testing.

    Returns configurable responses without making actual API calls. A
    latency can be set to hold a call open across an await, and an error to
    make every call fail.
    """

    def __init__(
        self,
        default_response: str = "Mock response",
        default_model: str = "mock-model",
        responses: dict[str, str] | None = None,
        latency: float = 0.0,
        error: Exception | None = None,
    ):
        """Initialize mock provider.

        Args:
            default_response: Response to return when no match found
            default_model: Model name to report
            responses: Dict mapping last message content to responses
            latency: Seconds to sleep before answering
            error: Exception raised by every call when set
        """
        self._default_response = default_response
        self._default_model = default_model
        self._responses = responses or {}
        self._latency = latency
        self._error = error
        self._call_history: list[dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        """Return the provider name."""
        return "mock"

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Return history of calls for testing assertions."""
        return self._call_history

    def clear_history(self) -> None:
        """Clear call history."""
        self._call_history.clear()

    def set_response(self, trigger: str, response: str) -> None:
        """Set a response for a specific message content."""
        self._responses[trigger] = response

    def set_default_response(self, response: str) -> None:
        self._default_response = response

    def set_error(self, error: Exception | None) -> None:
        self._error = error

    async def generate(
        self,
        messages: list[LLMMessage],
        *,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.3,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate mock response."""
        self._call_history.append({
            "messages": messages,
            "model": model or self._default_model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "kwargs": kwargs,
        })

        if self._latency:
            await asyncio.sleep(self._latency)

        if self._error is not None:
            raise self._error

        content = self._default_response
        if messages:
            last_message = messages[-1].content
            if last_message in self._responses:
                content = self._responses[last_message]

        prompt_tokens = sum(len(m.content) // 4 for m in messages)
        completion_tokens = len(content) // 4

        return LLMResponse(
            content=content,
            model=model or self._default_model,
            finish_reason="stop",
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )
