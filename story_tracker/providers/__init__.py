"""External AI services used to produce tracker updates."""

from story_tracker.providers.llm import LLMProvider, MockLLMProvider

__all__ = [
    "LLMProvider",
    "MockLLMProvider",
]
