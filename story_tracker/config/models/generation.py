"""Tracker generation call configuration."""

from pydantic import BaseModel, Field


class GenerationConfig(BaseModel):
    """Parameters for the dedicated tracker-update model call."""

    model: str | None = Field(default=None, description="Model override, provider default if unset")
    max_tokens: int = Field(default=2048, gt=0, description="Completion token limit")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
