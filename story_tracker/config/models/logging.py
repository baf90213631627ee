"""Logging configuration."""

from typing import Literal

from pydantic import BaseModel, Field

LogFormat = Literal["json", "console"]


class LoggingConfig(BaseModel):
    """Structured logging output options."""

    format: LogFormat = Field(default="json", description="Renderer: json or console")
    preview_length: int = Field(
        default=200,
        ge=16,
        description="Maximum length of string values (model output previews) in log events",
    )
