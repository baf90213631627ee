"""Preset models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from story_tracker.tracker.factory import ensure_tracker_data
from story_tracker.tracker.models import TrackerData


class Preset(BaseModel):
    """A named tracker layout with its system prompt.

    Exported files use camelCase keys (`systemPrompt`, `trackerData`,
    `exportedAt`).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., description="Preset name")
    system_prompt: str = Field(default="", alias="systemPrompt", description="Instructions")
    tracker_data: TrackerData = Field(
        default_factory=TrackerData, alias="trackerData", description="Tracker layout"
    )
    exported_at: datetime | None = Field(
        default=None, alias="exportedAt", description="Export timestamp"
    )

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("system_prompt", mode="before")
    @classmethod
    def _non_string_prompt_to_empty(cls, value: Any) -> Any:
        return value if isinstance(value, str) else ""

    @field_validator("tracker_data", mode="before")
    @classmethod
    def _repair_tracker_data(cls, value: Any) -> TrackerData:
        return ensure_tracker_data(value)
