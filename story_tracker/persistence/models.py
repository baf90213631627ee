"""Persisted settings blob."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from story_tracker.config.models.tracker import TrackerDefaultsConfig
from story_tracker.inventory.migration import normalize_inventory
from story_tracker.inventory.models import InventoryV2
from story_tracker.tracker.enums import GenerationMode
from story_tracker.tracker.factory import ensure_tracker_data
from story_tracker.tracker.models import TrackerData


class TrackerSettings(BaseModel):
    """Tracker settings as stored by the host.

    Keys are camelCase on the wire (`autoUpdate`, `trackerData`). Unknown
    keys from other versions are ignored, and the tracker tree and
    inventory are repaired on every load.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Whether the tracker runs at all")
    auto_update: bool = Field(default=True, description="Update after each sent message")
    update_depth: int = Field(default=4, ge=0, le=100, description="History messages per update")
    generation_mode: GenerationMode = Field(
        default=GenerationMode.SEPARATE, description="Where tracker updates come from"
    )
    system_prompt: str = Field(default="", description="Custom update instructions")
    current_preset: str | None = Field(default=None, description="Last loaded preset name")
    tracker_data: TrackerData = Field(
        default_factory=TrackerData, description="Live tracker tree"
    )
    inventory: InventoryV2 = Field(default_factory=InventoryV2, description="Inventory")

    @field_validator("tracker_data", mode="before")
    @classmethod
    def _repair_tracker_data(cls, value: Any) -> TrackerData:
        return ensure_tracker_data(value)

    @field_validator("inventory", mode="before")
    @classmethod
    def _migrate_inventory(cls, value: Any) -> InventoryV2:
        return normalize_inventory(value)

    @field_validator("system_prompt", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_defaults(cls, defaults: TrackerDefaultsConfig) -> "TrackerSettings":
        """Build first-run settings from configuration."""
        return cls(
            enabled=defaults.enabled,
            auto_update=defaults.auto_update,
            update_depth=defaults.update_depth,
            generation_mode=defaults.generation_mode,
            system_prompt=defaults.system_prompt,
        )
