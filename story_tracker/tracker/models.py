"""Tracker tree models.

The tracker is a user-defined tree: sections hold optional section-level
fields and subsections, subsections hold fields. Every list is always
present; missing or null lists are normalized to empty on validation.
"""

from collections.abc import Iterator
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from story_tracker.tracker.enums import FieldType

FieldValue = bool | int | float | str


def generate_id(prefix: str = "item") -> str:
    """Generate a unique id for a tracker node."""
    return f"{prefix}_{uuid4().hex}"


def _empty_list_if_missing(value: Any) -> Any:
    return [] if value is None else value


class TrackerField(BaseModel):
    """A single tracked value and the instruction for updating it."""

    model_config = ConfigDict(frozen=False, validate_assignment=True, extra="ignore")

    id: str = Field(default_factory=lambda: generate_id("field"), description="Unique identifier")
    name: str = Field(..., description="Display name, also the reconciliation key")
    value: FieldValue = Field(default="", description="Current state")
    prompt: str = Field(default="", description="Instruction shown to the model")
    type: FieldType = Field(default=FieldType.TEXT, description="Value type")
    enabled: bool = Field(default=True, description="Whether the field is shown to the model")

    @field_validator("value", "prompt", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class TrackerSubsection(BaseModel):
    """A named group of fields inside a section."""

    model_config = ConfigDict(frozen=False, validate_assignment=True, extra="ignore")

    id: str = Field(
        default_factory=lambda: generate_id("subsection"), description="Unique identifier"
    )
    name: str = Field(..., description="Display name, also the reconciliation key")
    fields: list[TrackerField] = Field(default_factory=list, description="Ordered fields")
    collapsed: bool = Field(default=False, description="UI collapse state")

    @field_validator("fields", mode="before")
    @classmethod
    def _normalize_fields(cls, value: Any) -> Any:
        return _empty_list_if_missing(value)


class TrackerSection(BaseModel):
    """A top-level tracker section."""

    model_config = ConfigDict(frozen=False, validate_assignment=True, extra="ignore")

    id: str = Field(default_factory=lambda: generate_id("section"), description="Unique identifier")
    name: str = Field(..., description="Display name, also the reconciliation key")
    fields: list[TrackerField] = Field(
        default_factory=list, description="Section-level fields"
    )
    subsections: list[TrackerSubsection] = Field(
        default_factory=list, description="Ordered subsections"
    )
    collapsed: bool = Field(default=False, description="UI collapse state")

    @field_validator("fields", "subsections", mode="before")
    @classmethod
    def _normalize_lists(cls, value: Any) -> Any:
        return _empty_list_if_missing(value)


class TrackerData(BaseModel):
    """Root of the tracker tree."""

    model_config = ConfigDict(frozen=False, validate_assignment=True, extra="ignore")

    sections: list[TrackerSection] = Field(default_factory=list, description="Ordered sections")

    @field_validator("sections", mode="before")
    @classmethod
    def _normalize_sections(cls, value: Any) -> Any:
        return _empty_list_if_missing(value)

    def iter_fields(self) -> Iterator[TrackerField]:
        """Yield every field in the tree, section-level fields first per section."""
        for section in self.sections:
            yield from section.fields
            for subsection in section.subsections:
                yield from subsection.fields
