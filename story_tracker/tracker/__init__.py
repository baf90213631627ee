"""Tracker domain: the typed section/subsection/field tree."""

from story_tracker.tracker.enums import FieldType, GenerationMode
from story_tracker.tracker.factory import (
    clone_tracker_data,
    create_field,
    create_section,
    create_subsection,
    ensure_tracker_data,
    find_field_by_id,
    find_section_by_id,
    find_subsection_by_id,
    remove_field,
    remove_section,
    remove_subsection,
)
from story_tracker.tracker.models import (
    FieldValue,
    TrackerData,
    TrackerField,
    TrackerSection,
    TrackerSubsection,
    generate_id,
)

__all__ = [
    "FieldType",
    "FieldValue",
    "GenerationMode",
    "TrackerData",
    "TrackerField",
    "TrackerSection",
    "TrackerSubsection",
    "clone_tracker_data",
    "create_field",
    "create_section",
    "create_subsection",
    "ensure_tracker_data",
    "find_field_by_id",
    "find_section_by_id",
    "find_subsection_by_id",
    "generate_id",
    "remove_field",
    "remove_section",
    "remove_subsection",
]
