"""Factories, normalization and lookup helpers for the tracker tree."""

import json
from collections.abc import Mapping, MutableMapping
from typing import Any

from pydantic import ValidationError

from story_tracker.observability.logging import get_logger
from story_tracker.tracker.enums import FieldType
from story_tracker.tracker.models import (
    FieldValue,
    TrackerData,
    TrackerField,
    TrackerSection,
    TrackerSubsection,
    generate_id,
)

logger = get_logger(__name__)

TrackerLike = TrackerData | Mapping[str, Any] | None

_FIELD_TYPES = tuple(t.value for t in FieldType)


def create_section(name: str = "New Section") -> TrackerSection:
    """Create an empty section with a fresh id."""
    return TrackerSection(id=generate_id("section"), name=name)


def create_subsection(name: str = "New Subsection") -> TrackerSubsection:
    """Create an empty subsection with a fresh id."""
    return TrackerSubsection(id=generate_id("subsection"), name=name)


def create_field(
    name: str = "New Field",
    prompt: str = "",
    type: FieldType = FieldType.TEXT,
    value: FieldValue = "",
) -> TrackerField:
    """Create an enabled field with a fresh id."""
    return TrackerField(
        id=generate_id("field"),
        name=name,
        value=value,
        prompt=prompt,
        type=type,
        enabled=True,
    )


def clone_tracker_data(data: TrackerData | None) -> TrackerData | None:
    """Deep copy a tracker tree. None stays None."""
    if data is None:
        return None
    return data.model_copy(deep=True)


def _repair_list(node: MutableMapping[str, Any], key: str) -> list[Any]:
    """Ensure node[key] is a list of mappings, dropping anything else."""
    value = node.get(key)
    if not isinstance(value, list):
        value = []
        node[key] = value
    elif any(not isinstance(item, MutableMapping) for item in value):
        value[:] = [item for item in value if isinstance(item, MutableMapping)]
    return value


def _repair_node(node: MutableMapping[str, Any], prefix: str, default_name: str) -> None:
    if not isinstance(node.get("id"), str) or not node["id"]:
        node["id"] = generate_id(prefix)
    if not isinstance(node.get("name"), str):
        node["name"] = default_name


def _repair_flag(node: MutableMapping[str, Any], key: str, default: bool) -> None:
    value = node.get(key, default)
    if isinstance(value, bool):
        return
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        node[key] = value.strip().lower() == "true"
    else:
        node[key] = default


def _repair_field(field: MutableMapping[str, Any]) -> None:
    _repair_node(field, "field", "New Field")
    _repair_flag(field, "enabled", True)

    if field.get("type", FieldType.TEXT.value) not in _FIELD_TYPES:
        field["type"] = FieldType.TEXT.value

    prompt = field.get("prompt")
    if prompt is not None and not isinstance(prompt, str):
        field["prompt"] = str(prompt)

    value = field.get("value")
    if isinstance(value, (Mapping, list)):
        field["value"] = json.dumps(value, ensure_ascii=False)
    elif value is not None and not isinstance(value, (bool, int, float, str)):
        field["value"] = str(value)


def _repair_raw_tree(tree: MutableMapping[str, Any]) -> None:
    for section in _repair_list(tree, "sections"):
        _repair_node(section, "section", "New Section")
        _repair_flag(section, "collapsed", False)
        for field in _repair_list(section, "fields"):
            _repair_field(field)
        for subsection in _repair_list(section, "subsections"):
            _repair_node(subsection, "subsection", "New Subsection")
            _repair_flag(subsection, "collapsed", False)
            for field in _repair_list(subsection, "fields"):
                _repair_field(field)


def ensure_tracker_data(tree: TrackerLike) -> TrackerData:
    """Normalize a tracker tree so every list is present.

    Plain mappings (persisted data) are repaired in place: missing
    `sections`/`fields`/`subsections` lists become empty lists, missing ids
    are assigned, non-object entries are dropped, and bad field scalars
    fall back to their defaults. A validated model is returned. Repeated
    calls are no-ops.

    Never raises. A section that still fails validation is dropped on its
    own; unusable input yields an empty tree.
    """
    if tree is None:
        return TrackerData()

    if isinstance(tree, TrackerData):
        return tree

    if not isinstance(tree, MutableMapping):
        logger.warning("tracker_data_unrecognized", value_type=type(tree).__name__)
        return TrackerData()

    _repair_raw_tree(tree)
    sections: list[TrackerSection] = []
    for raw_section in tree["sections"]:
        try:
            sections.append(TrackerSection.model_validate(raw_section))
        except ValidationError as e:
            logger.error(
                "tracker_section_invalid",
                section=raw_section.get("name"),
                error_count=e.error_count(),
                errors=str(e),
            )
    return TrackerData(sections=sections)


def find_section_by_id(data: TrackerLike, section_id: str) -> TrackerSection | None:
    """Find a section by id, or None."""
    for section in ensure_tracker_data(data).sections:
        if section.id == section_id:
            return section
    return None


def find_subsection_by_id(data: TrackerLike, subsection_id: str) -> TrackerSubsection | None:
    """Find a subsection by id across all sections, or None."""
    for section in ensure_tracker_data(data).sections:
        for subsection in section.subsections:
            if subsection.id == subsection_id:
                return subsection
    return None


def find_field_by_id(data: TrackerLike, field_id: str) -> TrackerField | None:
    """Find a section-level or subsection field by id, or None."""
    for field in ensure_tracker_data(data).iter_fields():
        if field.id == field_id:
            return field
    return None


def remove_section(data: TrackerData, section_id: str) -> bool:
    """Remove a section by id. Returns whether anything was removed."""
    for index, section in enumerate(data.sections):
        if section.id == section_id:
            del data.sections[index]
            return True
    return False


def remove_subsection(data: TrackerData, subsection_id: str) -> bool:
    """Remove a subsection by id. Returns whether anything was removed."""
    for section in data.sections:
        for index, subsection in enumerate(section.subsections):
            if subsection.id == subsection_id:
                del section.subsections[index]
                return True
    return False


def remove_field(data: TrackerData, field_id: str) -> bool:
    """Remove a field by id. Returns whether anything was removed."""
    for section in data.sections:
        containers = [section.fields] + [sub.fields for sub in section.subsections]
        for fields in containers:
            for index, field in enumerate(fields):
                if field.id == field_id:
                    del fields[index]
                    return True
    return False
