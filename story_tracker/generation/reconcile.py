"""Reconciliation of a model payload against the tracker template.

The template (the live tracker) is the structural source of truth. The
payload only contributes values, matched by name at every level:

- a template node the payload does not restate is dropped from the result
- a payload node the template does not know is ignored
- only `value` is taken from the payload; ids, prompts, types and
  collapse state always come from the template

Models echo the tracker in several shapes. All of these are accepted:

    {"sections": [{"name": "Crew", "fields": {"Morale": {"prompt": "...", "value": "Hopeful"}}}]}
    {"tracker": {"sections": {"Crew": {"fields": {"Morale": "Hopeful"}}}}}
    {"sections": [{"name": "Crew", "fields": [{"name": "Morale", "value": "Hopeful"}]}]}
"""

import json
from collections.abc import Mapping
from typing import Any

from story_tracker.observability.logging import get_logger
from story_tracker.tracker.enums import FieldType
from story_tracker.tracker.factory import clone_tracker_data
from story_tracker.tracker.models import (
    TrackerData,
    TrackerField,
    TrackerSection,
    TrackerSubsection,
)

logger = get_logger(__name__)

PAYLOAD_WRAPPER_KEYS = ("tracker", "trackerData", "tracker_data")

_MISSING = object()


def _find_sections_container(payload: Any) -> Any:
    if not isinstance(payload, Mapping):
        return None

    sections = payload.get("sections")
    if isinstance(sections, (list, Mapping)):
        return sections

    for key in PAYLOAD_WRAPPER_KEYS:
        wrapped = payload.get(key)
        if isinstance(wrapped, Mapping):
            sections = wrapped.get("sections")
            if isinstance(sections, (list, Mapping)):
                return sections

    return None


def _index_by_name(container: Any) -> dict[str, Any]:
    """Map node name to payload entry for a list or mapping container.

    In a list the first entry with a given name wins.
    """
    if isinstance(container, Mapping):
        return {str(name): entry for name, entry in container.items()}

    index: dict[str, Any] = {}
    if isinstance(container, list):
        for entry in container:
            if isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
                index.setdefault(entry["name"], entry)
    return index


def _payload_value(entry: Any) -> Any:
    """Extract the echoed value of a field entry, or _MISSING."""
    if entry is None:
        return _MISSING
    if isinstance(entry, Mapping):
        if "value" not in entry or entry["value"] is None:
            return _MISSING
        return entry["value"]
    return entry


def _coerce_value(value: Any, field: TrackerField) -> Any:
    if isinstance(value, (Mapping, list)):
        return json.dumps(value, ensure_ascii=False)

    if isinstance(value, str):
        if field.type == FieldType.BOOLEAN:
            lowered = value.strip().lower()
            if lowered in ("true", "false"):
                return lowered == "true"
        elif field.type == FieldType.NUMBER:
            text = value.strip()
            try:
                return int(text)
            except ValueError:
                pass
            try:
                return float(text)
            except ValueError:
                pass

    return value


def _reconcile_fields(
    template_fields: list[TrackerField], payload_fields: Any
) -> list[TrackerField]:
    index = _index_by_name(payload_fields)
    result: list[TrackerField] = []

    for field in template_fields:
        if not field.enabled:
            # Disabled fields are never shown to the model, so they never come back
            result.append(field)
            continue

        value = _payload_value(index.get(field.name))
        if value is _MISSING:
            continue

        field.value = _coerce_value(value, field)
        result.append(field)

    return result


def _reconcile_subsection(
    template: TrackerSubsection, payload: Mapping[str, Any]
) -> TrackerSubsection:
    template.fields = _reconcile_fields(template.fields, payload.get("fields"))
    return template


def _reconcile_section(template: TrackerSection, payload: Mapping[str, Any]) -> TrackerSection:
    template.fields = _reconcile_fields(template.fields, payload.get("fields"))

    payload_subsections = _index_by_name(payload.get("subsections"))
    subsections: list[TrackerSubsection] = []
    for subsection in template.subsections:
        entry = payload_subsections.get(subsection.name)
        if not isinstance(entry, Mapping):
            continue
        subsections.append(_reconcile_subsection(subsection, entry))

    template.subsections = subsections
    return template


def restore_tracker_from_llm(payload: Any, template: TrackerData | None) -> TrackerData | None:
    """Merge a decoded model payload into a copy of the template.

    Returns:
        The reconciled tree, or None when the payload has no recognizable
        `sections` container, or restates none of the template's sections.
        The template is never mutated.
    """
    if template is None:
        return None

    container = _find_sections_container(payload)
    if container is None:
        logger.debug("payload_sections_missing")
        return None

    restored = clone_tracker_data(template)
    payload_sections = _index_by_name(container)

    sections: list[TrackerSection] = []
    for section in restored.sections:
        entry = payload_sections.get(section.name)
        if not isinstance(entry, Mapping):
            logger.debug("section_not_echoed", section=section.name)
            continue
        sections.append(_reconcile_section(section, entry))

    if restored.sections and not sections:
        logger.info("payload_matched_no_sections", template_sections=len(restored.sections))
        return None

    restored.sections = sections
    return restored
