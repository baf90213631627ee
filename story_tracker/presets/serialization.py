"""JSON import/export of tracker trees."""

import json
from typing import Any

from story_tracker.exceptions import TrackerImportError
from story_tracker.tracker.factory import ensure_tracker_data
from story_tracker.tracker.models import TrackerData

JSON_INDENT = 2


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=JSON_INDENT, ensure_ascii=False)


def load_json_object(text: Any) -> dict[str, Any]:
    """Decode text that must hold a JSON object.

    Raises:
        TrackerImportError: If the text is empty, not JSON, or not an object
    """
    if not isinstance(text, str) or not text.strip():
        raise TrackerImportError("No data provided.")

    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise TrackerImportError(f"Invalid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise TrackerImportError("Invalid format: expected a JSON object.")
    return parsed


def serialize_tracker_data(data: TrackerData) -> str:
    """Pretty-print a tracker tree as JSON."""
    return dump_json(data.model_dump(mode="json"))


def parse_tracker_data(text: str) -> TrackerData:
    """Read a tracker tree exported by serialize_tracker_data.

    Raises:
        TrackerImportError: If the text is not a JSON object
    """
    return ensure_tracker_data(load_json_object(text))
