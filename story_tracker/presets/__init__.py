"""Presets: named tracker layouts with JSON import and export."""

from story_tracker.presets.manager import (
    PRESET_STORAGE_KEY,
    PresetManager,
    build_preset_filename,
)
from story_tracker.presets.models import Preset
from story_tracker.presets.serialization import parse_tracker_data, serialize_tracker_data

__all__ = [
    "PRESET_STORAGE_KEY",
    "Preset",
    "PresetManager",
    "build_preset_filename",
    "parse_tracker_data",
    "serialize_tracker_data",
]
