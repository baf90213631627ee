"""Nested configuration sections."""

from story_tracker.config.models.generation import GenerationConfig
from story_tracker.config.models.logging import LoggingConfig
from story_tracker.config.models.tracker import TrackerDefaultsConfig

__all__ = ["GenerationConfig", "LoggingConfig", "TrackerDefaultsConfig"]
