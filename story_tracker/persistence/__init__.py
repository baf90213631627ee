"""Persistence adapters over the host's settings and chat metadata stores."""

from story_tracker.persistence.manager import (
    CHAT_METADATA_KEY,
    SETTINGS_KEY,
    TrackerPersistence,
)
from story_tracker.persistence.models import TrackerSettings
from story_tracker.persistence.store import ChatMetadataStore, SettingsStore
from story_tracker.persistence.stores import (
    InMemoryChatMetadataStore,
    InMemorySettingsStore,
)

__all__ = [
    "CHAT_METADATA_KEY",
    "SETTINGS_KEY",
    "ChatMetadataStore",
    "InMemoryChatMetadataStore",
    "InMemorySettingsStore",
    "SettingsStore",
    "TrackerPersistence",
    "TrackerSettings",
]
