"""Store implementations."""

from story_tracker.persistence.stores.inmemory import (
    InMemoryChatMetadataStore,
    InMemorySettingsStore,
)

__all__ = [
    "InMemoryChatMetadataStore",
    "InMemorySettingsStore",
]
