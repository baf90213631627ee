"""In-memory implementations of the host stores."""

import copy
from typing import Any

from story_tracker.persistence.store import ChatMetadataStore, SettingsStore


class InMemorySettingsStore(SettingsStore):
    """In-memory implementation of SettingsStore for testing and development.

    Values are deep-copied in and out, so callers never share state with
    the store, as with a real serializing backend.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._values: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        """Get the value stored under a key."""
        return copy.deepcopy(self._values.get(key))

    async def set(self, key: str, value: Any) -> None:
        """Store a value under a key."""
        self._values[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> bool:
        """Delete a key."""
        if key in self._values:
            del self._values[key]
            return True
        return False


class InMemoryChatMetadataStore(ChatMetadataStore):
    """In-memory implementation of ChatMetadataStore for testing and development."""

    def __init__(self) -> None:
        self._chats: dict[str, dict[str, Any]] = {}

    async def get(self, chat_id: str, key: str) -> Any | None:
        """Get a metadata slot of a chat."""
        return copy.deepcopy(self._chats.get(chat_id, {}).get(key))

    async def set(self, chat_id: str, key: str, value: Any) -> None:
        """Write a metadata slot of a chat."""
        self._chats.setdefault(chat_id, {})[key] = copy.deepcopy(value)
