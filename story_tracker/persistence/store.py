"""Host storage abstract interfaces.

The host owns persistence. The tracker only sees two opaque slots: a flat
key-value settings store and a per-chat metadata store. Values are plain
JSON-compatible data.
"""

from abc import ABC, abstractmethod
from typing import Any


class SettingsStore(ABC):
    """Abstract interface for the host's global settings."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get the value stored under a key."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store a value under a key."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key."""
        pass


class ChatMetadataStore(ABC):
    """Abstract interface for per-chat metadata."""

    @abstractmethod
    async def get(self, chat_id: str, key: str) -> Any | None:
        """Get a metadata slot of a chat."""
        pass

    @abstractmethod
    async def set(self, chat_id: str, key: str, value: Any) -> None:
        """Write a metadata slot of a chat."""
        pass
