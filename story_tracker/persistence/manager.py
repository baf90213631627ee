"""Reading and writing tracker state through the host stores."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from story_tracker.config.models.tracker import TrackerDefaultsConfig
from story_tracker.observability.logging import get_logger
from story_tracker.persistence.models import TrackerSettings
from story_tracker.persistence.store import ChatMetadataStore, SettingsStore
from story_tracker.tracker.factory import ensure_tracker_data
from story_tracker.tracker.models import TrackerData

logger = get_logger(__name__)

SETTINGS_KEY = "story_tracker"
CHAT_METADATA_KEY = "story_tracker"


class TrackerPersistence:
    """Loads and saves the settings blob and the per-chat tracker slot.

    Data is re-read on every call; nothing is cached here, so a session or
    chat switch always sees the host's current state.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        chat_store: ChatMetadataStore,
        defaults: TrackerDefaultsConfig | None = None,
    ) -> None:
        self._settings_store = settings_store
        self._chat_store = chat_store
        self._defaults = defaults or TrackerDefaultsConfig()

    def default_settings(self) -> TrackerSettings:
        return TrackerSettings.from_defaults(self._defaults)

    async def load_settings(self) -> TrackerSettings:
        """Load settings, layering the stored blob over configured defaults.

        A missing, non-object or invalid blob yields the defaults.
        """
        raw = await self._settings_store.get(SETTINGS_KEY)
        if raw is None:
            return self.default_settings()

        if not isinstance(raw, Mapping):
            logger.warning("stored_settings_unrecognized", value_type=type(raw).__name__)
            return self.default_settings()

        data: dict[str, Any] = self.default_settings().model_dump(by_alias=True)
        data.update(raw)

        try:
            return TrackerSettings.model_validate(data)
        except ValidationError as e:
            logger.error("stored_settings_invalid", error_count=e.error_count(), errors=str(e))
            return self.default_settings()

    async def save_settings(self, settings: TrackerSettings) -> None:
        await self._settings_store.set(
            SETTINGS_KEY, settings.model_dump(mode="json", by_alias=True)
        )
        logger.debug("settings_saved")

    async def load_chat_data(self, chat_id: str) -> TrackerData | None:
        """Load the tracker tree saved with a chat, or None if it has none."""
        raw = await self._chat_store.get(chat_id, CHAT_METADATA_KEY)
        if raw is None:
            return None
        return ensure_tracker_data(raw)

    async def save_chat_data(self, chat_id: str, tracker_data: TrackerData) -> None:
        await self._chat_store.set(
            chat_id, CHAT_METADATA_KEY, tracker_data.model_dump(mode="json")
        )
        logger.debug("chat_data_saved", chat_id=chat_id)
