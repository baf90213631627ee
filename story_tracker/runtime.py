"""Wiring a tracker updater from configuration.

Usage:
    updater = await create_updater(provider, settings_store, chat_store, chat_id="chat-1")
    result = await updater.on_message_sent(history)
"""

from story_tracker.config import Settings, get_settings
from story_tracker.observability.logging import get_logger, setup_logging
from story_tracker.persistence.manager import TrackerPersistence
from story_tracker.persistence.store import ChatMetadataStore, SettingsStore
from story_tracker.providers.llm.base import LLMProvider
from story_tracker.session.updater import TrackerUpdater

logger = get_logger(__name__)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog from the logging section of the settings."""
    settings = settings or get_settings()
    setup_logging(
        level=settings.log_level,
        format=settings.logging.format,
        preview_length=settings.logging.preview_length,
    )


async def create_updater(
    provider: LLMProvider,
    settings_store: SettingsStore,
    chat_store: ChatMetadataStore,
    *,
    chat_id: str | None = None,
    settings: Settings | None = None,
) -> TrackerUpdater:
    """Build an updater and load the persisted state for a chat."""
    settings = settings or get_settings()
    persistence = TrackerPersistence(settings_store, chat_store, defaults=settings.tracker)

    updater = TrackerUpdater(
        provider,
        persistence,
        persistence.default_settings(),
        generation_config=settings.generation,
    )
    await updater.switch_chat(chat_id)

    logger.info(
        "tracker_updater_created",
        app_name=settings.app_name,
        provider=provider.provider_name,
        generation_mode=updater.settings.generation_mode.value,
    )
    return updater
