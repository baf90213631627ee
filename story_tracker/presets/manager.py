"""Preset storage, import and export."""

import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from story_tracker.exceptions import PresetImportError, PresetNotFoundError, TrackerImportError
from story_tracker.observability.logging import get_logger
from story_tracker.persistence.store import SettingsStore
from story_tracker.presets.models import Preset
from story_tracker.presets.serialization import dump_json, load_json_object
from story_tracker.tracker.models import TrackerData

logger = get_logger(__name__)

PRESET_STORAGE_KEY = "story_tracker_presets"
DEFAULT_PRESET_FILENAME = "story-tracker-preset"

_FILENAME_UNSAFE = re.compile(r"[^a-z0-9]+")


def build_preset_filename(name: str | None) -> str:
    """Slugify a preset name into a `.json` filename."""
    slug = _FILENAME_UNSAFE.sub("-", (name or "").strip().lower()).strip("-")
    return f"{slug or DEFAULT_PRESET_FILENAME}.json"


class PresetManager:
    """Named presets kept in one settings-store slot.

    The slot holds `{name: {systemPrompt, trackerData}}` in save order.
    """

    def __init__(self, store: SettingsStore) -> None:
        self._store = store

    async def _load_all(self) -> dict[str, Any]:
        raw = await self._store.get(PRESET_STORAGE_KEY)
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            logger.warning("stored_presets_unrecognized", value_type=type(raw).__name__)
            return {}
        return dict(raw)

    async def list_presets(self) -> list[str]:
        return list(await self._load_all())

    async def save_preset(
        self, name: str, system_prompt: str, tracker_data: TrackerData
    ) -> Preset:
        """Store a preset, replacing any preset of the same name.

        Raises:
            ValueError: If the name is empty
        """
        preset = Preset(name=name, system_prompt=system_prompt, tracker_data=tracker_data)
        if not preset.name:
            raise ValueError("Preset name is required")

        presets = await self._load_all()
        presets[preset.name] = preset.model_dump(
            mode="json", by_alias=True, include={"system_prompt", "tracker_data"}
        )
        await self._store.set(PRESET_STORAGE_KEY, presets)

        logger.info("preset_saved", preset=preset.name)
        return preset

    async def load_preset(self, name: str) -> Preset:
        """Get a stored preset.

        Raises:
            PresetNotFoundError: If no preset has that name
        """
        presets = await self._load_all()
        record = presets.get(name)
        if not isinstance(record, Mapping):
            raise PresetNotFoundError(name)
        return Preset.model_validate({**record, "name": name})

    async def delete_preset(self, name: str) -> bool:
        presets = await self._load_all()
        if name not in presets:
            return False

        del presets[name]
        await self._store.set(PRESET_STORAGE_KEY, presets)
        logger.info("preset_deleted", preset=name)
        return True

    def export_preset(self, preset: Preset) -> str:
        """Render a preset as pretty-printed JSON with an export timestamp."""
        exported = preset.model_copy(update={"exported_at": datetime.now(UTC)})
        return dump_json(exported.model_dump(mode="json", by_alias=True))

    async def import_preset(self, raw_text: str, fallback_name: str | None = None) -> Preset:
        """Parse and store an exported preset.

        The name in the file wins; `fallback_name` is used when it has none.

        Raises:
            PresetImportError: If the text is not a JSON object, lacks
                `trackerData`, or no name is available
        """
        try:
            parsed = load_json_object(raw_text)
        except TrackerImportError as e:
            raise PresetImportError(str(e)) from e

        if not isinstance(parsed.get("trackerData"), Mapping):
            raise PresetImportError("Preset is missing tracker data.")

        name = parsed.get("name")
        if not isinstance(name, str) or not name.strip():
            name = fallback_name or ""
        if not name.strip():
            raise PresetImportError("Preset name is required to import.")

        try:
            preset = Preset.model_validate({**parsed, "name": name})
        except ValidationError as e:
            raise PresetImportError(f"Invalid preset: {e}") from e

        logger.info("preset_imported", preset=preset.name)
        return await self.save_preset(preset.name, preset.system_prompt, preset.tracker_data)
