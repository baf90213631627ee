"""Exceptions raised at the outer surfaces of the story tracker.

The reconciliation core itself signals failure through sentinel return
values; only user-driven operations such as preset import raise.
"""


class StoryTrackerError(Exception):
    """Base exception for story tracker errors."""

    pass


class TrackerImportError(StoryTrackerError):
    """Exported tracker text could not be read back."""

    pass


class PresetImportError(TrackerImportError):
    """Preset text could not be imported."""

    pass


class PresetNotFoundError(StoryTrackerError):
    """No preset is stored under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Preset not found: {name!r}")
