"""Test factories for tracker domain models."""

from story_tracker.tracker import (
    FieldType,
    TrackerData,
    TrackerField,
    TrackerSection,
    TrackerSubsection,
)
from story_tracker.tracker.models import FieldValue


class TrackerFactory:
    """Factory for creating tracker trees for testing."""

    @staticmethod
    def field(
        name: str,
        value: FieldValue = "",
        *,
        prompt: str = "",
        type: FieldType = FieldType.TEXT,
        enabled: bool = True,
        id: str | None = None,
    ) -> TrackerField:
        """Create a field with a predictable id."""
        return TrackerField(
            id=id or f"field_{name.lower().replace(' ', '_')}",
            name=name,
            value=value,
            prompt=prompt,
            type=type,
            enabled=enabled,
        )

    @staticmethod
    def subsection(
        name: str, fields: list[TrackerField] | None = None, *, id: str | None = None
    ) -> TrackerSubsection:
        return TrackerSubsection(
            id=id or f"subsection_{name.lower().replace(' ', '_')}",
            name=name,
            fields=fields or [],
        )

    @staticmethod
    def section(
        name: str,
        fields: list[TrackerField] | None = None,
        subsections: list[TrackerSubsection] | None = None,
        *,
        id: str | None = None,
    ) -> TrackerSection:
        return TrackerSection(
            id=id or f"section_{name.lower().replace(' ', '_')}",
            name=name,
            fields=fields or [],
            subsections=subsections or [],
        )

    @staticmethod
    def create_default() -> TrackerData:
        """Create the standard two-section tracker used across tests.

        Character
            Mood: Calm                      (section-level)
            Vitals
                Health: 50%
                Gold: 10                    (number)
                Poisoned: false             (boolean)
        World
            Location
                Place: Tavern
                Weather: Rain
        """
        return TrackerData(
            sections=[
                TrackerFactory.section(
                    "Character",
                    fields=[
                        TrackerFactory.field("Mood", "Calm", prompt="Current mood"),
                    ],
                    subsections=[
                        TrackerFactory.subsection(
                            "Vitals",
                            [
                                TrackerFactory.field(
                                    "Health", "50%", prompt="Health as a percentage"
                                ),
                                TrackerFactory.field(
                                    "Gold", 10, prompt="Coins carried", type=FieldType.NUMBER
                                ),
                                TrackerFactory.field(
                                    "Poisoned",
                                    False,
                                    prompt="Whether poisoned",
                                    type=FieldType.BOOLEAN,
                                ),
                            ],
                        ),
                    ],
                ),
                TrackerFactory.section(
                    "World",
                    subsections=[
                        TrackerFactory.subsection(
                            "Location",
                            [
                                TrackerFactory.field("Place", "Tavern", prompt="Where we are"),
                                TrackerFactory.field("Weather", "Rain", prompt="Weather"),
                            ],
                        ),
                    ],
                ),
            ]
        )

    @staticmethod
    def full_payload(**overrides: object) -> dict:
        """Build a payload restating the default tracker, with value overrides.

        Keys of `overrides` are field names.
        """
        values: dict[str, object] = {
            "Mood": "Calm",
            "Health": "50%",
            "Gold": 10,
            "Poisoned": False,
            "Place": "Tavern",
            "Weather": "Rain",
        }
        values.update(overrides)

        def entry(name: str) -> dict[str, object]:
            return {"prompt": "", "value": values[name]}

        return {
            "sections": [
                {
                    "name": "Character",
                    "fields": {"Mood": entry("Mood")},
                    "subsections": [
                        {
                            "name": "Vitals",
                            "fields": {
                                "Health": entry("Health"),
                                "Gold": entry("Gold"),
                                "Poisoned": entry("Poisoned"),
                            },
                        }
                    ],
                },
                {
                    "name": "World",
                    "fields": {},
                    "subsections": [
                        {
                            "name": "Location",
                            "fields": {
                                "Place": entry("Place"),
                                "Weather": entry("Weather"),
                            },
                        }
                    ],
                },
            ]
        }
