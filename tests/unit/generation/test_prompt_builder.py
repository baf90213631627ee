"""Unit tests for prompt generation."""

import json
import re

from story_tracker.generation import (
    ChatMessage,
    build_tracker_context,
    build_tracker_payload,
    generate_general_instructions,
    generate_separate_update_prompt,
    generate_tracker_prompt,
    parse_response,
    render_tracker_json,
)
from story_tracker.generation.prompt_builder import DEFAULT_INSTRUCTIONS
from story_tracker.tracker import TrackerData
from tests.factories.tracker import TrackerFactory


def _morale_tracker() -> TrackerData:
    return TrackerData(
        sections=[
            TrackerFactory.section(
                "Crew Status",
                fields=[TrackerFactory.field("Morale", "Hopeful", prompt="How the crew feels")],
            )
        ]
    )


def _history(count: int) -> list[ChatMessage]:
    return [ChatMessage(is_user=i % 2 == 0, content=f"message {i}") for i in range(count)]


class TestBuildTrackerPayload:
    """Tests for the name-indexed payload shown to the model."""

    def test_field_mapping_shape(self, tracker: TrackerData) -> None:
        payload = build_tracker_payload(tracker)

        character = payload["sections"][0]
        assert character["name"] == "Character"
        assert character["fields"] == {"Mood": {"prompt": "Current mood", "value": "Calm"}}
        vitals = character["subsections"][0]
        assert vitals["name"] == "Vitals"
        assert vitals["fields"]["Gold"] == {"prompt": "Coins carried", "value": 10}
        assert vitals["fields"]["Poisoned"]["value"] is False

    def test_disabled_fields_left_out(self) -> None:
        data = TrackerData(
            sections=[
                TrackerFactory.section(
                    "Character",
                    fields=[TrackerFactory.field("Secret", "x", enabled=False)],
                )
            ]
        )
        assert build_tracker_payload(data)["sections"][0]["fields"] == {}

    def test_none(self) -> None:
        assert build_tracker_payload(None) == {"sections": []}

    def test_rendered_json_is_indented(self) -> None:
        rendered = render_tracker_json(_morale_tracker())
        assert rendered.startswith('{\n  "sections"')
        assert json.loads(rendered) == build_tracker_payload(_morale_tracker())


class TestGenerateTrackerPrompt:
    """Tests for generate_tracker_prompt."""

    def test_embeds_field_as_prompt_and_value(self) -> None:
        prompt = generate_tracker_prompt(_morale_tracker())
        pattern = r'"Morale":\s*\{\s*"prompt":\s*"How the crew feels",\s*"value":\s*"Hopeful"\s*\}'
        assert re.search(pattern, prompt)

    def test_reply_contract(self) -> None:
        prompt = generate_tracker_prompt(_morale_tracker(), include_narrative=True)
        assert "MUST begin with a single ```json code block" in prompt
        assert "Even if no values change, repeat the tracker" in prompt
        assert "continue the narrative" in prompt

    def test_update_request_without_narrative(self) -> None:
        prompt = generate_tracker_prompt(_morale_tracker())
        assert "MUST begin" not in prompt
        assert prompt.endswith("inside a ```json code block.")

    def test_history_limited_to_depth(self) -> None:
        prompt = generate_tracker_prompt(_morale_tracker(), chat_history=_history(6), update_depth=2)

        assert "Recent chat history for context:" in prompt
        assert "User: message 4" in prompt
        assert "Assistant: message 5" in prompt
        assert "message 3" not in prompt

    def test_zero_depth_omits_history(self) -> None:
        prompt = generate_tracker_prompt(_morale_tracker(), chat_history=_history(3), update_depth=0)
        assert "Recent chat history" not in prompt

    def test_custom_system_prompt(self) -> None:
        prompt = generate_tracker_prompt(_morale_tracker(), system_prompt="Track the heist.")
        assert prompt.startswith("Track the heist.\n\n")
        assert DEFAULT_INSTRUCTIONS not in prompt

    def test_echoed_prompt_reconciles(self) -> None:
        """A model that echoes the embedded block unchanged reproduces the tracker."""
        tracker = TrackerFactory.create_default()
        prompt = generate_tracker_prompt(tracker, include_narrative=True)
        block = prompt[prompt.index("```json") : prompt.index("```\n\n") + 3]

        result = parse_response(block + "\nStory goes on.", tracker)

        assert result.tracker_data == tracker


class TestSeparateUpdatePrompt:
    """Tests for generate_separate_update_prompt."""

    def test_system_and_user_messages(self) -> None:
        messages = generate_separate_update_prompt(
            _morale_tracker(), _history(2), update_depth=4
        )

        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == DEFAULT_INSTRUCTIONS
        assert "User: message 0" in messages[1].content
        assert "Current tracker state:\n```json\n" in messages[1].content

    def test_general_instructions_fallback(self) -> None:
        assert generate_general_instructions("   ") == DEFAULT_INSTRUCTIONS
        assert generate_general_instructions(" Custom ") == "Custom"


class TestBuildTrackerContext:
    """Tests for build_tracker_context."""

    def test_summary(self) -> None:
        tracker = TrackerFactory.create_default()
        tracker.sections[0].fields[0].value = ""

        assert build_tracker_context(tracker) == (
            "Current tracker state (for reference only):\n\n"
            "Character:\n"
            "- Mood: ...\n"
            "Vitals:\n"
            "- Health: 50%\n"
            "- Gold: 10\n"
            "- Poisoned: false\n\n"
            "World:\n"
            "Location:\n"
            "- Place: Tavern\n"
            "- Weather: Rain"
        )

    def test_empty(self) -> None:
        assert build_tracker_context(None) == ""
        assert build_tracker_context(TrackerData()) == ""
