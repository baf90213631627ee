"""Prompt generation for tracker updates.

The committed baseline is embedded as JSON with every field rewritten as
`{name: {prompt, value}}`, so the model sees both the instruction and the
current state of each field and can echo the structure back by name.
Disabled fields are left out.

The update prompt itself is a Jinja2 template under `prompts/`.
"""

import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from story_tracker.generation.models import ChatMessage
from story_tracker.providers.llm.base import LLMMessage
from story_tracker.tracker.models import TrackerData, TrackerField

DEFAULT_INSTRUCTIONS = (
    "You are managing a dynamic story tracker for the roleplay. The tracker "
    "contains various fields that track different aspects of the story and "
    "characters. Your task is to return a valid JSON object that represents "
    "the updated tracker data."
)

PROMPTS_DIR = Path(__file__).parent / "prompts"
UPDATE_TEMPLATE = "tracker_update.jinja2"

_env = Environment(
    loader=FileSystemLoader(PROMPTS_DIR),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)

EMPTY_VALUE_PLACEHOLDER = "..."


def _fields_payload(fields: list[TrackerField]) -> dict[str, dict[str, Any]]:
    return {
        field.name: {"prompt": field.prompt, "value": field.value}
        for field in fields
        if field.enabled
    }


def build_tracker_payload(data: TrackerData | None) -> dict[str, Any]:
    """Rewrite a tracker tree into the name-indexed shape shown to the model."""
    if data is None:
        return {"sections": []}

    return {
        "sections": [
            {
                "name": section.name,
                "fields": _fields_payload(section.fields),
                "subsections": [
                    {"name": subsection.name, "fields": _fields_payload(subsection.fields)}
                    for subsection in section.subsections
                ],
            }
            for section in data.sections
        ]
    }


def render_tracker_json(data: TrackerData | None) -> str:
    return json.dumps(build_tracker_payload(data), indent=2, ensure_ascii=False)


def generate_general_instructions(system_prompt: str = "") -> str:
    """Return the custom system prompt, or the built-in instructions."""
    return system_prompt.strip() or DEFAULT_INSTRUCTIONS


def _recent(chat_history: list[ChatMessage] | None, depth: int) -> list[ChatMessage]:
    if not chat_history or depth <= 0:
        return []
    return list(chat_history[-depth:])


def generate_tracker_prompt(
    tracker_data: TrackerData | None,
    *,
    chat_history: list[ChatMessage] | None = None,
    update_depth: int = 4,
    include_narrative: bool = False,
    system_prompt: str = "",
) -> str:
    """Build the full tracker instruction text.

    Args:
        tracker_data: Baseline to embed
        chat_history: Messages to include, newest last; None for none
        update_depth: How many of the latest messages to include
        include_narrative: Ask for tracker plus narrative in one reply
            (together mode) instead of a tracker-only reply
        system_prompt: Custom instructions replacing the built-in ones
    """
    template = _env.get_template(UPDATE_TEMPLATE)
    return template.render(
        instructions=generate_general_instructions(system_prompt),
        history=_recent(chat_history, update_depth),
        tracker_json=render_tracker_json(tracker_data),
        include_narrative=include_narrative,
    )


def generate_separate_update_prompt(
    tracker_data: TrackerData | None,
    chat_history: list[ChatMessage] | None,
    *,
    update_depth: int = 4,
    system_prompt: str = "",
) -> list[LLMMessage]:
    """Build the message list for a dedicated tracker-update request."""
    return [
        LLMMessage(role="system", content=generate_general_instructions(system_prompt)),
        LLMMessage(
            role="user",
            content=generate_tracker_prompt(
                tracker_data,
                chat_history=chat_history,
                update_depth=update_depth,
                system_prompt=system_prompt,
            ),
        ),
    ]


def _display_value(field: TrackerField) -> str:
    if isinstance(field.value, bool):
        return "true" if field.value else "false"
    if field.value == "":
        return EMPTY_VALUE_PLACEHOLDER
    return str(field.value)


def _field_lines(fields: list[TrackerField]) -> list[str]:
    return [f"- {field.name}: {_display_value(field)}" for field in fields if field.enabled]


def build_tracker_context(data: TrackerData | None) -> str:
    """Summarize the tracker as read-only context for the main reply.

    Returns an empty string for a missing or empty tracker.
    """
    if data is None or not data.sections:
        return ""

    blocks = []
    for section in data.sections:
        lines = [f"{section.name}:", *_field_lines(section.fields)]
        for subsection in section.subsections:
            lines.append(f"{subsection.name}:")
            lines.extend(_field_lines(subsection.fields))
        blocks.append("\n".join(lines))

    return "Current tracker state (for reference only):\n\n" + "\n\n".join(blocks)
