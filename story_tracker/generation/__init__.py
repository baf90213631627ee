"""Generation: prompt building and response parsing/reconciliation."""

from story_tracker.generation.legacy import (
    extract_code_blocks,
    find_tracker_block,
    parse_tracker_block,
    parse_tracker_response,
)
from story_tracker.generation.models import ChatMessage, ParseResult
from story_tracker.generation.parser import parse_response
from story_tracker.generation.prompt_builder import (
    build_tracker_context,
    build_tracker_payload,
    generate_general_instructions,
    generate_separate_update_prompt,
    generate_tracker_prompt,
    render_tracker_json,
)
from story_tracker.generation.reconcile import restore_tracker_from_llm

__all__ = [
    "ChatMessage",
    "ParseResult",
    "build_tracker_context",
    "build_tracker_payload",
    "extract_code_blocks",
    "find_tracker_block",
    "generate_general_instructions",
    "generate_separate_update_prompt",
    "generate_tracker_prompt",
    "parse_response",
    "parse_tracker_block",
    "parse_tracker_response",
    "render_tracker_json",
    "restore_tracker_from_llm",
]
