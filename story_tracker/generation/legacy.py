"""Legacy plain-text tracker format.

Before JSON payloads, models answered with an indented text block:

    ```
    Story Tracker Update
    ---
    Section: Crew Status
        Morale: Hopeful
        Subsection: Health
            Injuries: Broken arm
    ```

Field lines need at least four spaces of indentation. A field line that
comes before any subsection belongs to the section itself. The block is
turned into a name-indexed payload and reconciled exactly like JSON.
"""

import re
from typing import Any

from story_tracker.generation.reconcile import restore_tracker_from_llm
from story_tracker.observability.logging import get_logger
from story_tracker.tracker.models import TrackerData

logger = get_logger(__name__)

TRACKER_BLOCK_HEADER = "Story Tracker Update"

LEGACY_BLOCK_PATTERN = re.compile(r"```([^`]+)```")
SECTION_LINE_PATTERN = re.compile(r"^Section:\s*(.+)$")
SUBSECTION_LINE_PATTERN = re.compile(r"^Subsection:\s*(.+)$")
FIELD_LINE_PATTERN = re.compile(r"^\s{4,}(.+?):\s*(.+)$")

SKIPPED_LINES = frozenset({TRACKER_BLOCK_HEADER, "---"})


def extract_code_blocks(text: Any) -> list[str]:
    """Return the trimmed bodies of all fenced blocks, in order."""
    if not isinstance(text, str):
        return []
    return [match.group(1).strip() for match in LEGACY_BLOCK_PATTERN.finditer(text)]


def is_tracker_block(block: str) -> bool:
    if TRACKER_BLOCK_HEADER in block:
        return True
    return any(
        SECTION_LINE_PATTERN.match(line.strip()) for line in block.split("\n")
    )


def find_tracker_block(blocks: list[str]) -> str | None:
    """Return the first block that looks like a tracker update."""
    for block in blocks:
        if is_tracker_block(block):
            return block
    return None


def _block_to_payload(block: str) -> dict[str, Any]:
    sections: list[dict[str, Any]] = []
    section: dict[str, Any] | None = None
    subsection: dict[str, Any] | None = None

    for line in block.split("\n"):
        stripped = line.strip()
        if not stripped or stripped in SKIPPED_LINES:
            continue

        match = SECTION_LINE_PATTERN.match(stripped)
        if match:
            section = {"name": match.group(1).strip(), "fields": {}, "subsections": []}
            sections.append(section)
            subsection = None
            continue

        match = SUBSECTION_LINE_PATTERN.match(stripped)
        if match:
            if section is not None:
                subsection = {"name": match.group(1).strip(), "fields": {}}
                section["subsections"].append(subsection)
            continue

        match = FIELD_LINE_PATTERN.match(line.rstrip())
        if match is None:
            continue

        name = match.group(1).strip()
        value = match.group(2).strip()
        if subsection is not None:
            subsection["fields"].setdefault(name, value)
        elif section is not None:
            section["fields"].setdefault(name, value)

    return {"sections": sections}


def parse_tracker_block(block: str, template: TrackerData | None) -> TrackerData | None:
    """Reconcile a plain-text tracker block against the template.

    Returns:
        The reconciled tree, or None if no template section was matched
    """
    payload = _block_to_payload(block)
    if not payload["sections"]:
        return None

    restored = restore_tracker_from_llm(payload, template)
    if restored is None or not restored.sections:
        return None
    return restored


def parse_tracker_response(text: Any, template: TrackerData | None) -> TrackerData | None:
    """Find and parse the first plain-text tracker block in a response."""
    blocks = extract_code_blocks(text)
    if not blocks:
        logger.debug("legacy_code_blocks_missing")
        return None

    block = find_tracker_block(blocks)
    if block is None:
        logger.debug("legacy_tracker_block_missing")
        return None

    return parse_tracker_block(block, template)
