"""Item-list codec.

Inventory sections are stored as a single comma-separated string. Models
produce that string with all sorts of decoration, so parsing is lenient:

    parse_items("Sword (gold-inlaid, cursed), Shield, **Potion**\\n- Rope")
    # -> ["Sword (gold-inlaid, cursed)", "Shield", "Potion", "Rope"]

    parse_items("[Sword, Shield]")   # -> ["Sword", "Shield"]
    parse_items("1. Sword\\n2. Shield")  # -> ["Sword", "Shield"]
    parse_items("None")              # -> []

Commas inside parentheses belong to the item's description and never split.
"""

import re
from collections.abc import Iterator
from typing import Any

from story_tracker.inventory.security import MAX_ITEMS_PER_SECTION, sanitize_item_name
from story_tracker.observability.logging import get_logger

logger = get_logger(__name__)

EMPTY_ITEM_LIST = "None"

BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")
ITALIC_PATTERN = re.compile(r"\*(.+?)\*")
CODE_PATTERN = re.compile(r"`(.+?)`")
STRIKETHROUGH_PATTERN = re.compile(r"~~(.+?)~~")
WHITESPACE_PATTERN = re.compile(r"\s+")

BULLET_MARKER_PATTERN = re.compile(r"^[-•*]\s+")
NUMBERED_MARKER_PATTERN = re.compile(r"^\d+\.\s+")
LETTERED_MARKER_PATTERN = re.compile(r"^[a-z]\)\s+", re.IGNORECASE)


def _is_empty(text: str) -> bool:
    return text == "" or text.lower() == "none"


def _strip_wrapping_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1].strip()
    return text


def _newlines_to_commas(text: str) -> str:
    """Turn line breaks into separators, except inside parentheses."""
    out: list[str] = []
    depth = 0

    for char in text:
        if char == "(":
            depth += 1
            out.append(char)
        elif char == ")":
            depth = max(depth - 1, 0)
            out.append(char)
        elif char in "\r\n":
            if depth == 0:
                if out and out[-1] not in (",", "\n"):
                    out.append(",")
            elif not out or out[-1] != " ":
                out.append(" ")
        else:
            out.append(char)

    return "".join(out)


def _strip_markdown(text: str) -> str:
    text = BOLD_PATTERN.sub(r"\1", text)
    text = ITALIC_PATTERN.sub(r"\1", text)
    text = CODE_PATTERN.sub(r"\1", text)
    return STRIKETHROUGH_PATTERN.sub(r"\1", text)


def _split_top_level(text: str) -> Iterator[str]:
    """Split on commas at parenthesis depth 0."""
    current: list[str] = []
    depth = 0

    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                logger.warning("unmatched_closing_parenthesis", text=text)
                depth = 0
        elif char == "," and depth == 0:
            yield "".join(current)
            current = []
            continue
        current.append(char)

    if depth > 0:
        logger.warning("unmatched_opening_parenthesis", text=text)

    yield "".join(current)


def _clean_single_item(item: str) -> str | None:
    """Remove list markers and quotes, then capitalize the first letter."""
    cleaned = item.strip()
    if _is_empty(cleaned):
        return None

    cleaned = BULLET_MARKER_PATTERN.sub("", cleaned)
    cleaned = NUMBERED_MARKER_PATTERN.sub("", cleaned)
    cleaned = LETTERED_MARKER_PATTERN.sub("", cleaned)
    cleaned = _strip_wrapping_quotes(cleaned)

    if _is_empty(cleaned):
        return None

    # Only the first character; "iPhone case" becomes "IPhone case", not "Iphone case"
    return cleaned[0].upper() + cleaned[1:]


def parse_items(item_string: Any) -> list[str]:
    """Parse a model-produced item string into clean item names.

    Never raises. Non-string input, "", and "None" yield an empty list. At
    most MAX_ITEMS_PER_SECTION items are returned.
    """
    if not isinstance(item_string, str):
        return []

    processed = item_string.strip()
    if _is_empty(processed):
        return []

    while (processed.startswith("[") and processed.endswith("]")) or (
        processed.startswith("{") and processed.endswith("}")
    ):
        processed = processed[1:-1].strip()
        if _is_empty(processed):
            return []

    processed = _strip_wrapping_quotes(processed)
    if _is_empty(processed):
        return []

    processed = _newlines_to_commas(processed)
    processed = _strip_markdown(processed)
    processed = WHITESPACE_PATTERN.sub(" ", processed)

    items: list[str] = []
    for candidate in _split_top_level(processed):
        cleaned = _clean_single_item(candidate)
        if cleaned is None:
            continue
        sanitized = sanitize_item_name(cleaned)
        if sanitized is None:
            continue
        if len(items) >= MAX_ITEMS_PER_SECTION:
            logger.warning("item_limit_reached", max_items=MAX_ITEMS_PER_SECTION)
            break
        items.append(sanitized)

    return items


def serialize_items(items: Any) -> str:
    """Join item names with ", ", or return "None" for an empty list."""
    if not isinstance(items, list):
        return EMPTY_ITEM_LIST

    cleaned = [item.strip() for item in items if isinstance(item, str) and item.strip()]
    if not cleaned:
        return EMPTY_ITEM_LIST

    return ", ".join(cleaned)
