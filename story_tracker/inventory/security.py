"""Input sanitization for inventory item and location names.

Location names become dictionary keys that are serialized back to hosts
whose object model is vulnerable to prototype pollution, so names that
shadow built-in object members are refused. Lengths are capped to keep
model-produced garbage from bloating persisted state.
"""

from typing import Any

from story_tracker.observability.logging import get_logger
from story_tracker.observability.metrics import SANITIZER_REJECTIONS

logger = get_logger(__name__)

MAX_ITEM_LENGTH = 500
MAX_LOCATION_LENGTH = 200
MAX_ITEMS_PER_SECTION = 500

BLOCKED_PROPERTY_NAMES: frozenset[str] = frozenset(
    name.lower()
    for name in (
        "__proto__",
        "constructor",
        "prototype",
        "toString",
        "valueOf",
        "hasOwnProperty",
        "__defineGetter__",
        "__defineSetter__",
        "__lookupGetter__",
        "__lookupSetter__",
    )
)


def sanitize_location_name(name: Any) -> str | None:
    """Validate and sanitize a storage location name.

    Returns:
        The trimmed name, truncated to MAX_LOCATION_LENGTH, or None if the
        name is empty, not a string, or blocked.
    """
    if not isinstance(name, str):
        return None

    trimmed = name.strip()
    if not trimmed:
        return None

    if trimmed.lower() in BLOCKED_PROPERTY_NAMES:
        logger.warning("blocked_location_name", location=trimmed)
        SANITIZER_REJECTIONS.labels(kind="location", reason="blocked").inc()
        return None

    if len(trimmed) > MAX_LOCATION_LENGTH:
        logger.warning(
            "location_name_truncated",
            length=len(trimmed),
            max_length=MAX_LOCATION_LENGTH,
        )
        SANITIZER_REJECTIONS.labels(kind="location", reason="truncated").inc()
        return trimmed[:MAX_LOCATION_LENGTH]

    return trimmed


def sanitize_item_name(name: Any) -> str | None:
    """Validate and sanitize a single item name.

    Returns:
        The trimmed name, truncated to MAX_ITEM_LENGTH, or None if the name
        is empty, "none", or not a string.
    """
    if not isinstance(name, str):
        return None

    trimmed = name.strip()
    if not trimmed or trimmed.lower() == "none":
        return None

    if len(trimmed) > MAX_ITEM_LENGTH:
        logger.warning(
            "item_name_truncated",
            length=len(trimmed),
            max_length=MAX_ITEM_LENGTH,
        )
        SANITIZER_REJECTIONS.labels(kind="item", reason="truncated").inc()
        return trimmed[:MAX_ITEM_LENGTH]

    return trimmed
