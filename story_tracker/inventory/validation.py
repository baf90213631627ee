"""Load-time cleaning of persisted inventory strings and storage maps."""

from collections.abc import Mapping
from typing import Any

from story_tracker.inventory.items import EMPTY_ITEM_LIST, parse_items, serialize_items
from story_tracker.inventory.security import sanitize_location_name
from story_tracker.observability.logging import get_logger

logger = get_logger(__name__)


def clean_item_string(item_string: Any) -> str:
    """Parse and reserialize an item string.

    Applies every parsing rule (markdown stripping, sanitization, length
    and count limits). Returns "None" when no valid item survives.
    """
    return serialize_items(parse_items(item_string))


def validate_stored_inventory(stored: Any) -> dict[str, str]:
    """Clean a stored-inventory mapping of location name to item string.

    Keys that fail location sanitization are dropped, as are non-string
    values. A location whose items all clean away is kept with "None":
    locations are structural and users add items to them later.
    """
    if not isinstance(stored, Mapping):
        return {}

    cleaned: dict[str, str] = {}

    for key, value in stored.items():
        location = sanitize_location_name(key)
        if location is None:
            continue

        if not isinstance(value, str):
            logger.warning(
                "stored_inventory_value_invalid",
                location=location,
                value_type=type(value).__name__,
            )
            continue

        cleaned_value = clean_item_string(value)
        cleaned[location] = cleaned_value

        if cleaned_value != value and value.strip().lower() != EMPTY_ITEM_LIST.lower():
            logger.warning(
                "stored_inventory_items_cleaned",
                location=location,
                original=value,
                cleaned=cleaned_value,
            )

    return cleaned
