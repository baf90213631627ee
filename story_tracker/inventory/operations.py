"""User edits to an inventory.

Edits mutate the given InventoryV2 in place and report success, matching
the tracker tree's remove helpers. Every write goes through the item codec
and the sanitizers, so user input obeys the same limits as model output.
"""

from story_tracker.inventory.items import EMPTY_ITEM_LIST, parse_items, serialize_items
from story_tracker.inventory.models import InventoryCategory, InventoryV2
from story_tracker.inventory.security import (
    MAX_ITEMS_PER_SECTION,
    sanitize_item_name,
    sanitize_location_name,
)
from story_tracker.observability.logging import get_logger

logger = get_logger(__name__)


def _read_items(
    inventory: InventoryV2, category: InventoryCategory, location: str | None
) -> str | None:
    if category == InventoryCategory.STORED:
        if location is None or location not in inventory.stored:
            return None
        return inventory.stored[location]
    if category == InventoryCategory.ON_PERSON:
        return inventory.on_person
    return inventory.assets


def _write_items(
    inventory: InventoryV2,
    category: InventoryCategory,
    location: str | None,
    value: str,
) -> None:
    if category == InventoryCategory.STORED and location is not None:
        inventory.stored[location] = value
    elif category == InventoryCategory.ON_PERSON:
        inventory.on_person = value
    else:
        inventory.assets = value


def get_items(
    inventory: InventoryV2,
    category: InventoryCategory,
    location: str | None = None,
) -> list[str]:
    """Parsed items of one category; empty for an unknown location."""
    return parse_items(_read_items(inventory, category, location))


def add_item(
    inventory: InventoryV2,
    category: InventoryCategory,
    item: str,
    location: str | None = None,
) -> bool:
    """Append an item. Returns False if the name or location is invalid."""
    name = sanitize_item_name(item)
    if name is None:
        logger.warning("inventory_item_rejected", category=category.value)
        return False

    current = _read_items(inventory, category, location)
    if current is None:
        logger.warning("inventory_location_not_found", location=location)
        return False

    items = parse_items(current)
    if len(items) >= MAX_ITEMS_PER_SECTION:
        logger.warning("item_limit_reached", max_items=MAX_ITEMS_PER_SECTION)
        return False

    items.append(name)
    _write_items(inventory, category, location, serialize_items(items))
    return True


def remove_item(
    inventory: InventoryV2,
    category: InventoryCategory,
    index: int,
    location: str | None = None,
) -> bool:
    """Remove the item at a position in the parsed list."""
    current = _read_items(inventory, category, location)
    if current is None:
        return False

    items = parse_items(current)
    if not 0 <= index < len(items):
        return False

    del items[index]
    _write_items(inventory, category, location, serialize_items(items))
    return True


def add_location(inventory: InventoryV2, name: str) -> str | None:
    """Create an empty storage location.

    Returns:
        The sanitized location name, or None if the name is invalid or the
        location already exists
    """
    location = sanitize_location_name(name)
    if location is None:
        return None

    if location in inventory.stored:
        logger.info("inventory_location_exists", location=location)
        return None

    inventory.stored[location] = EMPTY_ITEM_LIST
    return location


def remove_location(inventory: InventoryV2, name: str) -> bool:
    """Delete a storage location together with its items."""
    if name not in inventory.stored:
        return False
    del inventory.stored[name]
    return True
