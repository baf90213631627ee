"""Inventory: item-list codec, sanitizers, v1 to v2 migration and edits."""

from story_tracker.inventory.extraction import (
    build_inventory_summary,
    extract_inventory,
    extract_inventory_data,
    extract_legacy_inventory,
)
from story_tracker.inventory.items import EMPTY_ITEM_LIST, parse_items, serialize_items
from story_tracker.inventory.migration import (
    default_inventory,
    migrate_inventory,
    normalize_inventory,
)
from story_tracker.inventory.models import (
    Inventory,
    InventoryCategory,
    InventoryV1,
    InventoryV2,
    MigrationResult,
    MigrationSource,
)
from story_tracker.inventory.operations import (
    add_item,
    add_location,
    get_items,
    remove_item,
    remove_location,
)
from story_tracker.inventory.security import (
    BLOCKED_PROPERTY_NAMES,
    MAX_ITEM_LENGTH,
    MAX_ITEMS_PER_SECTION,
    MAX_LOCATION_LENGTH,
    sanitize_item_name,
    sanitize_location_name,
)
from story_tracker.inventory.validation import clean_item_string, validate_stored_inventory

__all__ = [
    "BLOCKED_PROPERTY_NAMES",
    "EMPTY_ITEM_LIST",
    "MAX_ITEMS_PER_SECTION",
    "MAX_ITEM_LENGTH",
    "MAX_LOCATION_LENGTH",
    "Inventory",
    "InventoryCategory",
    "InventoryV1",
    "InventoryV2",
    "MigrationResult",
    "MigrationSource",
    "add_item",
    "add_location",
    "build_inventory_summary",
    "clean_item_string",
    "default_inventory",
    "extract_inventory",
    "extract_inventory_data",
    "extract_legacy_inventory",
    "get_items",
    "migrate_inventory",
    "normalize_inventory",
    "parse_items",
    "remove_item",
    "remove_location",
    "sanitize_item_name",
    "sanitize_location_name",
    "serialize_items",
    "validate_stored_inventory",
]
