"""Inventory extraction from plain-text model output.

The structured format, one entry per line:

    On Person: Sword (equipped), 3x Health Potions, Leather Armor
    Stored - Home: Spare clothes, Tools, 50 gold coins
    Stored - Bank: Family heirloom
    Assets: Motorcycle (garage), Downtown apartment (owned)

Older outputs carry a single `Inventory: ...` line instead, which is read
into `on_person`.
"""

import re
from typing import Any

from story_tracker.inventory.items import EMPTY_ITEM_LIST
from story_tracker.inventory.models import InventoryV2
from story_tracker.inventory.security import sanitize_location_name

ON_PERSON_PATTERN = re.compile(r"^On Person:\s*(.+)$", re.IGNORECASE)
STORED_PATTERN = re.compile(r"^Stored\s*-\s*([^:]+):\s*(.+)$", re.IGNORECASE)
ASSETS_PATTERN = re.compile(r"^Assets:\s*(.+)$", re.IGNORECASE)
LEGACY_INVENTORY_PATTERN = re.compile(r"Inventory:\s*(.+?)(?:\n|$)", re.IGNORECASE)


def extract_inventory_data(text: Any) -> InventoryV2 | None:
    """Read the structured inventory lines, or None if there are none."""
    if not isinstance(text, str) or not text:
        return None

    on_person = EMPTY_ITEM_LIST
    assets = EMPTY_ITEM_LIST
    stored: dict[str, str] = {}
    found = False

    for line in text.split("\n"):
        trimmed = line.strip()

        match = ON_PERSON_PATTERN.match(trimmed)
        if match:
            on_person = match.group(1).strip() or EMPTY_ITEM_LIST
            found = True
            continue

        match = STORED_PATTERN.match(trimmed)
        if match:
            location = sanitize_location_name(match.group(1))
            items = match.group(2).strip()
            if location and items:
                stored[location] = items
                found = True
            continue

        match = ASSETS_PATTERN.match(trimmed)
        if match:
            assets = match.group(1).strip() or EMPTY_ITEM_LIST
            found = True

    if not found:
        return None

    return InventoryV2(on_person=on_person, stored=stored, assets=assets)


def extract_legacy_inventory(text: Any) -> str | None:
    """Read a single-line `Inventory:` entry; None when absent or "None"."""
    if not isinstance(text, str) or not text:
        return None

    match = LEGACY_INVENTORY_PATTERN.search(text)
    if not match:
        return None

    items = match.group(1).strip()
    if not items or items.lower() == EMPTY_ITEM_LIST.lower():
        return None
    return items


def extract_inventory(text: Any) -> InventoryV2 | None:
    """Extract inventory, preferring the structured format over the legacy line."""
    inventory = extract_inventory_data(text)
    if inventory is not None:
        return inventory

    legacy = extract_legacy_inventory(text)
    if legacy is not None:
        return InventoryV2(on_person=legacy)

    return None


def build_inventory_summary(inventory: InventoryV2 | None) -> str:
    """Render an inventory back into the structured plain-text format."""
    if inventory is None:
        inventory = InventoryV2()

    lines = [f"On Person: {inventory.on_person or EMPTY_ITEM_LIST}"]
    for location, items in inventory.stored.items():
        lines.append(f"Stored - {location}: {items or EMPTY_ITEM_LIST}")
    lines.append(f"Assets: {inventory.assets or EMPTY_ITEM_LIST}")
    return "\n".join(lines)
