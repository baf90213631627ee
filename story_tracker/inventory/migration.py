"""Inventory migration from v1 (bare string) to v2 (structured)."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from story_tracker.inventory.items import EMPTY_ITEM_LIST
from story_tracker.inventory.models import (
    InventoryV1,
    InventoryV2,
    MigrationResult,
    MigrationSource,
)
from story_tracker.inventory.validation import clean_item_string, validate_stored_inventory
from story_tracker.observability.logging import get_logger

logger = get_logger(__name__)


def default_inventory() -> InventoryV2:
    """Return a fresh empty v2 inventory."""
    return InventoryV2()


def _migrate_string(inventory: str) -> MigrationResult:
    trimmed = inventory.strip()
    if not trimmed or trimmed.lower() == EMPTY_ITEM_LIST.lower():
        return MigrationResult(
            inventory=default_inventory(), migrated=True, source=MigrationSource.V1
        )

    return MigrationResult(
        inventory=InventoryV2(on_person=inventory, stored={}, assets=EMPTY_ITEM_LIST),
        migrated=True,
        source=MigrationSource.V1,
    )


def _migrate_v2_mapping(inventory: Mapping[str, Any]) -> MigrationResult:
    try:
        model = InventoryV2.model_validate(inventory)
    except ValidationError as e:
        logger.warning("inventory_v2_invalid", error=str(e))
        return MigrationResult(
            inventory=default_inventory(), migrated=True, source=MigrationSource.DEFAULT
        )

    return MigrationResult(inventory=model, migrated=False, source=MigrationSource.V2)


def migrate_inventory(inventory: Any) -> MigrationResult:
    """Resolve an inventory payload of unknown provenance into v2.

    Never raises. Already-v2 data passes through with migrated=False; every
    other shape is converted or replaced by the default inventory.
    """
    if isinstance(inventory, InventoryV2):
        return MigrationResult(
            inventory=inventory.model_copy(deep=True),
            migrated=False,
            source=MigrationSource.V2,
        )

    if isinstance(inventory, Mapping) and inventory.get("version") == 2:
        return _migrate_v2_mapping(inventory)

    if inventory is None:
        return MigrationResult(
            inventory=default_inventory(), migrated=True, source=MigrationSource.NULL
        )

    if isinstance(inventory, InventoryV1):
        return _migrate_string(inventory.items)

    if isinstance(inventory, str):
        return _migrate_string(inventory)

    logger.warning("inventory_format_unknown", value_type=type(inventory).__name__)
    return MigrationResult(
        inventory=default_inventory(), migrated=True, source=MigrationSource.DEFAULT
    )


def normalize_inventory(inventory: Any) -> InventoryV2:
    """Migrate and fully clean an inventory for loading into settings.

    Every item string is reparsed, so model-produced decoration persisted by
    older versions is stripped on the next load. Unusable stored locations
    are dropped before migration so one bad entry does not reset the rest.
    """
    if isinstance(inventory, Mapping) and inventory.get("version") == 2:
        inventory = {**inventory, "stored": validate_stored_inventory(inventory.get("stored"))}

    result = migrate_inventory(inventory)
    model = result.inventory

    if result.migrated and result.source == MigrationSource.V1:
        logger.info("inventory_migrated", source=result.source.value)

    return InventoryV2(
        on_person=clean_item_string(model.on_person),
        stored=validate_stored_inventory(model.stored),
        assets=clean_item_string(model.assets),
    )
