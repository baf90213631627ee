"""Unit tests for inventory migration."""

import pytest

from story_tracker.inventory import (
    InventoryV1,
    InventoryV2,
    MigrationSource,
    migrate_inventory,
    normalize_inventory,
)


class TestMigrateInventory:
    """Tests for migrate_inventory."""

    def test_v1_string(self) -> None:
        result = migrate_inventory("Sword, shield")
        assert result.inventory.version == 2
        assert result.inventory.on_person == "Sword, shield"
        assert result.inventory.stored == {}
        assert result.inventory.assets == "None"
        assert result.migrated is True
        assert result.source == MigrationSource.V1

    @pytest.mark.parametrize("raw", ["", "  ", "None", "none"])
    def test_empty_v1_string_is_default(self, raw: str) -> None:
        result = migrate_inventory(raw)
        assert result.inventory == InventoryV2()
        assert result.source == MigrationSource.V1

    def test_none(self) -> None:
        result = migrate_inventory(None)
        assert result.inventory == InventoryV2()
        assert result.source == MigrationSource.NULL

    def test_v2_mapping_passes_through(self) -> None:
        raw = {
            "version": 2,
            "onPerson": "Sword",
            "stored": {"Home": "Tools"},
            "assets": "Cabin",
        }
        result = migrate_inventory(raw)
        assert result.migrated is False
        assert result.source == MigrationSource.V2
        assert result.inventory.on_person == "Sword"
        assert result.inventory.stored == {"Home": "Tools"}
        assert result.inventory.assets == "Cabin"

    def test_v2_mapping_values_are_not_rewritten(self) -> None:
        raw = {
            "version": 2,
            "onPerson": "sword",
            "stored": {"Home": "**rope**"},
            "assets": "None",
        }
        result = migrate_inventory(raw)
        assert result.migrated is False
        assert result.source == MigrationSource.V2
        assert result.inventory.on_person == "sword"
        assert result.inventory.stored == {"Home": "**rope**"}

    def test_v2_mapping_with_non_string_location_is_default(self) -> None:
        result = migrate_inventory({"version": 2, "stored": {"Home": 5}})
        assert result.inventory == InventoryV2()
        assert result.source == MigrationSource.DEFAULT

    def test_v2_model_is_copied(self) -> None:
        original = InventoryV2(on_person="Sword")
        result = migrate_inventory(original)
        assert result.inventory == original
        assert result.inventory is not original
        assert result.source == MigrationSource.V2

    def test_invalid_v2_mapping_is_default(self) -> None:
        result = migrate_inventory({"version": 2, "onPerson": {"nested": True}})
        assert result.inventory == InventoryV2()
        assert result.source == MigrationSource.DEFAULT

    def test_v1_variant(self) -> None:
        result = migrate_inventory(InventoryV1(items="Rope"))
        assert result.inventory.on_person == "Rope"
        assert result.source == MigrationSource.V1

    @pytest.mark.parametrize(
        "raw", [42, 3.5, True, ["Sword"], {"version": 3}, {"items": "Sword"}, object()]
    )
    def test_total_on_anything(self, raw: object) -> None:
        result = migrate_inventory(raw)
        assert result.inventory.version == 2
        assert result.source == MigrationSource.DEFAULT


class TestNormalizeInventory:
    """Tests for normalize_inventory."""

    def test_cleans_every_list(self) -> None:
        raw = {
            "version": 2,
            "onPerson": "[**sword**, shield]",
            "stored": {"Home": "- tools\n- rope"},
            "assets": "none",
        }
        inventory = normalize_inventory(raw)
        assert inventory.on_person == "Sword, Shield"
        assert inventory.stored == {"Home": "Tools, Rope"}
        assert inventory.assets == "None"

    def test_bad_stored_entries_dropped_without_losing_the_rest(self) -> None:
        raw = {
            "version": 2,
            "onPerson": "Sword",
            "stored": {"__proto__": "x", "Cellar": 5, "Home": "rope"},
        }
        inventory = normalize_inventory(raw)
        assert inventory.on_person == "Sword"
        assert inventory.stored == {"Home": "Rope"}

    def test_v1_string_cleaned(self) -> None:
        assert normalize_inventory("sword, shield").on_person == "Sword, Shield"

    def test_serializes_with_camel_case(self) -> None:
        dumped = normalize_inventory("Sword").model_dump(by_alias=True)
        assert dumped == {"version": 2, "onPerson": "Sword", "stored": {}, "assets": "None"}
