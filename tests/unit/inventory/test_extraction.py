"""Unit tests for plain-text inventory extraction."""

from story_tracker.inventory import (
    InventoryV2,
    build_inventory_summary,
    extract_inventory,
    extract_inventory_data,
    extract_legacy_inventory,
)

STRUCTURED = """Some narrative first.
On Person: Sword (equipped), 3x Health Potions
  Stored - Home: Spare clothes, Tools
Stored - Bank: Family heirloom
Assets: Motorcycle (garage)
"""


class TestExtractInventoryData:
    """Tests for the structured line format."""

    def test_reads_all_categories(self) -> None:
        inventory = extract_inventory_data(STRUCTURED)
        assert inventory is not None
        assert inventory.on_person == "Sword (equipped), 3x Health Potions"
        assert inventory.stored == {"Home": "Spare clothes, Tools", "Bank": "Family heirloom"}
        assert list(inventory.stored) == ["Home", "Bank"]
        assert inventory.assets == "Motorcycle (garage)"

    def test_case_insensitive(self) -> None:
        inventory = extract_inventory_data("on person: Rope\nSTORED - Cave: Torch")
        assert inventory.on_person == "Rope"
        assert inventory.stored == {"Cave": "Torch"}
        assert inventory.assets == "None"

    def test_blocked_location_skipped(self) -> None:
        inventory = extract_inventory_data("On Person: Rope\nStored - __proto__: Poison")
        assert inventory.stored == {}

    def test_nothing_found(self) -> None:
        assert extract_inventory_data("Just a story.") is None
        assert extract_inventory_data("") is None
        assert extract_inventory_data(None) is None


class TestExtractLegacyInventory:
    """Tests for the single-line legacy format."""

    def test_reads_line(self) -> None:
        assert extract_legacy_inventory("Mood: calm\nInventory: Rope, Torch\nMore") == "Rope, Torch"

    def test_none_value(self) -> None:
        assert extract_legacy_inventory("Inventory: None") is None

    def test_absent(self) -> None:
        assert extract_legacy_inventory("No items here") is None


class TestExtractInventory:
    """Tests for extract_inventory."""

    def test_prefers_structured(self) -> None:
        text = "Inventory: Old stuff\nOn Person: Sword"
        assert extract_inventory(text).on_person == "Sword"

    def test_falls_back_to_legacy(self) -> None:
        inventory = extract_inventory("Inventory: Rope, Torch")
        assert inventory == InventoryV2(on_person="Rope, Torch")

    def test_none_when_absent(self) -> None:
        assert extract_inventory("Nothing") is None


class TestBuildInventorySummary:
    """Tests for build_inventory_summary."""

    def test_renders_lines(self) -> None:
        inventory = InventoryV2(
            on_person="Sword", stored={"Home": "Tools", "Bank": ""}, assets="Cabin"
        )
        assert build_inventory_summary(inventory) == (
            "On Person: Sword\nStored - Home: Tools\nStored - Bank: None\nAssets: Cabin"
        )

    def test_default_inventory(self) -> None:
        assert build_inventory_summary(None) == "On Person: None\nAssets: None"

    def test_summary_extracts_back(self) -> None:
        inventory = InventoryV2(on_person="Sword", stored={"Home": "Tools"}, assets="Cabin")
        assert extract_inventory_data(build_inventory_summary(inventory)) == inventory
