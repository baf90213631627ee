"""Unit tests for the item-list codec."""

import pytest

from story_tracker.inventory import (
    MAX_ITEM_LENGTH,
    MAX_ITEMS_PER_SECTION,
    parse_items,
    serialize_items,
)


class TestParseItems:
    """Tests for parse_items."""

    def test_mixed_decoration(self) -> None:
        """Parenthesized commas, markdown and bullets are all handled."""
        raw = "Sword (gold-inlaid, cursed), Shield, **Potion**\n- Rope"
        assert parse_items(raw) == ["Sword (gold-inlaid, cursed)", "Shield", "Potion", "Rope"]

    @pytest.mark.parametrize("raw", [None, 42, "", "   ", "None", "none", "[]", "[None]", "{none}"])
    def test_empty_inputs(self, raw: object) -> None:
        assert parse_items(raw) == []

    def test_nested_brackets_stripped(self) -> None:
        assert parse_items("[[Sword, Shield]]") == ["Sword", "Shield"]

    def test_wrapping_quotes_stripped(self) -> None:
        assert parse_items('"Sword, Shield"') == ["Sword", "Shield"]

    def test_quoted_items(self) -> None:
        assert parse_items("'Sword', \"Shield\"") == ["Sword", "Shield"]

    def test_numbered_and_lettered_lists(self) -> None:
        assert parse_items("1. Sword\n2. Shield") == ["Sword", "Shield"]
        assert parse_items("a) Sword\nb) Shield") == ["Sword", "Shield"]

    def test_bullet_variants(self) -> None:
        assert parse_items("• Sword\n* Shield\n- Rope") == ["Sword", "Shield", "Rope"]

    def test_newline_inside_parentheses_becomes_space(self) -> None:
        assert parse_items("Map (torn,\nfaded), Compass") == ["Map (torn, faded)", "Compass"]

    def test_no_duplicate_separators(self) -> None:
        assert parse_items("Sword,\n\nShield,\n") == ["Sword", "Shield"]

    def test_markdown_variants(self) -> None:
        assert parse_items("*Dagger*, `Key`, ~~Rope~~") == ["Dagger", "Key", "Rope"]

    def test_whitespace_collapsed(self) -> None:
        assert parse_items("Old    rusty\tsword") == ["Old rusty sword"]

    def test_first_letter_capitalized_only(self) -> None:
        assert parse_items("iPhone case, sword") == ["IPhone case", "Sword"]

    def test_none_items_dropped(self) -> None:
        assert parse_items("Sword, None, , Shield") == ["Sword", "Shield"]

    def test_unmatched_closing_paren_tolerated(self) -> None:
        assert parse_items("Sword), Shield") == ["Sword)", "Shield"]

    def test_unclosed_paren_keeps_rest_together(self) -> None:
        assert parse_items("Sword (broken, Shield") == ["Sword (broken, Shield"]

    def test_long_item_truncated(self) -> None:
        items = parse_items("x" * (MAX_ITEM_LENGTH + 50))
        assert items == ["X" + "x" * (MAX_ITEM_LENGTH - 1)]

    def test_item_count_capped(self) -> None:
        raw = ", ".join(f"Item{i}" for i in range(MAX_ITEMS_PER_SECTION + 20))
        items = parse_items(raw)
        assert len(items) == MAX_ITEMS_PER_SECTION
        assert items[-1] == f"Item{MAX_ITEMS_PER_SECTION - 1}"


class TestSerializeItems:
    """Tests for serialize_items."""

    def test_joins_with_comma_space(self) -> None:
        assert serialize_items(["Sword", " Shield "]) == "Sword, Shield"

    @pytest.mark.parametrize("items", [[], None, "Sword", ["", "  "]])
    def test_empty_or_invalid_is_none(self, items: object) -> None:
        assert serialize_items(items) == "None"

    def test_skips_non_strings(self) -> None:
        assert serialize_items(["Sword", 3, None]) == "Sword"

    def test_round_trip_for_clean_names(self) -> None:
        names = ["Sword", "Leather armor", "3x Health potions", "Map"]
        assert parse_items(serialize_items(names)) == names
