"""Unit tests for keyword groups and named item extraction."""

import re

import pytest

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.extraction.data_structures import ItemPair
from menumine.contexts.extraction.group_filter import find_groups, is_group, keyed_groups
from menumine.contexts.extraction.item_extractor import (
    extract_pairs,
    first_qualifying_group,
    is_container_node,
    is_valid_item_name,
)

LUNCH = re.compile(r"\blunch\b", re.IGNORECASE)


@pytest.fixture
def config():
    return ExtractionConfig()


class TestGroupFilter:
    """Keyword group detection."""

    def test_object_group_needs_keyword_value_and_array(self):
        assert is_group({"meal": "Lunch", "items": [1]}, LUNCH)
        assert not is_group({"meal": "Lunch", "items": []}, LUNCH)
        assert not is_group({"meal": "Dinner", "items": [1]}, LUNCH)
        assert not is_group(["Lunch", [1]], LUNCH)

    def test_keyword_is_word_bounded(self):
        assert not is_group({"meal": "Lunchbox", "items": [1]}, LUNCH)

    def test_keyed_groups(self):
        day = {"Breakfast": [{"name": "Eggs"}], "Lunch": [{"name": "Pizza"}], "lunch": []}
        assert keyed_groups(day, LUNCH) == [[{"name": "Pizza"}]]

    def test_find_groups_in_document_order(self):
        day = {
            "meals": [
                {"meal": "Lunch", "items": [{"name": "A"}]},
                {"meal": "Dinner", "items": [{"name": "B"}]},
                {"label": "Late lunch", "items": [{"name": "C"}]},
            ]
        }
        groups = find_groups(day, LUNCH)
        assert [g["items"][0]["name"] for g in groups] == ["A", "C"]


class TestItemNames:
    """Item name plausibility."""

    @pytest.mark.parametrize("name", ["Pizza", "Chicken Tikka Masala", "BLT"])
    def test_valid_names(self, config, name):
        assert is_valid_item_name(name, config)

    @pytest.mark.parametrize(
        "name",
        [None, "", "X", "y" * 81, "Lunch", "MENU", "2026-02-10", "Special 2/10/2026", "https://x.test"],
    )
    def test_invalid_names(self, config, name):
        assert not is_valid_item_name(name, config)

    def test_generic_names_come_from_config(self):
        config = ExtractionConfig(generic_names=("pizza",))
        assert not is_valid_item_name("Pizza", config)
        assert is_valid_item_name("Lunch", config)


class TestExtractPairs:
    """Leaf extraction from a group."""

    def test_container_detection(self):
        assert is_container_node({"name": "Station", "items": [{"name": "A"}]})
        assert is_container_node({"name": "Grid", "rows": [["a"]]})
        assert not is_container_node({"name": "Pizza", "tags": ["vegan"]})
        assert not is_container_node({"name": "Pizza", "items": []})

    def test_containers_skipped_but_descended(self, config):
        group = {
            "meal": "Lunch",
            "stations": [
                {"name": "Grill", "items": [{"name": "Burger", "station": "Grill"}]},
                {"name": "Soup", "items": [{"name": "Chili", "station": "Soup"}]},
            ],
        }
        pairs = extract_pairs(group, config)
        assert pairs == [ItemPair("Burger", "Grill"), ItemPair("Chili", "Soup")]

    def test_pairs_unique_by_name_and_section(self, config):
        group = [
            {"name": "Pizza", "station": "Entree"},
            {"name": "Pizza", "station": "Entree"},
            {"name": "Pizza", "station": "Pizza Bar"},
            {"name": "Pizza"},
        ]
        pairs = extract_pairs(group, config)
        assert [p.key for p in pairs] == [
            ("Pizza", "Entree"),
            ("Pizza", "Pizza Bar"),
            ("Pizza", None),
        ]

    def test_name_and_section_keys_in_priority_order(self, config):
        group = [{"title": "Ignored", "name": "  Tacos ", "category": "X", "station": "Grill"}]
        assert extract_pairs(group, config) == [ItemPair("Tacos", "Grill")]

    def test_first_qualifying_group_applies_minimum(self, config):
        noise = {"meal": "Lunch", "links": [{"name": "Nutrition"}]}
        real = {
            "meal": "Lunch",
            "items": [{"name": "Pizza"}, {"name": "Salad"}, {"name": "Soup"}],
        }
        pairs = first_qualifying_group([noise, real], config)
        assert [p.name for p in pairs] == ["Pizza", "Salad", "Soup"]

    def test_no_group_qualifies(self, config):
        assert first_qualifying_group([{"items": [{"name": "Pizza"}]}], config) is None
        assert first_qualifying_group([], config) is None

    def test_minimum_override(self, config):
        group = {"meal": "Lunch", "items": [{"name": "Pizza"}]}
        assert first_qualifying_group([group], config, min_pairs=1) == [ItemPair("Pizza")]
