"""Tests for state_loader / item_loader: ensures data documents load correctly."""

import json
from pathlib import Path

import pytest

from hundred_days.loaders.item_loader import ConfigError, parse_action, parse_item
from hundred_days.loaders.state_loader import load_state, parse_state
from hundred_days.models.actions import (
    ACTIVE_TYPES,
    PASSIVE_TYPES,
    Buy,
    Construct,
    Deconstruct,
    GlobalAction,
    Produce,
    Reduce,
    Sell,
)
from hundred_days.models.items import ItemCategory

# Path to the shipped data document
DATA_FILE = Path(__file__).resolve().parent.parent / "config" / "hundred_days.yaml"


def _document(**items) -> dict:
    return {"day": 10, "currency": 50, "items": items}


class TestLoadShippedData:
    """Verify that the data document in config/ is valid."""

    def test_data_file_exists(self):
        assert DATA_FILE.exists(), f"Data file not found: {DATA_FILE}"

    def test_load_returns_items(self):
        game = load_state(DATA_FILE)
        assert len(game.items) > 0
        assert game.day == game.starting_day == 100
        assert game.currency == 100

    def test_both_categories_present(self):
        game = load_state(DATA_FILE)
        assert game.items_by_category(ItemCategory.RESOURCE)
        assert game.items_by_category(ItemCategory.BUILDING)

    def test_every_building_can_be_constructed(self):
        game = load_state(DATA_FILE)
        for building in game.items_by_category(ItemCategory.BUILDING):
            assert any(isinstance(a, Construct) for a in building.active_actions), building.name

    def test_pass_day_offered(self):
        game = load_state(DATA_FILE)
        assert GlobalAction.PASS_DAY in game.global_actions


class TestLoadFromFile:

    def test_load_yaml(self, tmp_path):
        f = tmp_path / "game.yaml"
        f.write_text(
            "day: 5\n"
            "currency: 100\n"
            "items:\n"
            "  Wood:\n"
            "    amount: 0\n"
            "    category: Resource\n"
            "    industries: [Logging]\n"
            "    active_actions:\n"
            "      - Buy: {buy_price: 5}\n"
        )
        game = load_state(f)
        assert game.items["Wood"].active_actions == [Buy(5)]
        assert game.items["Wood"].industries == ["Logging"]
        assert game.global_actions == [GlobalAction.PASS_DAY]

    def test_load_json_with_alias_field_names(self, tmp_path):
        """The JSON variant uses name fields and actions_active/actions_passive."""
        doc = {
            "day": 100,
            "currency": 20,
            "industries": ["Farming"],
            "global_actions": ["PassDay"],
            "items": {
                "Grain": {"name": "Grain", "amount": 3, "category": "Resource",
                          "industries": ["Farming"],
                          "actions_active": [{"Sell": {"sell_price": 1}}],
                          "actions_passive": []},
                "Farm": {"name": "Farm", "amount": 1, "category": "Building",
                         "industries": ["Farming"],
                         "actions_active": [{"Construct": {"build_cost": {"Grain": 2}}}],
                         "actions_passive": [{"Produce": {"item_production": {"Grain": 3}}}]},
            },
        }
        f = tmp_path / "hundred_days.json"
        f.write_text(json.dumps(doc))
        game = load_state(f)
        assert game.items["Farm"].category == ItemCategory.BUILDING
        assert game.items["Farm"].passive_actions == [Produce({"Grain": 3})]
        assert game.items["Grain"].active_actions == [Sell(1)]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_state(tmp_path / "nonexistent.yaml")

    def test_unparseable_file(self, tmp_path):
        f = tmp_path / "broken.yaml"
        f.write_text("day: [1, 2\n")
        with pytest.raises(ConfigError):
            load_state(f)

    def test_empty_file(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        with pytest.raises(ConfigError):
            load_state(f)


class TestParseState:

    def test_missing_top_level_key(self):
        with pytest.raises(ConfigError, match="currency"):
            parse_state({"day": 1, "items": {}})

    def test_non_integer_currency(self):
        with pytest.raises(ConfigError, match="currency"):
            parse_state({"day": 1, "currency": 1.5, "items": {}})

    def test_dangling_reference(self):
        doc = _document(House={"active_actions": [{"Construct": {"build_cost": {"Marble": 1}}}]})
        with pytest.raises(ConfigError, match="Marble"):
            parse_state(doc)

    def test_dangling_passive_reference(self):
        doc = _document(Mine={"passive_actions": [{"Produce": {"item_production": {"Ore": 1}}}]})
        with pytest.raises(ConfigError, match="Ore"):
            parse_state(doc)

    def test_deconstruct_into_itself(self):
        doc = _document(
            Wood={},
            Crate={"active_actions": [{"Deconstruct": {"item_gain": {"Crate": 1, "Wood": 1}}}]},
        )
        with pytest.raises(ConfigError, match="Crate: Deconstruct returns the item itself"):
            parse_state(doc)

    def test_unknown_global_action(self):
        doc = _document()
        doc["global_actions"] = ["Rewind"]
        with pytest.raises(ConfigError, match="Rewind"):
            parse_state(doc)

    def test_empty_global_actions(self):
        doc = _document()
        doc["global_actions"] = []
        assert parse_state(doc).global_actions == []

    def test_undeclared_industry_only_warns(self, caplog):
        doc = _document(Wood={"industries": ["Logging"]})
        game = parse_state(doc)
        assert game.items["Wood"].industries == ["Logging"]
        assert "undeclared industry" in caplog.text


class TestParseItem:

    def test_defaults(self):
        item = parse_item("Wood", {})
        assert item.amount == 0
        assert item.category == ItemCategory.RESOURCE
        assert item.active_actions == []
        assert item.passive_actions == []

    def test_name_mismatch(self):
        with pytest.raises(ConfigError, match="does not match"):
            parse_item("Wood", {"name": "Stone"})

    def test_unknown_category(self):
        with pytest.raises(ConfigError, match="category"):
            parse_item("Wood", {"category": "Vehicle"})

    def test_both_action_keys(self):
        with pytest.raises(ConfigError, match="both"):
            parse_item("Wood", {"active_actions": [], "actions_active": []})

    def test_passive_action_in_active_list(self):
        with pytest.raises(ConfigError, match="unknown action 'Produce'"):
            parse_item("Mill", {"active_actions": [{"Produce": {"item_production": {}}}]})


class TestParseAction:

    @pytest.mark.parametrize("raw,expected", [
        ({"Buy": {"buy_price": 5}}, Buy(5)),
        ({"Sell": {"sell_price": 0}}, Sell(0)),
        ({"Construct": {"build_cost": {"Wood": 2}}}, Construct({"Wood": 2})),
        ({"Deconstruct": {"item_gain": {"Wood": 1}}}, Deconstruct({"Wood": 1})),
    ])
    def test_active_variants(self, raw, expected):
        assert parse_action(raw, ACTIVE_TYPES, "a") == expected

    @pytest.mark.parametrize("raw,expected", [
        ({"Produce": {"item_production": {"Grain": 3}}}, Produce({"Grain": 3})),
        ({"Reduce": {"item_reduction": {"Grain": 1}}}, Reduce({"Grain": 1})),
    ])
    def test_passive_variants(self, raw, expected):
        assert parse_action(raw, PASSIVE_TYPES, "p") == expected

    @pytest.mark.parametrize("raw", [
        {"Buy": {"buy_price": 0}},
        {"Construct": {"build_cost": {"Wood": 0}}},
        {"Reduce": {"item_reduction": {"Wood": 0}}},
        {"Sell": {"sell_price": -1}},
        {"Deconstruct": {"item_gain": {"Wood": -2}}},
        {"Buy": {"buy_price": 2.5}},
        {"Buy": {"buy_price": True}},
    ])
    def test_invalid_numbers(self, raw):
        types = PASSIVE_TYPES if "Reduce" in raw else ACTIVE_TYPES
        with pytest.raises(ConfigError):
            parse_action(raw, types, "x")

    def test_missing_parameter(self):
        with pytest.raises(ConfigError, match="buy_price"):
            parse_action({"Buy": {}}, ACTIVE_TYPES, "x")

    def test_not_single_key(self):
        with pytest.raises(ConfigError):
            parse_action({"Buy": {"buy_price": 1}, "Sell": {"sell_price": 1}}, ACTIVE_TYPES, "x")

    def test_bare_string(self):
        with pytest.raises(ConfigError):
            parse_action("Buy", ACTIVE_TYPES, "x")
