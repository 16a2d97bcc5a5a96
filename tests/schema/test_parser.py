"""Tests for mythic_scribe.schema.parser -- schema data parsing."""

import importlib

import pytest
from loguru import logger

from mythic_scribe.errors import SchemaDefinitionError
from mythic_scribe.schema import library
from mythic_scribe.schema.library import (
    ACHIEVEMENT_SCHEMA,
    ACHIEVEMENTS_WIKI,
    ITEM_ATTRIBUTES_SCHEMA,
    load_schema_file,
)
from mythic_scribe.schema.nodes import ARRAYKEY, WILDKEY, LazySchema, SchemaKind, SchemaNode
from mythic_scribe.schema.parser import parse_schema, parse_schema_node


# --- parse_schema_node ---


class TestParseSchemaNode:
    def test_minimal_node(self):
        node = parse_schema_node({"type": "string"})
        assert node.kind is SchemaKind.STRING
        assert node.description is None
        assert node.values is None
        assert node.entries == []
        assert node.keys is None
        assert node.max_depth is False

    def test_type_is_case_insensitive(self):
        assert parse_schema_node({"type": "ENUM", "dataset": "MATERIAL"}).kind is SchemaKind.ENUM

    def test_all_fields(self):
        node = parse_schema_node(
            {
                "type": "key",
                "description": "An icon",
                "link": "https://example.invalid",
                "plugin": "MythicMobs",
                "keys": {"Material": {"type": "enum", "dataset": "MATERIAL"}},
                "max_depth": True,
            }
        )
        assert node.kind is SchemaKind.KEY
        assert node.description == "An icon"
        assert node.link == "https://example.invalid"
        assert node.plugin == "MythicMobs"
        assert node.max_depth is True
        assert node.children()["Material"].dataset == "MATERIAL"

    def test_literal_values_become_strings(self):
        node = parse_schema_node({"type": "integer", "values": [1, 2, 3]})
        assert node.values == ["1", "2", "3"]

    def test_range_values(self):
        node = parse_schema_node({"type": "integer", "values": {"min": 0, "max": 20, "step": 10}})
        assert node.values == ["0", "10", "20"]

    def test_float_range_values(self):
        node = parse_schema_node(
            {"type": "float", "values": {"min": -1, "max": 0, "step": 0.5, "float": True}}
        )
        assert node.values == ["-1.00", "-0.50", "0.00"]

    def test_entries(self):
        node = parse_schema_node(
            {
                "type": "entry_list",
                "entries": [
                    {"type": "float", "values": [1, 2]},
                    {"type": "enum", "dataset": "PAPERATTRIBUTEOPERATION"},
                ],
            }
        )
        assert [entry.kind for entry in node.entries] == [SchemaKind.FLOAT, SchemaKind.ENUM]

    def test_callable_keys_are_lazy(self):
        calls = []

        def factory():
            calls.append(1)
            return {"Inner": SchemaNode(SchemaKind.STRING)}

        node = parse_schema_node({"type": "key", "keys": factory})
        assert isinstance(node.keys, LazySchema)
        assert calls == []
        assert "Inner" in node.children()
        assert "Inner" in node.children()
        assert calls == [1]

    def test_node_instance_passes_through(self):
        node = SchemaNode(SchemaKind.BOOLEAN)
        assert parse_schema_node(node) is node


class TestParseSchemaNodeErrors:
    @pytest.mark.parametrize(
        "data,message",
        [
            ({"type": "bogus"}, "Unknown schema node type"),
            ({"description": "no type"}, "has no type"),
            ({"type": "string", "colour": "red"}, "Unknown schema node fields"),
            ({"type": "enum"}, "enum node has no dataset"),
            ({"type": "key"}, "neither keys nor values"),
            ({"type": "integer", "values": {"min": 0, "max": 1}}, "missing 'step'"),
            ({"type": "integer", "values": "1,2"}, "values must be"),
            ({"type": "key", "keys": 3}, "keys must be"),
            ({"type": "entry_list", "entries": {"type": "float"}}, "entries must be a list"),
            ("string", "must be a mapping"),
        ],
    )
    def test_contract_violations(self, data, message):
        with pytest.raises(SchemaDefinitionError, match=message):
            parse_schema_node(data, ["Node"])

    def test_error_carries_path(self):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            parse_schema({"Icon": {"type": "key", "keys": {"Material": {"type": "enum"}}}})
        assert exc_info.value.path == ["Icon", "Material"]
        assert "at Icon.Material" in str(exc_info.value)

    def test_entry_error_path(self):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            parse_schema({"Slot": {"type": "entry_list", "entries": [{"type": "nope"}]}})
        assert exc_info.value.path == ["Slot", "[0]"]


# --- parse_schema ---


class TestParseSchema:
    def test_keys_are_strings(self):
        schema = parse_schema({1: {"type": "string"}})
        assert list(schema) == ["1"]

    def test_wildcard_requires_display(self):
        with pytest.raises(SchemaDefinitionError, match="wildcard key has no display"):
            parse_schema({WILDKEY: {"type": "string"}})

    def test_array_key_requires_dataset(self):
        with pytest.raises(SchemaDefinitionError, match="array key has no key_dataset"):
            parse_schema({ARRAYKEY: {"type": "string", "display": "Attribute"}})

    def test_special_keys(self):
        schema = parse_schema(
            {
                WILDKEY: {"type": "string", "display": "Criteria"},
                ARRAYKEY: {"type": "integer", "display": "Stat", "key_dataset": "STATS"},
                "Name": {"type": "string"},
            }
        )
        assert schema[WILDKEY].display == "Criteria"
        assert schema[ARRAYKEY].key_dataset == "STATS"

    def test_not_a_mapping(self):
        with pytest.raises(SchemaDefinitionError, match="Schema must be a mapping"):
            parse_schema(["Display"])


# --- bundled schemas ---


class TestBundledSchemas:
    def test_import_loads_nothing(self):
        messages = []
        sink = logger.add(messages.append, level="DEBUG")
        try:
            importlib.reload(library)
        finally:
            logger.remove(sink)
        assert messages == []

    def test_loaded_on_first_use_and_cached(self):
        messages = []
        sink = logger.add(messages.append, level="DEBUG")
        try:
            library.bundled_schema.cache_clear()
            first = library.bundled_schema("achievement")
            assert library.ACHIEVEMENT_SCHEMA is first
        finally:
            logger.remove(sink)
        assert len(messages) == 1
        assert "achievement.yaml" in messages[0]

    def test_bundled_names(self):
        assert set(library.bundled_schemas()) == set(library.BUNDLED_SCHEMA_NAMES)
        assert set(library.BUNDLED_SCHEMAS) == {"achievement", "item"}
        with pytest.raises(KeyError):
            library.bundled_schema("quests")

    def test_achievement_layout(self):
        assert {"Display", "Icon", "Criteria", "Reward", "Frame"} <= set(ACHIEVEMENT_SCHEMA)
        material = ACHIEVEMENT_SCHEMA["Icon"].children()["Material"]
        assert material.kind is SchemaKind.ENUM
        assert material.dataset == "MATERIAL"

    def test_options_are_inherited(self):
        material = ACHIEVEMENT_SCHEMA["Icon"].children()["Material"]
        assert material.link == ACHIEVEMENTS_WIKI
        assert material.plugin == "MythicAchievements"

    def test_range_values_in_yaml(self):
        criteria = ACHIEVEMENT_SCHEMA["Criteria"].children()[WILDKEY].children()
        assert criteria["Amount"].values[0] == "1"
        assert criteria["Amount"].values[-1] == "100"
        assert criteria["CheckInterval"].values[:3] == ["1", "10", "20"]

    def test_item_slots_share_layout(self):
        slots = ITEM_ATTRIBUTES_SCHEMA["Attributes"].children()
        assert {"All", "MainHand", "OffHand", "Head", "Chest", "Legs", "Feet"} == set(slots)
        for slot in slots.values():
            array_node = slot.children()[ARRAYKEY]
            assert array_node.kind is SchemaKind.ENTRY_LIST
            assert array_node.key_dataset == "mythicbukkitattributes"
            assert len(array_node.entries) == 2

    def test_load_schema_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            "Name:\n  type: string\nSub:\n  type: key\n  keys:\n    A:\n      type: float\n"
        )
        schema = load_schema_file(path, "https://example.invalid", "MythicCrucible")
        assert schema["Sub"].children()["A"].plugin == "MythicCrucible"
        assert schema["Name"].link == "https://example.invalid"

    def test_load_empty_schema_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_schema_file(path) == {}
