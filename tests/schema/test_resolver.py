"""Tests for mythic_scribe.schema.resolver -- walking schema trees."""

import pytest

from mythic_scribe.schema.library import ACHIEVEMENT_SCHEMA, ITEM_ATTRIBUTES_SCHEMA
from mythic_scribe.schema.nodes import ARRAYKEY, WILDKEY, SchemaKind, SchemaNode
from mythic_scribe.schema.parser import parse_schema
from mythic_scribe.schema.resolver import (
    find_nodes_on_level,
    locate_schema_node,
    match_schema_key,
)


@pytest.fixture
def mixed_schema():
    return parse_schema(
        {
            "Name": {"type": "integer"},
            ARRAYKEY: {
                "type": "float",
                "display": "Attribute",
                "key_dataset": "mythicbukkitattributes",
            },
            WILDKEY: {"type": "string", "display": "Anything"},
        }
    )


def _nested(max_depth: bool):
    return parse_schema(
        {
            "A": {
                "type": "key",
                "max_depth": max_depth,
                "keys": {"B": {"type": "key", "keys": {"C": {"type": "string"}}}},
            }
        }
    )


# --- match_schema_key ---


class TestMatchSchemaKey:
    def test_literal_first(self, mixed_schema, enums):
        assert match_schema_key("Name", mixed_schema, enums).kind is SchemaKind.INTEGER

    def test_array_key_before_wildcard(self, mixed_schema, enums):
        assert match_schema_key("Health", mixed_schema, enums).kind is SchemaKind.FLOAT

    def test_array_key_membership_is_case_insensitive(self, mixed_schema, enums):
        assert match_schema_key("health", mixed_schema, enums).kind is SchemaKind.FLOAT

    def test_wildcard_fallback(self, mixed_schema, enums):
        assert match_schema_key("Whatever", mixed_schema, enums).kind is SchemaKind.STRING

    def test_array_key_needs_enums(self, mixed_schema):
        assert match_schema_key("Health", mixed_schema).kind is SchemaKind.STRING

    def test_no_match(self):
        assert match_schema_key("Other", {"Name": SchemaNode(SchemaKind.STRING)}) is None


# --- locate_schema_node ---


class TestLocateSchemaNode:
    def test_icon_material(self, enums):
        node, depth = locate_schema_node(["Icon", "Material"], ACHIEVEMENT_SCHEMA, enums)
        assert node.kind is SchemaKind.ENUM
        assert node.dataset == "MATERIAL"
        assert depth == 1

    def test_top_level_key(self):
        node, depth = locate_schema_node(["Display"], ACHIEVEMENT_SCHEMA)
        assert node.kind is SchemaKind.STRING
        assert depth == 0

    def test_wildcard_segment(self):
        node, depth = locate_schema_node(["Criteria", "kill_zombies", "Amount"], ACHIEVEMENT_SCHEMA)
        assert node.kind is SchemaKind.INTEGER
        assert depth == 2

    def test_array_key_segment(self, enums):
        node, depth = locate_schema_node(
            ["Attributes", "MainHand", "damage"], ITEM_ATTRIBUTES_SCHEMA, enums
        )
        assert node.kind is SchemaKind.ENTRY_LIST
        assert depth == 2

    def test_array_key_rejects_unknown_names(self, enums):
        path = ["Attributes", "MainHand", "Speed"]
        assert locate_schema_node(path, ITEM_ATTRIBUTES_SCHEMA, enums) is None

    def test_list_is_a_leaf_container(self):
        node, depth = locate_schema_node(["Reward", "Drops", "anything"], ACHIEVEMENT_SCHEMA)
        assert node.kind is SchemaKind.LIST
        assert depth == 1

    def test_key_list_is_a_leaf_container(self):
        schema = parse_schema({"Options": {"type": "key_list"}})
        node, depth = locate_schema_node(["Options", "Custom", "More"], schema)
        assert node.kind is SchemaKind.KEY_LIST
        assert depth == 0

    def test_scalar_with_remaining_path(self):
        assert locate_schema_node(["Display", "Extra"], ACHIEVEMENT_SCHEMA) is None

    def test_unknown_key(self):
        assert locate_schema_node(["Nope"], ACHIEVEMENT_SCHEMA) is None

    def test_empty_path(self):
        assert locate_schema_node([], ACHIEVEMENT_SCHEMA) is None

    def test_depth_counts_descents(self):
        _, depth = locate_schema_node(["A", "B", "C"], _nested(max_depth=False))
        assert depth == 2

    def test_max_depth_stops_depth_counting(self):
        node, depth = locate_schema_node(["A", "B", "C"], _nested(max_depth=True))
        assert node.kind is SchemaKind.STRING
        assert depth == 1

    def test_starting_depth(self):
        _, depth = locate_schema_node(["Icon", "Material"], ACHIEVEMENT_SCHEMA, depth=3)
        assert depth == 4

    def test_lazy_children_resolved_once(self):
        calls = []

        def factory():
            calls.append(1)
            return parse_schema({"Inner": {"type": "boolean"}})

        schema = parse_schema({"Outer": {"type": "key", "keys": factory}})
        assert locate_schema_node(["Outer", "Inner"], schema)[0].kind is SchemaKind.BOOLEAN
        assert locate_schema_node(["Outer", "Inner"], schema)[0].kind is SchemaKind.BOOLEAN
        assert calls == [1]

    def test_path_round_trip(self, enums):
        """Every literal key reachable by walking the schema locates back to its node."""

        def walk(schema, prefix):
            for key, node in schema.items():
                if key in (WILDKEY, ARRAYKEY):
                    continue
                yield [*prefix, key], node
                if node.kind is SchemaKind.KEY and node.has_children:
                    yield from walk(node.children(), [*prefix, key])

        for path, node in walk(ACHIEVEMENT_SCHEMA, []):
            located, depth = locate_schema_node(path, ACHIEVEMENT_SCHEMA, enums)
            assert located is node
            assert depth == len(path) - 1


# --- find_nodes_on_level ---


class TestFindNodesOnLevel:
    def test_root(self):
        target, level = find_nodes_on_level(ACHIEVEMENT_SCHEMA, [], 1)
        assert target is ACHIEVEMENT_SCHEMA
        assert level == 1

    def test_key_with_children(self):
        target, level = find_nodes_on_level(ACHIEVEMENT_SCHEMA, ["Icon"], 1)
        assert set(target) == {"Material", "Model", "SkullTexture"}
        assert level == 2

    def test_wildcard_children(self):
        target, level = find_nodes_on_level(ACHIEVEMENT_SCHEMA, ["Criteria", "kill"], 1)
        assert "Amount" in target
        assert level == 3

    def test_list_stays_on_level(self):
        target, level = find_nodes_on_level(ACHIEVEMENT_SCHEMA, ["Reward", "Drops"], 1)
        assert isinstance(target, SchemaNode)
        assert target.kind is SchemaKind.LIST
        assert level == 2

    def test_key_list_goes_one_level_deeper(self):
        schema = parse_schema({"Options": {"type": "key_list"}})
        target, level = find_nodes_on_level(schema, ["Options"], 1)
        assert target.kind is SchemaKind.KEY_LIST
        assert level == 2

    def test_scalar_returns_current_mapping(self):
        target, level = find_nodes_on_level(ACHIEVEMENT_SCHEMA, ["Display"], 1)
        assert target is ACHIEVEMENT_SCHEMA
        assert level == 1

    def test_max_depth_returns_its_children(self):
        target, level = find_nodes_on_level(_nested(max_depth=True), ["A", "B", "C"], 1)
        assert set(target) == {"B"}
        assert level == 2

    def test_unknown_key(self):
        assert find_nodes_on_level(ACHIEVEMENT_SCHEMA, ["Nope"], 1) is None

    def test_array_key_children(self, enums):
        path = ["Attributes", "Head"]
        target, level = find_nodes_on_level(ITEM_ATTRIBUTES_SCHEMA, path, 1, enums)
        assert set(target) == {ARRAYKEY}
        assert level == 3
