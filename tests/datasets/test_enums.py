"""Tests for mythic_scribe.datasets.enums and the scripted enums."""

from mythic_scribe.datasets.enums import EnumHandler, LambdaEnum, ScriptedEnum, StaticEnum
from mythic_scribe.datasets.models import EnumEntry
from mythic_scribe.datasets.scripted import add_scripted_enums, registry_to_enum


class TestStaticEnum:
    def test_entries_in_order(self, enums):
        material = enums.get_enum("MATERIAL")
        assert material.keys() == ["STONE", "DIRT", "DIAMOND_SWORD"]
        assert material.get_dataset()["STONE"].description == "Smooth stone"
        assert material.comma_list() == "STONE,DIRT,DIAMOND_SWORD"
        assert len(material) == 3

    def test_contains_is_case_insensitive(self, enums):
        material = enums.get_enum("material")
        assert material.contains("stone")
        assert material.contains("Diamond_Sword")
        assert not material.contains("GRAVEL")

    def test_entry_aliases_become_keys(self, enums):
        particle = enums.get_enum("particle")
        assert particle.keys() == ["reddust", "dust", "flame"]
        assert particle.get_dataset()["dust"] is particle.get_dataset()["reddust"]

    def test_entry_attributes(self, enums):
        attributes = enums.get_enum("PARTICLE").get_attributes()
        assert [a.name for a in attributes] == [["color", "c"]]

    def test_raw_dicts_are_validated(self):
        scribe_enum = StaticEnum("COLORS", {"RED": {"description": "Red"}, "BLUE": {}})
        assert scribe_enum.get_dataset()["RED"].description == "Red"
        assert scribe_enum.get_attributes() == []

    def test_repr(self, enums):
        assert repr(enums.get_enum("MATERIAL")) == "StaticEnum('MATERIAL', entries=3)"


class TestLambdaEnum:
    def test_values_are_stripped(self):
        scribe_enum = LambdaEnum("a, b,,c", "a, b,,c".split(","))
        assert scribe_enum.keys() == ["a", "b", "c"]


class TestScriptedEnum:
    def test_recomputed_on_every_read(self):
        values = {"one": EnumEntry()}
        scribe_enum = ScriptedEnum("numbers", lambda: values)
        assert scribe_enum.keys() == ["one"]
        values["two"] = EnumEntry()
        assert scribe_enum.keys() == ["one", "two"]

    def test_none_is_empty(self):
        assert len(ScriptedEnum("nothing", lambda: None)) == 0


class TestEnumHandler:
    def test_lookup_is_case_insensitive(self, enums):
        assert enums.get_enum("Material") is enums.get_enum("MATERIAL")
        assert "sound" in enums
        assert enums.get_enum("missing") is None

    def test_add_lambda_reuses_existing(self):
        handler = EnumHandler()
        first = handler.add_lambda("A,B", ["A", "B"])
        assert handler.add_lambda("a,b", ["x"]) is first

    def test_identifiers(self):
        handler = EnumHandler()
        handler.add_static("MATERIAL", {})
        handler.add_scripted("boolean", lambda: None)
        assert handler.identifiers() == ["MATERIAL", "boolean"]
        assert len(handler) == 2


class TestScriptedEnums:
    def test_registry_to_enum(self, registries):
        entries = registry_to_enum(registries.targeter, "@")
        assert list(entries) == ["@Ring", "@self", "@caster", "@target", "@t"]
        assert entries["@Ring"].description == "Targets points in a ring"

    def test_add_scripted_enums(self, enums, registries):
        names = ["mana"]
        add_scripted_enums(enums, registries, lambda: names)
        assert enums.get_enum("boolean").keys() == ["true", "false"]
        assert enums.get_enum("triggerlist").keys() == ["onDamaged", "onAttack"]
        assert enums.get_enum("trigger").keys() == ["~onDamaged", "~onAttack"]
        assert "damage" in enums.get_enum("mechaniclist").keys()
        assert enums.get_enum("conditionlist").contains("ISDAY")
        names.append("rage")
        assert enums.get_enum("customplaceholder").keys() == ["mana", "rage"]

    def test_without_custom_placeholders(self, enums, registries):
        add_scripted_enums(enums, registries)
        assert enums.get_enum("customplaceholder") is None
