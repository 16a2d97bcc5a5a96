"""Common test fixtures."""

import pytest

from mythic_scribe.config import ScribeConfig
from mythic_scribe.context import ResolutionContext
from mythic_scribe.datasets.enums import EnumHandler
from mythic_scribe.datasets.models import ScribeDataset
from mythic_scribe.datasets.registry import RegistrySet
from mythic_scribe.document import TextDocument

DATASET = {
    "mechanics": [
        {
            "class": "DamageMechanic",
            "name": ["damage", "d"],
            "description": "Deals damage to the target",
            "link": "https://example.invalid/damage",
            "attributes": [
                {"name": ["amount", "a"], "type": "Float", "description": "Damage dealt"},
                {"name": ["ignorearmor", "ia", "i"], "type": "Boolean"},
            ],
        },
        {
            "class": "SkillMechanic",
            "name": ["skill", "metaskill", "meta"],
            "description": "Executes a metaskill",
            "attributes": [{"name": ["skill", "s"], "description": "The metaskill"}],
        },
        {
            "class": "ProjectileMechanic",
            "name": ["projectile", "p"],
            "description": "Fires a projectile",
            "attributes": [
                {"name": ["velocity", "v"], "type": "Float"},
                {
                    "name": ["hitconditions", "hc"],
                    "special_value": "conditions",
                    "description": "Conditions checked on hit",
                },
                {"name": ["internalid"], "inheritable": False},
            ],
        },
        {
            "class": "MissileMechanic",
            "extends": "ProjectileMechanic",
            "name": ["missile", "mi"],
            "description": "Fires a homing projectile",
            "attributes": [{"name": ["inertia", "in"], "type": "Float"}],
        },
        {
            "class": "SoundMechanic",
            "name": ["sound", "s"],
            "attributes": [
                {"name": ["sound", "s"], "enum": "SOUND"},
                {"name": ["mode", "m"], "enum": "ADD,SET,MULTIPLY"},
            ],
        },
        {
            "class": "ParticlesMechanic",
            "name": ["particles", "effect:particles", "e:p"],
            "attributes": [
                {"name": ["particle", "p"], "enum": "PARTICLE"},
                {"name": ["secondaryparticle", "sp"], "enum": "PARTICLE"},
            ],
        },
        {
            "plugin": "MythicCrucible",
            "class": "FurnitureMechanic",
            "name": ["furniturestate"],
            "attributes": [{"name": ["state"]}],
        },
    ],
    "targeters": [
        {
            "class": "RingTargeter",
            "name": ["Ring"],
            "description": "Targets points in a ring",
            "attributes": [
                {"name": ["radius", "r"], "type": "Float"},
                {"name": ["points", "p"], "type": "Integer"},
                {"name": ["conditions", "cond"], "special_value": "conditions"},
            ],
        },
        {"class": "SelfTargeter", "name": ["self", "caster"]},
        {"class": "TargetTargeter", "name": ["target", "t"]},
    ],
    "conditions": [
        {
            "class": "DistanceCondition",
            "name": ["distance"],
            "description": "Checks the distance to the target",
            "attributes": [{"name": ["distance", "d"], "description": "Range to match"}],
        },
        {"class": "DayCondition", "name": ["day", "isday"]},
        {
            "class": "StanceCondition",
            "name": ["stance"],
            "attributes": [{"name": ["stance", "s"]}],
        },
    ],
    "triggers": [
        {"class": "DamagedTrigger", "name": ["onDamaged"]},
        {"class": "AttackTrigger", "name": ["onAttack"]},
    ],
    "aitargets": [
        {
            "class": "PlayersTargeter",
            "name": ["players", "nearestplayers"],
            "attributes": [{"name": ["range"]}],
        },
    ],
    "aigoals": [
        {
            "class": "GoToLocationGoal",
            "name": ["gotolocation", "goto"],
            "attributes": [
                {"name": ["location", "l"]},
                {"name": ["conditions", "c"], "special_value": "conditions"},
            ],
        },
    ],
    "enums": {
        "MATERIAL": {
            "STONE": {"description": "Smooth stone"},
            "DIRT": {},
            "DIAMOND_SWORD": {"description": "A sword"},
        },
        "SOUND": {"entity.zombie.hurt": {"description": "Zombie hurt"}},
        "PARTICLE": {
            "reddust": {
                "name": ["dust"],
                "attributes": [{"name": ["color", "c"], "description": "Dust color"}],
            },
            "flame": {},
        },
        "mythicbukkitattributes": {
            "Damage": {},
            "Health": {"description": "Maximum health"},
            "Armor": {},
        },
        "PAPERATTRIBUTEOPERATION": {"ADD": {}, "MULTIPLY_BASE": {}, "MULTIPLY": {}},
        "advancementdisplayframe": {"TASK": {}, "GOAL": {}, "CHALLENGE": {}},
    },
    "placeholders": [
        {"path": "caster.health", "description": "Caster health", "return_type": "number"},
        {"path": "caster.name", "description": "Caster name", "return_type": "string"},
        {"path": "caster.var.{custom_placeholder}", "return_type": "string"},
        {"path": "random.{integer}", "return_type": "number"},
    ],
    "meta_keywords": [
        {"keyword": "size", "origin_type": "string", "return_type": "number"},
        {"keyword": "abs", "origin_type": "number", "return_type": "number"},
    ],
}


@pytest.fixture
def config() -> ScribeConfig:
    return ScribeConfig(tab_size=2, enabled_plugins=None, attribute_alias_mode="default")


@pytest.fixture
def dataset() -> ScribeDataset:
    return ScribeDataset.model_validate(DATASET)


@pytest.fixture
def enums(dataset: ScribeDataset) -> EnumHandler:
    handler = EnumHandler()
    for identifier, entries in dataset.enums.items():
        handler.add_static(identifier, entries)
    return handler


@pytest.fixture
def registries(dataset: ScribeDataset, enums: EnumHandler, config: ScribeConfig) -> RegistrySet:
    return RegistrySet.from_dataset(dataset, enums, config)


@pytest.fixture
def context(dataset: ScribeDataset, config: ScribeConfig) -> ResolutionContext:
    return ResolutionContext(
        dataset, config=config, custom_placeholders=lambda: ["mana", "rage"]
    )


def make_document(text: str) -> TextDocument:
    """Build a document from a dedented block (first newline dropped)."""
    return TextDocument(text.removeprefix("\n"))


@pytest.fixture
def doc():
    return make_document
