"""Bundled schemas, stored as YAML next to this module.

Nothing is read at import time. Each schema is parsed the first time it is
asked for and cached for the life of the process.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from loguru import logger

from mythic_scribe.schema.nodes import Schema
from mythic_scribe.schema.parser import parse_schema
from mythic_scribe.schema.utils import inherit_schema_options

LIBRARY_DIR = Path(__file__).parent

ACHIEVEMENTS_WIKI = "https://git.lumine.io/mythiccraft/mythicachievements/-/wikis/Usage"
ITEM_ATTRIBUTES_WIKI = "https://git.lumine.io/mythiccraft/MythicMobs/-/wikis/Items/Attributes"

# name -> (file, link, plugin)
_BUNDLED: dict[str, tuple[str, str, str]] = {
    "achievement": ("achievement.yaml", ACHIEVEMENTS_WIKI, "MythicAchievements"),
    "item": ("item_attributes.yaml", ITEM_ATTRIBUTES_WIKI, "MythicMobs"),
}

BUNDLED_SCHEMA_NAMES: tuple[str, ...] = tuple(_BUNDLED)

_CONSTANTS = {
    "ACHIEVEMENT_SCHEMA": "achievement",
    "ITEM_ATTRIBUTES_SCHEMA": "item",
}


def load_schema_file(path: Path, link: str | None = None, plugin: str | None = None) -> Schema:
    """Parse a YAML schema file and propagate link and plugin through it."""
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    schema = inherit_schema_options(parse_schema(data), link, plugin)
    logger.debug(f"Loaded schema {path.name} with {len(schema)} top-level keys")
    return schema


@lru_cache
def bundled_schema(name: str) -> Schema:
    """Return a bundled schema by name, loading it on first use."""
    filename, link, plugin = _BUNDLED[name]
    return load_schema_file(LIBRARY_DIR / filename, link, plugin)


def bundled_schemas() -> dict[str, Schema]:
    return {name: bundled_schema(name) for name in BUNDLED_SCHEMA_NAMES}


def __getattr__(name: str) -> Schema | dict[str, Schema]:
    if name in _CONSTANTS:
        return bundled_schema(_CONSTANTS[name])
    if name == "BUNDLED_SCHEMAS":
        return bundled_schemas()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "ACHIEVEMENT_SCHEMA",
    "BUNDLED_SCHEMAS",
    "BUNDLED_SCHEMA_NAMES",
    "ITEM_ATTRIBUTES_SCHEMA",
    "bundled_schema",
    "bundled_schemas",
    "load_schema_file",
]
