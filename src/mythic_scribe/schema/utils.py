"""Helpers for building and preparing schema trees."""

from dataclasses import replace

from mythic_scribe.config import ScribeConfig
from mythic_scribe.schema.nodes import Schema


def generate_numbers_in_range(
    minimum: float,
    maximum: float,
    step: float,
    as_float: bool = False,
    start: float | None = None,
) -> list[str]:
    """Generate the numbers of a range as strings.

    Examples:
        generate_numbers_in_range(1, 3, 1)          -> ["1", "2", "3"]
        generate_numbers_in_range(0, 20, 10, start=1) -> ["1", "10", "20"]
        generate_numbers_in_range(-1, 0, 0.5, True) -> ["-1.00", "-0.50", "0.00"]

    A truthy start is emitted first and the range then begins one step later.
    """
    result: list[str] = []
    if start:
        result.append(str(start))
        minimum += step

    count = 0
    value = minimum
    while value <= maximum:
        result.append(f"{value:.2f}" if as_float else str(value))
        count += 1
        value = minimum + count * step
    return result


def inherit_schema_options(
    schema: Schema, link: str | None = None, plugin: str | None = None
) -> Schema:
    """Propagate link and plugin down the tree to nodes that lack them.

    Mutates schema in place and returns it. Lazy children are left alone.
    """
    for node in schema.values():
        if not node.link:
            node.link = link
        if not node.plugin:
            node.plugin = plugin
        if isinstance(node.keys, dict):
            inherit_schema_options(node.keys, node.link, node.plugin)
    return schema


def add_schema_aliases(schema: Schema, alias_map: dict[str, list[str]]) -> Schema:
    """Register alias key names that share the node of an existing key."""
    for key, aliases in alias_map.items():
        node = schema.get(key)
        if node is None:
            continue
        for alias in aliases:
            schema[alias] = node
    return schema


def filter_schema_by_plugins(schema: Schema, config: ScribeConfig) -> Schema:
    """Return a copy of schema without nodes of disabled plugins.

    Nested literal mappings are filtered recursively; lazy children are kept
    as they are.
    """
    filtered: Schema = {}
    for key, node in schema.items():
        if not config.is_plugin_enabled(node.plugin):
            continue
        if isinstance(node.keys, dict):
            node = replace(node, keys=filter_schema_by_plugins(node.keys, config))
        filtered[key] = node
    return filtered
