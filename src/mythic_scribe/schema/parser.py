"""Schema data parser.

Schemas are supplied as plain data (dicts, usually loaded from YAML) and
parsed into SchemaNode trees. Node fields:

  type:         one of the SchemaKind values (required)
  description:  free text
  link:         documentation URL
  plugin:       owning plugin, used for plugin filtering
  display:      label for *KEY and *ARRAYKEY nodes
  values:       list of fixed candidates, or a range mapping
                {min, max, step, float?, start?}
  dataset:      enumerated dataset identifier (enum and list nodes)
  entries:      list of positional node definitions
  keys:         child schema mapping, or a callable returning one
  max_depth:    true to stop depth counting below this node
  key_dataset:  dataset of accepted names (*ARRAYKEY nodes)

Malformed data is a defect of the supplied schema and raises
SchemaDefinitionError carrying the path of the offending node.
"""

from collections.abc import Callable, Mapping
from typing import Any

from mythic_scribe.errors import SchemaDefinitionError
from mythic_scribe.schema.nodes import (
    ARRAYKEY,
    WILDKEY,
    LazySchema,
    Schema,
    SchemaKind,
    SchemaNode,
)
from mythic_scribe.schema.utils import generate_numbers_in_range

KNOWN_FIELDS = frozenset(
    {
        "type",
        "description",
        "link",
        "plugin",
        "display",
        "values",
        "dataset",
        "entries",
        "keys",
        "max_depth",
        "key_dataset",
    }
)


# --- Field Parsing ---


def _parse_kind(value: Any, path: list[str]) -> SchemaKind:
    if value is None:
        raise SchemaDefinitionError("Schema node has no type", path)
    try:
        return SchemaKind(str(value).lower())
    except ValueError:
        raise SchemaDefinitionError(f"Unknown schema node type {value!r}", path) from None


def _parse_values(value: Any, path: list[str]) -> list[str] | None:
    """Parse a values field: a list of literals or a numeric range mapping."""
    if value is None:
        return None
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, Mapping):
        try:
            return generate_numbers_in_range(
                value["min"],
                value["max"],
                value["step"],
                bool(value.get("float", False)),
                value.get("start"),
            )
        except KeyError as e:
            raise SchemaDefinitionError(f"Range values are missing {e.args[0]!r}", path) from e
    raise SchemaDefinitionError("values must be a list or a range mapping", path)


def _parse_keys(value: Any, path: list[str]) -> Schema | LazySchema | None:
    if value is None:
        return None
    if isinstance(value, LazySchema):
        return value
    if callable(value):
        factory: Callable[[], Schema] = value
        return LazySchema(factory)
    if isinstance(value, Mapping):
        return parse_schema(value, path)
    raise SchemaDefinitionError("keys must be a mapping or a callable", path)


# --- Main Parser ---


def parse_schema_node(data: Mapping[str, Any], path: list[str] | None = None) -> SchemaNode:
    """Parse one node definition into a SchemaNode.

    Args:
        data: The node definition.
        path: Key path of the node, used in error messages.

    Raises:
        SchemaDefinitionError: If the definition is not a valid node.
    """
    path = path or []
    if isinstance(data, SchemaNode):
        return data
    if not isinstance(data, Mapping):
        raise SchemaDefinitionError("Schema node must be a mapping", path)

    unknown = set(data) - KNOWN_FIELDS
    if unknown:
        raise SchemaDefinitionError(f"Unknown schema node fields {sorted(unknown)}", path)

    kind = _parse_kind(data.get("type"), path)
    entries = data.get("entries") or []
    if not isinstance(entries, list):
        raise SchemaDefinitionError("entries must be a list", path)

    node = SchemaNode(
        kind=kind,
        description=data.get("description"),
        link=data.get("link"),
        plugin=data.get("plugin"),
        display=data.get("display"),
        values=_parse_values(data.get("values"), path),
        dataset=data.get("dataset"),
        entries=[
            parse_schema_node(entry, [*path, f"[{i}]"]) for i, entry in enumerate(entries)
        ],
        keys=_parse_keys(data.get("keys"), path),
        max_depth=bool(data.get("max_depth", False)),
        key_dataset=data.get("key_dataset"),
    )

    if kind is SchemaKind.ENUM and not node.dataset:
        raise SchemaDefinitionError("enum node has no dataset", path)
    if kind is SchemaKind.KEY and node.keys is None and node.values is None:
        raise SchemaDefinitionError("key node has neither keys nor values", path)
    return node


def parse_schema(data: Mapping[str, Any], path: list[str] | None = None) -> Schema:
    """Parse a schema mapping (key name -> node definition).

    Raises:
        SchemaDefinitionError: If any node is invalid, if a wildcard key has no
            display label, or if an array key has no key_dataset.
    """
    path = path or []
    if not isinstance(data, Mapping):
        raise SchemaDefinitionError("Schema must be a mapping", path)

    schema: Schema = {}
    for key, value in data.items():
        key = str(key)
        node_path = [*path, key]
        node = parse_schema_node(value, node_path)
        if key == WILDKEY and not node.display:
            raise SchemaDefinitionError("wildcard key has no display label", node_path)
        if key == ARRAYKEY and not node.key_dataset:
            raise SchemaDefinitionError("array key has no key_dataset", node_path)
        schema[key] = node
    return schema
