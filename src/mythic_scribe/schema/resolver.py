"""Schema tree resolver.

Walks a schema along a path of key names. Each path element is matched in
the current mapping in this order:

  1. literal key
  2. *ARRAYKEY, when the element is an entry of the array key's dataset
     (case-insensitive)
  3. *KEY, which matches anything

Lists without nested schema and key_list nodes are leaf containers: a walk
that reaches one stops there even when path elements remain.
"""

from mythic_scribe.datasets.enums import EnumProvider
from mythic_scribe.schema.nodes import ARRAYKEY, WILDKEY, Schema, SchemaKind, SchemaNode


def match_schema_key(
    key: str, schema: Schema, enums: EnumProvider | None = None
) -> SchemaNode | None:
    """Return the node a single key name selects in a schema mapping."""
    node = schema.get(key)
    if node is not None:
        return node

    array_node = schema.get(ARRAYKEY)
    if array_node is not None and enums is not None and array_node.key_dataset:
        dataset = enums.get_enum(array_node.key_dataset)
        if dataset is not None and dataset.contains(key):
            return array_node

    return schema.get(WILDKEY)


def locate_schema_node(
    path: list[str],
    schema: Schema,
    enums: EnumProvider | None = None,
    depth: int = 0,
) -> tuple[SchemaNode, int] | None:
    """Find the node describing the value at the end of a key path.

    Args:
        path: Key names, outermost first.
        schema: Mapping to start from.
        enums: Dataset provider for array key membership tests.
        depth: Depth of schema, counted in descents from the root.

    Returns:
        (node, depth) where depth counts the descents made, or None when the
        path leaves the schema.

    Examples:
        locate_schema_node(["Icon", "Material"], ACHIEVEMENT_SCHEMA)
          -> (<enum MATERIAL>, 1)
    """
    return _locate(path, schema, enums, depth, closed=False)


def _locate(
    path: list[str],
    schema: Schema,
    enums: EnumProvider | None,
    depth: int,
    closed: bool,
) -> tuple[SchemaNode, int] | None:
    if not path:
        return None

    node = match_schema_key(path[0], schema, enums)
    if node is None:
        return None

    rest = path[1:]
    if not rest or node.is_leaf_container:
        return node, depth

    if node.kind is not SchemaKind.KEY or not node.has_children:
        return None
    children = node.children()
    if not children:
        return None

    next_depth = depth if closed else depth + 1
    return _locate(rest, children, enums, next_depth, closed or node.max_depth)


def find_nodes_on_level(
    schema: Schema,
    keys: list[str],
    level: int,
    enums: EnumProvider | None = None,
) -> tuple[Schema | SchemaNode, int] | None:
    """Find what can be written on a new line below a key path.

    Returns a schema mapping (its keys are the candidates), or a list or
    key_list node, together with the nesting level the new line belongs to.

    - key with children: descend, one level deeper (max_depth nodes stop the
      walk and return their children)
    - key_list: the node itself, one level deeper
    - list: the node itself, same level
    - anything else: the current mapping, same level
    """
    if not keys:
        return schema, level

    node = match_schema_key(keys[0], schema, enums)
    if node is None:
        return None

    if node.kind is SchemaKind.KEY and node.has_children:
        children = node.children() or {}
        if node.max_depth:
            return children, level + 1
        return find_nodes_on_level(children, keys[1:], level + 1, enums)
    if node.kind is SchemaKind.KEY_LIST:
        return node, level + 1
    if node.kind is SchemaKind.LIST:
        return node, level
    return schema, level
