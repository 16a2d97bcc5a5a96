"""Schema tree model.

A schema maps key names to SchemaNode values. Two special keys may appear in
a mapping next to the literal ones:

  *KEY       matches any key name (user-named sub-objects)
  *ARRAYKEY  matches only names drawn from an enumerated dataset
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

WILDKEY = "*KEY"
ARRAYKEY = "*ARRAYKEY"
SPECIAL_KEYS = frozenset({WILDKEY, ARRAYKEY})


class SchemaKind(Enum):
    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    VECTOR = "vector"
    RGB = "rgb"
    LIST = "list"
    KEY = "key"
    KEY_LIST = "key_list"
    ENTRY_LIST = "entry_list"
    ENUM = "enum"


Schema: TypeAlias = dict[str, "SchemaNode"]


class LazySchema:
    """Child schema computed on first traversal and cached afterwards."""

    def __init__(self, factory: Callable[[], Schema]):
        self._factory = factory
        self._schema: Schema | None = None

    @property
    def resolved(self) -> bool:
        return self._schema is not None

    def resolve(self) -> Schema:
        if self._schema is None:
            self._schema = self._factory()
        return self._schema

    def __repr__(self) -> str:
        state = "resolved" if self.resolved else "pending"
        return f"LazySchema({state})"


@dataclass
class SchemaNode:
    """One node of a schema tree."""

    kind: SchemaKind
    description: str | None = None
    link: str | None = None
    plugin: str | None = None
    display: str | None = None  # label for wildcard and array keys
    values: list[str] | None = None  # fixed candidate set
    dataset: str | None = None  # enumerated dataset for enum and list values
    entries: list["SchemaNode"] = field(default_factory=list)  # positional sub-nodes
    keys: Schema | LazySchema | None = None
    max_depth: bool = False  # children do not add depth past this node
    key_dataset: str | None = None  # array key: dataset of accepted key names

    def children(self) -> Schema | None:
        """Resolved child schema, or None when the node has none."""
        if isinstance(self.keys, LazySchema):
            return self.keys.resolve()
        return self.keys

    @property
    def has_children(self) -> bool:
        return self.keys is not None

    @property
    def is_leaf_container(self) -> bool:
        """A list without nested schema, or an open key/value mapping."""
        if self.kind is SchemaKind.KEY_LIST:
            return True
        return self.kind is SchemaKind.LIST and self.keys is None
