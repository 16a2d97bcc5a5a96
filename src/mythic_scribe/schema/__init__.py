"""Schema system for script files.

Schemas are declarative trees describing the keys and value types of a file
category. They are supplied as data, parsed into SchemaNode trees, and walked
along key paths to drive value and structure completion.
"""

from mythic_scribe.schema.nodes import (
    ARRAYKEY,
    WILDKEY,
    LazySchema,
    Schema,
    SchemaKind,
    SchemaNode,
)
from mythic_scribe.schema.parser import parse_schema, parse_schema_node
from mythic_scribe.schema.resolver import (
    find_nodes_on_level,
    locate_schema_node,
    match_schema_key,
)
from mythic_scribe.schema.completion import (
    CompletionContext,
    generate_file_completion,
    generate_structure_completions,
    generate_value_completions,
)
from mythic_scribe.schema.utils import (
    add_schema_aliases,
    filter_schema_by_plugins,
    generate_numbers_in_range,
    inherit_schema_options,
)

__all__ = [
    # Model
    "ARRAYKEY",
    "WILDKEY",
    "LazySchema",
    "Schema",
    "SchemaKind",
    "SchemaNode",
    # Parser
    "parse_schema",
    "parse_schema_node",
    # Resolver
    "find_nodes_on_level",
    "locate_schema_node",
    "match_schema_key",
    # Completion
    "CompletionContext",
    "generate_file_completion",
    "generate_structure_completions",
    "generate_value_completions",
    # Utils
    "add_schema_aliases",
    "filter_schema_by_plugins",
    "generate_numbers_in_range",
    "inherit_schema_options",
]
