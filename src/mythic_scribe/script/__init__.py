"""
Script scanning for the mechanic line dialect.

Line grammar, structural key stacks and object linkage. Everything here reads
a document snapshot and never raises on malformed text.
"""

from mythic_scribe.script.key_stack import (
    AttributeContext,
    YamlKey,
    get_ancestor_keys,
    get_indentation,
    get_key,
    get_text_after_key,
    get_text_after_list_dash,
    get_upstream_key,
    is_empty_line,
    is_key_line,
    is_list_line,
    key_names,
    split_mechanic_line_attribute_context,
)
from mythic_scribe.script.line_grammar import (
    MechanicLineParts,
    PreviousSymbol,
    find_attribute_linked_to_value,
    find_enclosing_object_token,
    find_unbalanced_opener,
    is_after_comment,
    parse_mechanic_line,
    previous_symbol,
)
from mythic_scribe.script.linkage import (
    Found,
    FoundAttribute,
    FoundMechanic,
    find_square_bracket_owner,
    is_inside_inline_condition_list,
    resolve_attribute_owner,
    resolve_linked_mechanic,
)

__all__ = [
    # Line grammar
    "MechanicLineParts",
    "PreviousSymbol",
    "find_attribute_linked_to_value",
    "find_enclosing_object_token",
    "find_unbalanced_opener",
    "is_after_comment",
    "parse_mechanic_line",
    "previous_symbol",
    # Key stack
    "AttributeContext",
    "YamlKey",
    "get_ancestor_keys",
    "get_indentation",
    "get_key",
    "get_text_after_key",
    "get_text_after_list_dash",
    "get_upstream_key",
    "is_empty_line",
    "is_key_line",
    "is_list_line",
    "key_names",
    "split_mechanic_line_attribute_context",
    # Linkage
    "Found",
    "FoundAttribute",
    "FoundMechanic",
    "find_square_bracket_owner",
    "is_inside_inline_condition_list",
    "resolve_attribute_owner",
    "resolve_linked_mechanic",
]
