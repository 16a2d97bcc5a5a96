"""
Object linkage resolver.

Answers "which object or attribute is the cursor on" for lines under a skill
or condition key. Results are explicit variants, FoundMechanic or
FoundAttribute, and None when the cursor is on free text.
"""

import re
from dataclasses import dataclass
from typing import TypeAlias

from loguru import logger

from mythic_scribe.datasets.registry import (
    KEY_ALIASES,
    MechanicRegistry,
    RegistrySet,
    ScribeAttribute,
    ScribeMechanic,
)
from mythic_scribe.document import Position, TextDocument
from mythic_scribe.script.key_stack import (
    YamlKey,
    get_ancestor_keys,
    get_upstream_key,
    split_mechanic_line_attribute_context,
)
from mythic_scribe.script.line_grammar import (
    find_enclosing_object_token,
    find_unbalanced_opener,
    strip_sigil,
)

# attribute name under the cursor, followed by "="
ATTRIBUTE_AT_CURSOR = re.compile(r"\w+(?=\s*=)")

# attribute that owns a square-bracket value: "{conditions=" or ";conditions ="
SQUARE_BRACKET_ATTRIBUTE = re.compile(r"(?<=[{;])\s*(\w+)\s*=\s*$")

SKILL_PREFIX = "skill:"
SKILL_MECHANIC = "skill"


@dataclass(frozen=True)
class FoundMechanic:
    """The cursor is on an object name."""

    mechanic: ScribeMechanic


@dataclass(frozen=True)
class FoundAttribute:
    """The cursor is on an attribute name of a known object."""

    attribute: ScribeAttribute

    @property
    def mechanic(self) -> ScribeMechanic:
        return self.attribute.mechanic


Found: TypeAlias = FoundMechanic | FoundAttribute


def resolve_linked_mechanic(
    token: str,
    registries: RegistrySet,
    key: str | None = None,
) -> ScribeMechanic | None:
    """Classify an object token by its sigil and look it up.

    Args:
        token: The object token as written, with its sigil ("@Ring", "?!day").
        registries: Registries to look the object up in.
        key: The innermost structural key, which selects the condition or AI
            selector registries for bare tokens.

    Returns:
        The matching object, or None for triggers and unknown names.
    """
    if token.startswith("~"):
        return None
    if token.startswith("@"):
        return registries.targeter.get_by_name(strip_sigil(token))
    if token.startswith("?"):
        return registries.condition.get_by_name(strip_sigil(token))

    if key is not None:
        registry = registries.for_key(key)
        if registry is not None:
            return registry.get_by_name(token)

    mechanic = registries.mechanic.get_by_name(token)
    if mechanic is None and token.lower().startswith(SKILL_PREFIX):
        # skill:SomeSkill is shorthand for the skill mechanic
        mechanic = registries.mechanic.get_by_name(SKILL_MECHANIC)
    return mechanic


def find_square_bracket_owner(
    document: TextDocument, position: Position
) -> tuple[str, str | None] | None:
    """Find the attribute (and its object) whose [ ] value encloses the cursor.

    "- damage{conditions=[ - isday" -> ("conditions", "damage").
    None when the innermost open scope is a brace, or when the bracket does not
    follow an "attribute=".
    """
    parent = get_upstream_key(document, position.line)
    start = Position(parent.line if parent else 0, 0)
    text = document.get_text(start, position)

    index = find_unbalanced_opener(text)
    if index is None or text[index] != "[":
        return None

    match = SQUARE_BRACKET_ATTRIBUTE.search(text[:index])
    if not match:
        return None
    return match.group(1), find_enclosing_object_token(text[:index])


def is_inside_inline_condition_list(
    document: TextDocument,
    position: Position,
    registries: RegistrySet,
    *candidates: MechanicRegistry,
) -> bool:
    """Check whether the cursor sits in a [ ] value of a conditions attribute.

    Bare owner tokens are tried against candidates in order, defaulting to
    mechanics, then AI goals, then AI targets.
    """
    found = find_square_bracket_owner(document, position)
    if not found:
        return False
    attribute_name, owner = found
    if not owner:
        return False

    if owner.startswith(("@", "?")):
        mechanic = resolve_linked_mechanic(owner, registries)
        attribute = mechanic.get_attribute_by_name(attribute_name) if mechanic else None
    else:
        attribute = None
        for registry in candidates or (registries.mechanic, registries.aigoal, registries.aitarget):
            mechanic = registry.get_by_name(owner)
            attribute = mechanic.get_attribute_by_name(attribute_name) if mechanic else None
            if attribute:
                break

    return attribute is not None and attribute.accepts_conditions


def _offset_position(start_line: int, text: str, offset: int) -> Position:
    """Position of a character offset in text that starts at column 0 of start_line."""
    before = text[:offset]
    line_start = before.rfind("\n") + 1
    return Position(start_line + before.count("\n"), offset - line_start)


def _object_at_cursor(
    document: TextDocument, position: Position, registry: MechanicRegistry
) -> ScribeMechanic | None:
    name = document.word_at(position, registry.regex)
    if name is None:
        return None
    return registry.get_by_name(name)


def _attribute_at_cursor(document: TextDocument, position: Position) -> str | None:
    """Attribute name under the cursor, when it directly follows { or ;."""
    span = document.word_range_at(position, ATTRIBUTE_AT_CURSOR)
    if span is None:
        return None
    line = document.line_at(position.line)
    if not line[: span[0]].rstrip().endswith(("{", ";")):
        return None
    return line[span[0] : span[1]]


def _resolve_skill_line(
    document: TextDocument, position: Position, registries: RegistrySet, keys: list[YamlKey]
) -> Found | None:
    for registry in registries.cursor_registries():
        mechanic = _object_at_cursor(document, position, registry)
        if mechanic:
            return FoundMechanic(mechanic)

    attribute_name = _attribute_at_cursor(document, position)
    if attribute_name is None:
        return None

    context = split_mechanic_line_attribute_context(document, position, keys)
    owner = context.owner
    if not owner:
        return None

    mechanic = resolve_linked_mechanic(owner, registries)
    if mechanic is None:
        # the list check runs from the owner's opener, outside the owner's braces
        text = context.search_text
        opener = _offset_position(context.parent.line, text, find_unbalanced_opener(text) or 0)
        if is_inside_inline_condition_list(document, opener, registries):
            mechanic = registries.condition.get_by_name(owner)
    if mechanic is None:
        logger.trace(f"No object named {owner!r} owns attribute {attribute_name!r}")
        return None

    attribute = mechanic.get_attribute_by_name(attribute_name)
    return FoundAttribute(attribute) if attribute else None


def _resolve_keyed_line(
    document: TextDocument,
    position: Position,
    registries: RegistrySet,
    registry: MechanicRegistry,
    keys: list[YamlKey],
) -> Found | None:
    mechanic = _object_at_cursor(document, position, registry)
    if mechanic:
        return FoundMechanic(mechanic)

    attribute_name = _attribute_at_cursor(document, position)
    if attribute_name is None:
        return None

    context = split_mechanic_line_attribute_context(document, position, keys)
    if not context.owner:
        return None
    mechanic = resolve_linked_mechanic(context.owner, registries, key=context.parent.key)
    if mechanic is None:
        return None
    attribute = mechanic.get_attribute_by_name(attribute_name)
    return FoundAttribute(attribute) if attribute else None


def resolve_attribute_owner(
    document: TextDocument,
    position: Position,
    registries: RegistrySet,
    keys: list[YamlKey] | None = None,
) -> Found | None:
    """Resolve the object or attribute under the cursor.

    Only lines nested under a skill key, a conditions key or an AI selector key
    resolve. The backward scan never reads above the innermost key's line.

    Args:
        document: The document snapshot.
        position: The cursor position.
        registries: Registries of known objects.
        keys: Precomputed ancestor keys, innermost first.

    Returns:
        FoundMechanic when the cursor is on an object name, FoundAttribute when
        it is on an attribute name of a known object, otherwise None.
    """
    if keys is None:
        keys = get_ancestor_keys(document, position)
    if not keys:
        return None
    parent = keys[0]

    if parent.key in KEY_ALIASES["Skills"]:
        return _resolve_skill_line(document, position, registries, keys)

    registry = registries.for_key(parent.key)
    if registry is not None:
        return _resolve_keyed_line(document, position, registries, registry, keys)
    return None
