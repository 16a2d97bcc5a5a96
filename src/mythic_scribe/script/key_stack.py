"""
Structural key stack builder.

Reconstructs which YAML keys enclose a cursor by walking the document upwards
and comparing raw indentation. The document is never parsed as YAML: the text
is usually mid-edit and would not parse.

Indentation is the raw count of leading whitespace characters. Tabs and spaces
are not normalized, so a document that mixes them yields a stack that is
deterministic but may not match what the YAML loader would see.
"""

import re
from dataclasses import dataclass

from mythic_scribe.document import Position, TextDocument
from mythic_scribe.script.line_grammar import (
    find_attribute_linked_to_value,
    find_enclosing_object_token,
)

# leading whitespace, a bare (or fully quoted) token, then a colon
KEY_LINE = re.compile(r"""^\s*(?P<key>[^:\s'"]+|"[^"]*"|'[^']*'):""")
LIST_LINE = re.compile(r"^\s*-\s?")


@dataclass(frozen=True)
class YamlKey:
    """One structural key occurrence."""

    key: str
    line: int
    indent: int


@dataclass
class AttributeContext:
    """Where an in-progress attribute sits inside a mechanic line."""

    parent: YamlKey | None  # nearest ancestor key, the scan boundary
    search_text: str  # text from the parent key's line to the cursor
    owner: str | None  # object token enclosing the cursor, with sigil
    attribute: str | None  # attribute whose value is being typed


def get_indentation(line: str) -> int:
    """Number of leading whitespace characters."""
    return len(line) - len(line.lstrip())


def _match_key(line: str) -> re.Match[str] | None:
    return KEY_LINE.match(line)


def _key_name(match: re.Match[str]) -> str:
    return match.group("key").strip("'\"")


def is_key_line(document: TextDocument, line_index: int) -> bool:
    return _match_key(document.line_at(line_index)) is not None


def is_list_line(document: TextDocument, line_index: int) -> bool:
    return LIST_LINE.match(document.line_at(line_index)) is not None


def is_empty_line(document: TextDocument, line_index: int) -> bool:
    return document.line_at(line_index).strip() == ""


def get_key(document: TextDocument, line_index: int) -> str | None:
    """Key defined on a line, or None when the line is not a key line."""
    match = _match_key(document.line_at(line_index))
    return _key_name(match) if match else None


def get_text_after_key(text: str) -> str:
    """Text after the first colon ("  Amount: 5" -> " 5")."""
    _, sep, rest = text.partition(":")
    return rest if sep else text


def get_text_after_list_dash(text: str) -> str:
    """Text after the first list dash ("  - STONE 1" -> " STONE 1")."""
    _, sep, rest = text.partition("-")
    return rest if sep else text


def get_upstream_key(document: TextDocument, line_index: int) -> YamlKey | None:
    """Nearest key line at or above line_index, regardless of indentation."""
    for i in range(min(line_index, document.line_count - 1), -1, -1):
        line = document.line_at(i)
        match = _match_key(line)
        if match:
            return YamlKey(key=_key_name(match), line=i, indent=get_indentation(line))
    return None


def get_ancestor_keys(
    document: TextDocument,
    position: Position,
    include_line_key: bool = False,
) -> list[YamlKey]:
    """Return the keys enclosing position, innermost first.

    A line that is not itself a key nests one level below the indentation it
    has, so content lines belong to the key above them. Each recorded ancestor
    lowers the floor, so indents strictly decrease along the result.

    Args:
        document: The document snapshot.
        position: The cursor position.
        include_line_key: Also return the key defined on the cursor line itself.
    """
    keys: list[YamlKey] = []
    line_index = position.line
    if line_index < 0 or line_index >= document.line_count:
        return keys

    line = document.line_at(line_index)
    floor = get_indentation(line)
    own_key = _match_key(line)
    if own_key is None:
        floor += 1
    elif include_line_key:
        keys.append(YamlKey(key=_key_name(own_key), line=line_index, indent=floor))

    for i in range(line_index, -1, -1):
        text = document.line_at(i)
        match = _match_key(text)
        if match is None:
            continue
        indent = get_indentation(text)
        if indent < floor:
            keys.append(YamlKey(key=_key_name(match), line=i, indent=indent))
            floor = indent

    return keys


def key_names(keys: list[YamlKey]) -> list[str]:
    return [k.key for k in keys]


def split_mechanic_line_attribute_context(
    document: TextDocument,
    position: Position,
    keys: list[YamlKey] | None = None,
) -> AttributeContext:
    """Find the object and attribute the cursor belongs to inside a mechanic line.

    The backward scan starts at the nearest ancestor key's line, so a block
    never reads into a sibling block's content.
    """
    if keys is None:
        keys = get_ancestor_keys(document, position)
    parent = keys[0] if keys else None
    start = Position(parent.line, 0) if parent else Position(0, 0)
    search_text = document.get_text(start, position)

    return AttributeContext(
        parent=parent,
        search_text=search_text,
        owner=find_enclosing_object_token(search_text),
        attribute=find_attribute_linked_to_value(search_text),
    )
