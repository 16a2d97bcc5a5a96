"""Schema-driven completion.

Two entry points feed on a resolved schema position:

- value completion, for the text after "Key:" or "-" on an existing line
- structure completion, for the keys that can be written on a new line

Each node kind has a handler providing both. Insert texts use the editor
snippet syntax ($0, ${1|a,b|}).
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, replace

from mythic_scribe.candidates import Candidate, CandidateKind
from mythic_scribe.config import ScribeConfig, get_config
from mythic_scribe.datasets.enums import EnumProvider
from mythic_scribe.document import Position, TextDocument
from mythic_scribe.schema.nodes import ARRAYKEY, WILDKEY, Schema, SchemaKind, SchemaNode
from mythic_scribe.schema.resolver import find_nodes_on_level, locate_schema_node
from mythic_scribe.schema.utils import filter_schema_by_plugins
from mythic_scribe.script.key_stack import (
    get_ancestor_keys,
    get_indentation,
    get_text_after_key,
    get_text_after_list_dash,
    is_empty_line,
    is_key_line,
    is_list_line,
    key_names,
)
from mythic_scribe.script.line_grammar import PreviousSymbol, previous_symbol

BRACED_GROUP = re.compile(r"{.*?}")
LIST_ITEM_WITH_VALUE = re.compile(r"^\s*-\s*\S+\s")


@dataclass
class CompletionContext:
    """Where a value completion was requested.

    suffix and retrigger are set by positional dispatch: a slot that is
    followed by another slot appends a space and asks for completion again.
    """

    document: TextDocument
    position: Position
    trigger_character: str | None = None
    extractor: Callable[[str], str] | None = None
    enums: EnumProvider | None = None
    suffix: str = ""
    retrigger: bool = False


# --- Helpers ---


def _char_before(document: TextDocument, position: Position, offset: int) -> str:
    if position.character < offset:
        return ""
    line = document.line_at(position.line)
    return line[position.character - offset : position.character]


def list_completion_needed_spaces(
    document: TextDocument, position: Position, trigger_character: str | None
) -> str | None:
    """Spacing to insert between a list dash and a completed value.

    None means the cursor is not at the value slot of a list item.
    """
    line = document.line_at(position.line)
    if LIST_ITEM_WITH_VALUE.search(line):
        return None

    if trigger_character is None:
        if previous_symbol(document, position, PreviousSymbol.NONSPACE) != "-":
            return None
        return " " if _char_before(document, position, 1) == "-" else ""

    if _char_before(document, position, 2) != "- ":
        return None
    if trigger_character == " ":
        return ""
    return " "


def entry_index(context: CompletionContext) -> int:
    """Positional slot of the cursor: the number of values already typed.

    Brace groups count as part of the value they follow.
    """
    line = context.document.line_at(context.position.line)
    text = line[: context.position.character]
    if context.extractor is not None:
        text = context.extractor(text)
    text = BRACED_GROUP.sub("", text).lstrip()
    return len([token for token in text.split(" ") if token])


def enum_completions(
    dataset: str, context: CompletionContext, prefix: str = ""
) -> list[Candidate] | None:
    """One candidate per entry of an enumerated dataset."""
    if context.enums is None:
        return None
    scribe_enum = context.enums.get_enum(dataset)
    if scribe_enum is None:
        return None

    candidates = []
    for value, entry in scribe_enum.items():
        candidates.append(
            Candidate(
                label=value,
                insert_text=prefix + value + context.suffix,
                kind=CandidateKind.ENUM_MEMBER if context.retrigger else CandidateKind.ENUM,
                detail=entry.description or None,
                retrigger=context.retrigger,
            )
        )
    return candidates


def _structure_candidate(
    key: str,
    node: SchemaNode,
    insert_text: str,
    kind: CandidateKind = CandidateKind.FILE,
) -> list[Candidate]:
    return [
        Candidate(
            label=key,
            insert_text=insert_text,
            kind=kind,
            detail=node.description,
            retrigger=True,
        )
    ]


# --- Handlers ---


class DefaultHandler:
    """Fixed values, and a plain "Key: " structure snippet."""

    def value_completions(
        self, node: SchemaNode, context: CompletionContext
    ) -> list[Candidate] | None:
        if not node.values:
            return None
        return [
            Candidate(
                label=value,
                insert_text=value + context.suffix,
                kind=CandidateKind.ENUM_MEMBER,
                sort_text=f"{index:04d}",
                retrigger=context.retrigger,
            )
            for index, value in enumerate(node.values)
        ]

    def structure_completions(
        self, key: str, node: SchemaNode, indentation: str
    ) -> list[Candidate]:
        return _structure_candidate(key, node, f"{indentation}{key}: $0")


class BooleanHandler(DefaultHandler):
    def value_completions(
        self, node: SchemaNode, context: CompletionContext
    ) -> list[Candidate] | None:
        kind = CandidateKind.OPERATOR if context.retrigger else CandidateKind.ENUM_MEMBER
        return [
            Candidate(
                label=value,
                insert_text=value + context.suffix,
                kind=kind,
                retrigger=context.retrigger,
            )
            for value in ("true", "false")
        ]

    def structure_completions(
        self, key: str, node: SchemaNode, indentation: str
    ) -> list[Candidate]:
        return _structure_candidate(
            key, node, f"{indentation}{key}: ${{1|true,false|}}$0", CandidateKind.PROPERTY
        )


class EnumHandler(DefaultHandler):
    def value_completions(
        self, node: SchemaNode, context: CompletionContext
    ) -> list[Candidate] | None:
        if not node.dataset:
            return None
        return enum_completions(node.dataset, context)

    def structure_completions(
        self, key: str, node: SchemaNode, indentation: str
    ) -> list[Candidate]:
        return _structure_candidate(key, node, f"{indentation}{key}: $0", CandidateKind.ENUM)


class KeyHandler(DefaultHandler):
    def structure_completions(
        self, key: str, node: SchemaNode, indentation: str
    ) -> list[Candidate]:
        return _structure_candidate(
            key, node, f"{indentation}{key}:\n{indentation}  $0", CandidateKind.PROPERTY
        )


class KeyListHandler(DefaultHandler):
    def structure_completions(
        self, key: str, node: SchemaNode, indentation: str
    ) -> list[Candidate]:
        return _structure_candidate(
            key, node, f"{indentation}{key}:\n{indentation}  $1: $2$0", CandidateKind.PROPERTY
        )


class EntryListHandler(DefaultHandler):
    """Positional values: "Key: <entry 0> <entry 1> ..."."""

    def value_completions(
        self, node: SchemaNode, context: CompletionContext
    ) -> list[Candidate] | None:
        if not node.entries:
            return None
        return entry_list_completions(node, context)

    def structure_completions(
        self, key: str, node: SchemaNode, indentation: str
    ) -> list[Candidate]:
        return _structure_candidate(key, node, f"{indentation}{key}: $0", CandidateKind.SNIPPET)


class ListHandler(EntryListHandler):
    def value_completions(
        self, node: SchemaNode, context: CompletionContext
    ) -> list[Candidate] | None:
        if node.dataset:
            spaces = list_completion_needed_spaces(
                context.document, context.position, context.trigger_character
            )
            if spaces is None:
                return None
            candidates = enum_completions(node.dataset, context, spaces)
            if candidates and node.values:
                choice = f" ${{1|{','.join(node.values)}|}}"
                for candidate in candidates:
                    candidate.insert_text += choice
            return candidates
        return super().value_completions(node, context)

    def structure_completions(
        self, key: str, node: SchemaNode, indentation: str
    ) -> list[Candidate]:
        return _structure_candidate(
            key, node, f"{indentation}{key}:\n{indentation}- $0", CandidateKind.PROPERTY
        )


HANDLERS: dict[SchemaKind, DefaultHandler] = {
    SchemaKind.ENUM: EnumHandler(),
    SchemaKind.BOOLEAN: BooleanHandler(),
    SchemaKind.LIST: ListHandler(),
    SchemaKind.ENTRY_LIST: EntryListHandler(),
    SchemaKind.KEY: KeyHandler(),
    SchemaKind.KEY_LIST: KeyListHandler(),
}
DEFAULT_HANDLER = DefaultHandler()


def get_handler(kind: SchemaKind | None) -> DefaultHandler:
    if kind is None:
        return DEFAULT_HANDLER
    return HANDLERS.get(kind, DEFAULT_HANDLER)


# --- Value Completion ---


def entry_list_completions(
    node: SchemaNode, context: CompletionContext
) -> list[Candidate] | None:
    """Dispatch to the positional entry the cursor is typing."""
    if context.extractor is None:
        return None
    index = entry_index(context)
    if index >= len(node.entries):
        return None

    entry = node.entries[index]
    has_next = len(node.entries) > index + 1
    entry_context = replace(context, suffix=" " if has_next else "", retrigger=has_next)
    return get_handler(entry.kind).value_completions(entry, entry_context)


def generate_value_completions(node: SchemaNode, context: CompletionContext) -> list[Candidate]:
    """Candidates for the value of a resolved node. Empty when nothing applies."""
    return get_handler(node.kind).value_completions(node, context) or []


# --- Structure Completion ---


def structure_indentation(level: int, line_indent: int, tab_size: int) -> str:
    """Whitespace to prepend so a key lands on the given nesting level."""
    return " " * max(0, level * tab_size - line_indent)


def _array_key_mapping(
    node: SchemaNode, enums: EnumProvider | None
) -> list[tuple[str, SchemaNode]]:
    if enums is None or not node.key_dataset:
        return []
    scribe_enum = enums.get_enum(node.key_dataset)
    if scribe_enum is None:
        return []
    return [
        (name, replace(node, description=entry.description or node.description))
        for name, entry in scribe_enum.items()
    ]


def generate_structure_completions(
    target: Schema | SchemaNode,
    indentation: str,
    enums: EnumProvider | None = None,
) -> list[Candidate]:
    """Candidates for a new line under a resolved level."""
    if isinstance(target, SchemaNode):
        if target.kind is SchemaKind.LIST:
            return [
                Candidate("-", f"{indentation}- $0", CandidateKind.SNIPPET, retrigger=True)
            ]
        if target.kind is SchemaKind.KEY_LIST:
            return [
                Candidate("New Key", f"{indentation}$1: $2", CandidateKind.SNIPPET, retrigger=True)
            ]
        return []

    candidates: list[Candidate] = []
    for key, node in target.items():
        if key == WILDKEY:
            candidates.append(
                Candidate(
                    label=node.display or key,
                    insert_text=f"{indentation}$1:",
                    kind=CandidateKind.FILE,
                    detail=node.description,
                )
            )
            continue

        mapping = _array_key_mapping(node, enums) if key == ARRAYKEY else [(key, node)]
        for mapped_key, mapped_node in mapping:
            handler = get_handler(mapped_node.kind)
            candidates.extend(handler.structure_completions(mapped_key, mapped_node, indentation))
    return candidates


# --- File Completion Entry Point ---


def generate_file_completion(
    document: TextDocument,
    position: Position,
    schema: Schema,
    invoked: bool = True,
    trigger_character: str | None = None,
    enums: EnumProvider | None = None,
    config: ScribeConfig | None = None,
) -> list[Candidate]:
    """Complete a position in a schema-described file.

    An empty line gets structure completion. An explicitly invoked completion
    on a key or list line gets value completion. The outermost key names the
    user's object and is not part of the schema path.
    """
    config = config or get_config()
    schema = filter_schema_by_plugins(schema, config)

    if is_empty_line(document, position.line):
        keys = get_ancestor_keys(document, position)
        if not keys:
            return []
        path = key_names(keys[::-1])[1:]
        result = find_nodes_on_level(schema, path, 1, enums)
        if result is None:
            return []
        target, level = result
        indentation = structure_indentation(
            level, get_indentation(document.line_at(position.line)), config.tab_size
        )
        return generate_structure_completions(target, indentation, enums)

    if not invoked:
        return []

    if is_key_line(document, position.line):
        extractor = get_text_after_key
    elif is_list_line(document, position.line):
        extractor = get_text_after_list_dash
    else:
        return []

    keys = get_ancestor_keys(document, position, include_line_key=True)
    path = key_names(keys[::-1])[1:]
    located = locate_schema_node(path, schema, enums)
    if located is None:
        return []
    node, _ = located
    if not config.is_plugin_enabled(node.plugin):
        return []

    context = CompletionContext(
        document=document,
        position=position,
        trigger_character=trigger_character,
        extractor=extractor,
        enums=enums,
    )
    return generate_value_completions(node, context)
