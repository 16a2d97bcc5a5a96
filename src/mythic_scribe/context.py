"""
Resolution context.

Owns everything a resolution reads: registries, enums, scripted segments,
the placeholder trie and the schemas. A reload builds a complete new state
and publishes it with one reference swap, so a reader that took `state`
keeps a consistent snapshot for the whole call.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from mythic_scribe.candidates import Candidate
from mythic_scribe.config import ScribeConfig, get_config
from mythic_scribe.datasets.enums import EnumHandler
from mythic_scribe.datasets.models import ScribeDataset
from mythic_scribe.datasets.registry import RegistrySet, ScribeAttribute
from mythic_scribe.datasets.scripted import add_scripted_enums
from mythic_scribe.document import Position, TextDocument
from mythic_scribe.placeholder.meta import build_placeholder_trie
from mythic_scribe.placeholder.segments import SegmentRegistry, default_segment_registry
from mythic_scribe.placeholder.trie import PlaceholderNode, lookup, placeholder_completions
from mythic_scribe.schema.completion import generate_file_completion
from mythic_scribe.schema.library import bundled_schemas
from mythic_scribe.schema.nodes import Schema, SchemaNode
from mythic_scribe.schema.resolver import locate_schema_node
from mythic_scribe.script.key_stack import YamlKey, get_ancestor_keys
from mythic_scribe.script.linkage import Found, resolve_attribute_owner


@dataclass(frozen=True)
class ResolutionState:
    """One immutable generation of reference data."""

    dataset: ScribeDataset
    config: ScribeConfig
    enums: EnumHandler
    registries: RegistrySet
    segments: SegmentRegistry
    placeholders: PlaceholderNode
    schemas: dict[str, Schema] = field(default_factory=dict)
    generation: int = 0

    @classmethod
    def build(
        cls,
        dataset: ScribeDataset,
        config: ScribeConfig,
        schemas: dict[str, Schema] | None = None,
        custom_placeholders: Callable[[], list[str]] | None = None,
        generation: int = 0,
    ) -> "ResolutionState":
        enums = EnumHandler()
        for identifier, entries in dataset.enums.items():
            enums.add_static(identifier, entries)

        registries = RegistrySet.from_dataset(dataset, enums, config)
        add_scripted_enums(enums, registries, custom_placeholders)

        segments = default_segment_registry(custom_placeholders)
        placeholders = build_placeholder_trie(dataset.placeholders, dataset.meta_keywords, segments)

        return cls(
            dataset=dataset,
            config=config,
            enums=enums,
            registries=registries,
            segments=segments,
            placeholders=placeholders,
            schemas=bundled_schemas() if schemas is None else dict(schemas),
            generation=generation,
        )


class ResolutionContext:
    """Process-wide entry point for resolutions.

    Example:
        context = ResolutionContext(dataset)
        owner = context.resolve_owner(document, Position(3, 14))
    """

    def __init__(
        self,
        dataset: ScribeDataset | None = None,
        config: ScribeConfig | None = None,
        schemas: dict[str, Schema] | None = None,
        custom_placeholders: Callable[[], list[str]] | None = None,
    ):
        self._config = config or get_config()
        self._schemas = schemas
        self._custom_placeholders = custom_placeholders
        self._lock = threading.Lock()
        self._state = ResolutionState.build(
            dataset or ScribeDataset(), self._config, schemas, custom_placeholders
        )

    @property
    def state(self) -> ResolutionState:
        """Current state. Take it once per call."""
        return self._state

    def reload(self, dataset: ScribeDataset) -> ResolutionState:
        """Rebuild everything from dataset and publish it atomically."""
        with self._lock:
            generation = self._state.generation + 1
            state = ResolutionState.build(
                dataset, self._config, self._schemas, self._custom_placeholders, generation
            )
            self._state = state
        logger.debug(f"Published resolution state generation {generation}")
        return state

    # --- Resolutions ---

    def ancestor_keys(self, document: TextDocument, position: Position) -> list[YamlKey]:
        return get_ancestor_keys(document, position)

    def resolve_owner(self, document: TextDocument, position: Position) -> Found | None:
        return resolve_attribute_owner(document, position, self.state.registries)

    def attribute_label(self, attribute: ScribeAttribute) -> str:
        """Main label for an attribute under the configured alias mode."""
        return attribute.main_name(self.state.config.attribute_alias_mode)

    def locate(self, schema_name: str, path: list[str]) -> tuple[SchemaNode, int] | None:
        state = self.state
        schema = state.schemas.get(schema_name)
        if schema is None:
            return None
        return locate_schema_node(path, schema, state.enums)

    def complete_file(
        self,
        schema_name: str,
        document: TextDocument,
        position: Position,
        invoked: bool = True,
        trigger_character: str | None = None,
    ) -> list[Candidate]:
        state = self.state
        schema = state.schemas.get(schema_name)
        if schema is None:
            return []
        return generate_file_completion(
            document,
            position,
            schema,
            invoked=invoked,
            trigger_character=trigger_character,
            enums=state.enums,
            config=state.config,
        )

    def lookup_placeholder(self, path: str) -> PlaceholderNode | None:
        return lookup(self.state.placeholders, path)

    def complete_placeholder(self, text_before_cursor: str) -> list[Candidate]:
        return placeholder_completions(self.state.placeholders, text_before_cursor)
