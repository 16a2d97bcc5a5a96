"""Enumerated datasets (materials, entity types, sounds, mob names, ...).

Enums are looked up case-insensitively by identifier. Static enums are built
from loaded records, lambda enums from an inline comma list, and scripted
enums compute their entries on every read from other registries.
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Protocol

from loguru import logger

from mythic_scribe.datasets.models import AttributeData, EnumEntry


class ScribeEnum:
    """Base enumerated dataset: ordered (key, entry) pairs."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        self._dataset: dict[str, EnumEntry] = {}
        self._attributes: list[AttributeData] = []

    def get_dataset(self) -> dict[str, EnumEntry]:
        return self._dataset

    def items(self) -> Iterator[tuple[str, EnumEntry]]:
        yield from self.get_dataset().items()

    def keys(self) -> list[str]:
        return list(self.get_dataset().keys())

    def contains(self, value: str) -> bool:
        """Case-insensitive membership test."""
        lowered = value.lower()
        return any(key.lower() == lowered for key in self.get_dataset())

    def get_attributes(self) -> list[AttributeData]:
        """Attributes contributed by entries of this enum."""
        return self._attributes

    def comma_list(self) -> str:
        return ",".join(self.get_dataset().keys())

    def __len__(self) -> int:
        return len(self.get_dataset())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier!r}, entries={len(self)})"


class StaticEnum(ScribeEnum):
    """Enum built once from loaded records. Entry aliases become keys too."""

    def __init__(self, identifier: str, data: Mapping[str, EnumEntry | dict]):
        super().__init__(identifier)
        attributes: dict[str, AttributeData] = {}
        for key, raw in data.items():
            entry = raw if isinstance(raw, EnumEntry) else EnumEntry.model_validate(raw)
            self._dataset[key] = entry
            for alias in entry.name:
                self._dataset.setdefault(alias, entry)
            for attribute in entry.attributes:
                attributes[",".join(attribute.name)] = attribute
        self._attributes = list(attributes.values())
        if self._attributes:
            logger.debug(f"Enum {identifier} added {len(self._attributes)} attributes")


class LambdaEnum(ScribeEnum):
    """Enum declared inline by an attribute, e.g. enum: "ADD,SET,MULTIPLY"."""

    def __init__(self, identifier: str, values: list[str]):
        super().__init__(identifier)
        self._dataset = {value.strip(): EnumEntry() for value in values if value.strip()}


class ScriptedEnum(ScribeEnum):
    """Enum whose entries are computed on each read."""

    def __init__(self, identifier: str, func: Callable[[], Mapping[str, EnumEntry] | None]):
        super().__init__(identifier)
        self._func = func

    def get_dataset(self) -> dict[str, EnumEntry]:
        result = self._func()
        return dict(result) if result else {}


class EnumProvider(Protocol):
    """Anything that can hand out enums by identifier."""

    def get_enum(self, identifier: str) -> ScribeEnum | None: ...


class EnumHandler:
    """Case-insensitive collection of enums."""

    def __init__(self) -> None:
        self._enums: dict[str, ScribeEnum] = {}

    def add(self, scribe_enum: ScribeEnum) -> ScribeEnum:
        self._enums[scribe_enum.identifier.lower()] = scribe_enum
        return scribe_enum

    def add_static(self, identifier: str, data: Mapping[str, EnumEntry | dict]) -> ScribeEnum:
        scribe_enum = self.add(StaticEnum(identifier, data))
        logger.debug(f"Mapped enum {identifier.lower()} with {len(scribe_enum)} entries")
        return scribe_enum

    def add_lambda(self, identifier: str, values: list[str]) -> ScribeEnum:
        existing = self._enums.get(identifier.lower())
        if existing is not None:
            return existing
        return self.add(LambdaEnum(identifier, values))

    def add_scripted(
        self, identifier: str, func: Callable[[], Mapping[str, EnumEntry] | None]
    ) -> ScribeEnum:
        return self.add(ScriptedEnum(identifier, func))

    def get_enum(self, identifier: str) -> ScribeEnum | None:
        return self._enums.get(identifier.lower())

    def identifiers(self) -> list[str]:
        return [e.identifier for e in self._enums.values()]

    def __contains__(self, identifier: str) -> bool:
        return identifier.lower() in self._enums

    def __len__(self) -> int:
        return len(self._enums)
