"""Reference data: dataset records, enums and object registries."""

from mythic_scribe.datasets.enums import (
    EnumHandler,
    EnumProvider,
    LambdaEnum,
    ScribeEnum,
    ScriptedEnum,
    StaticEnum,
)
from mythic_scribe.datasets.models import (
    ALL_TYPES,
    AttributeData,
    EnumEntry,
    MechanicData,
    MetaKeywordData,
    PlaceholderData,
    ScribeDataset,
)
from mythic_scribe.datasets.loader import load_dataset, parse_dataset
from mythic_scribe.datasets.registry import (
    KEY_ALIASES,
    MechanicRegistry,
    ObjectType,
    RegistrySet,
    ScribeAttribute,
    ScribeMechanic,
)
from mythic_scribe.datasets.scripted import add_scripted_enums, registry_to_enum

__all__ = [
    # Records
    "ALL_TYPES",
    "AttributeData",
    "EnumEntry",
    "MechanicData",
    "MetaKeywordData",
    "PlaceholderData",
    "ScribeDataset",
    # Enums
    "EnumHandler",
    "EnumProvider",
    "LambdaEnum",
    "ScribeEnum",
    "ScriptedEnum",
    "StaticEnum",
    # Loading
    "load_dataset",
    "parse_dataset",
    # Registries
    "KEY_ALIASES",
    "MechanicRegistry",
    "ObjectType",
    "RegistrySet",
    "ScribeAttribute",
    "ScribeMechanic",
    # Scripted enums
    "add_scripted_enums",
    "registry_to_enum",
]
