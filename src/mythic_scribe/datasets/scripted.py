"""Enums computed from the registries on every read."""

from collections.abc import Callable

from mythic_scribe.datasets.enums import EnumHandler
from mythic_scribe.datasets.models import EnumEntry
from mythic_scribe.datasets.registry import MechanicRegistry, RegistrySet


def registry_to_enum(
    registry: MechanicRegistry, prefix: str = ""
) -> dict[str, EnumEntry]:
    """One entry per name alias of every object in a registry."""
    entries: dict[str, EnumEntry] = {}
    for mechanic in registry.get_mechanics():
        for name in mechanic.name:
            entries[prefix + name] = EnumEntry(description=mechanic.description)
    return entries


def add_scripted_enums(
    enums: EnumHandler,
    registries: RegistrySet,
    custom_placeholders: Callable[[], list[str]] | None = None,
) -> EnumHandler:
    enums.add_scripted("mechaniclist", lambda: registry_to_enum(registries.mechanic))
    enums.add_scripted("targeterlist", lambda: registry_to_enum(registries.targeter))
    enums.add_scripted("triggerlist", lambda: registry_to_enum(registries.trigger))
    enums.add_scripted("conditionlist", lambda: registry_to_enum(registries.condition))
    enums.add_scripted("targeter", lambda: registry_to_enum(registries.targeter, "@"))
    enums.add_scripted("trigger", lambda: registry_to_enum(registries.trigger, "~"))
    enums.add_scripted("boolean", lambda: {"true": EnumEntry(), "false": EnumEntry()})
    if custom_placeholders is not None:
        enums.add_scripted(
            "customplaceholder",
            lambda: {name: EnumEntry() for name in custom_placeholders()},
        )
    return enums
