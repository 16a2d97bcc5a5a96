"""Registries of mechanic-like objects.

One registry per object category. Each maps every name alias (lowercased) to
a ScribeMechanic, and knows the pattern that recognizes its names on a line.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from mythic_scribe.config import ScribeConfig, get_config
from mythic_scribe.datasets.enums import EnumHandler, ScribeEnum
from mythic_scribe.datasets.models import AttributeData, MechanicData, ScribeDataset


class ObjectType(Enum):
    MECHANIC = "Mechanic"
    ATTRIBUTE = "Attribute"
    TARGETER = "Targeter"
    CONDITION = "Condition"
    INLINECONDITION = "Inline Condition"
    TRIGGER = "Trigger"
    AITARGET = "AITarget"
    AIGOAL = "AIGoal"


CONDITIONS_SPECIAL_VALUE = "conditions"

# Key categories whose list entries are mechanic-like lines
KEY_ALIASES: dict[str, frozenset[str]] = {
    "Skills": frozenset(
        {
            "Skills",
            "FurnitureSkills",
            "InitSkills",
            "QuitSkills",
            "LevelSkills",
            "CustomBlockSkills",
        }
    ),
    "Conditions": frozenset({"Conditions", "TriggerConditions", "TargetConditions"}),
    "AITargetSelectors": frozenset({"AITargetSelectors"}),
    "AIGoalSelectors": frozenset({"AIGoalSelectors"}),
}


class ScribeAttribute:
    """An attribute bound to the object that declares (or inherits) it."""

    def __init__(
        self,
        data: AttributeData,
        mechanic: "ScribeMechanic",
        enum: ScribeEnum | None = None,
    ):
        self.data = data
        self.mechanic = mechanic
        self.enum = enum

    @property
    def name(self) -> list[str]:
        return self.data.name

    @property
    def description(self) -> str:
        return self.data.description

    @property
    def link(self) -> str:
        return self.data.link or self.mechanic.link

    @property
    def accepts_conditions(self) -> bool:
        """Whether the value is an inline condition list."""
        return self.data.special_value == CONDITIONS_SPECIAL_VALUE

    def main_name(self, mode: str = "default") -> str:
        if mode == "shorter":
            return min(self.name, key=len)
        if mode == "longer":
            return max(self.name, key=len)
        return self.name[0]

    def __repr__(self) -> str:
        return f"ScribeAttribute({self.name[0]!r} of {self.mechanic.name[0]!r})"


class ScribeMechanic:
    """A mechanic-like object with its attribute name index."""

    def __init__(
        self,
        data: MechanicData,
        registry: "MechanicRegistry",
        enums: EnumHandler | None = None,
    ):
        self.data = data
        self.registry = registry
        self._enums = enums
        self._attributes: list[ScribeAttribute] = []
        self._attributes_by_name: dict[str, ScribeAttribute] = {}
        self._inherited = False
        self._enum_attribute_sources: set[str] = set()
        for attribute in data.attributes:
            self.add_attribute(attribute)
        self._own_attributes = list(self._attributes)

    @property
    def name(self) -> list[str]:
        return self.data.name

    @property
    def class_name(self) -> str:
        return self.data.class_name

    @property
    def description(self) -> str:
        return self.data.description

    @property
    def link(self) -> str:
        return self.data.link

    @property
    def plugin(self) -> str:
        return self.data.plugin

    def add_attribute(self, data: AttributeData) -> ScribeAttribute:
        attribute = ScribeAttribute(data, self, self._resolve_enum(data))
        self._attributes.append(attribute)
        self._index(attribute)
        self._add_enum_attributes(attribute.enum)
        return attribute

    def get_own_attributes(self) -> list[ScribeAttribute]:
        return self._own_attributes

    def get_attributes(self) -> list[ScribeAttribute]:
        self._inherit_attributes()
        return self._attributes

    def get_attribute_by_name(self, name: str) -> ScribeAttribute | None:
        self._inherit_attributes()
        return self._attributes_by_name.get(name.strip().lower())

    def _resolve_enum(self, data: AttributeData) -> ScribeEnum | None:
        if not data.enum or self._enums is None:
            return None
        if "," in data.enum:
            return self._enums.add_lambda(data.enum, data.enum.split(","))
        return self._enums.get_enum(data.enum)

    def _add_enum_attributes(self, scribe_enum: ScribeEnum | None) -> None:
        # an enum contributes its attributes to a mechanic only once
        if scribe_enum is None or not scribe_enum.get_attributes():
            return
        if scribe_enum.identifier in self._enum_attribute_sources:
            return
        self._enum_attribute_sources.add(scribe_enum.identifier)
        for data in scribe_enum.get_attributes():
            self.add_attribute(data)

    def _inherit_attributes(self, chain: frozenset[int] = frozenset()) -> None:
        # built aside and published whole; no in-progress state is shared
        if self._inherited or id(self) in chain:
            return
        parent = self.registry.get_by_class(self.data.extends) if self.data.extends else None
        if parent is None or parent is self:
            self._inherited = True
            return

        parent._inherit_attributes(chain | {id(self)})
        inherited = [a for a in parent._attributes if a.data.inheritable]
        attributes = [*self._own_attributes, *inherited]
        by_name: dict[str, ScribeAttribute] = {}
        for attribute in attributes:
            for name in attribute.name:
                by_name.setdefault(name.lower(), attribute)
        self._attributes = attributes
        self._attributes_by_name = by_name
        self._inherited = True

    def _index(self, attribute: ScribeAttribute) -> None:
        for name in attribute.name:
            self._attributes_by_name.setdefault(name.lower(), attribute)

    def __repr__(self) -> str:
        return f"ScribeMechanic({self.name[0]!r}, type={self.registry.object_type.value})"


class MechanicRegistry:
    """All objects of one category, indexed by name and by class."""

    def __init__(self, object_type: ObjectType, pattern: str):
        self.object_type = object_type
        self.regex = re.compile(pattern)
        self._mechanics: list[ScribeMechanic] = []
        self._by_name: dict[str, ScribeMechanic] = {}
        self._by_class: dict[str, ScribeMechanic] = {}

    def add_mechanics(
        self,
        *mechanics: MechanicData,
        enums: EnumHandler | None = None,
        config: ScribeConfig | None = None,
    ) -> None:
        config = config or get_config()
        added = 0
        for data in mechanics:
            if not config.is_plugin_enabled(data.plugin):
                continue
            mechanic = ScribeMechanic(data, self, enums)
            self._mechanics.append(mechanic)
            for name in data.name:
                self._by_name[name.lower()] = mechanic
            self._by_class[data.class_name.lower()] = mechanic
            added += 1
        plugins = sorted({m.plugin for m in mechanics})
        logger.debug(
            f"Added {added} {self.object_type.value}s. The registered plugins are: "
            f"{', '.join(plugins)}"
        )

    def get_mechanics(self) -> list[ScribeMechanic]:
        return self._mechanics

    def resolve_inheritance(self) -> None:
        """Pull inherited attributes into every object before the registry is shared."""
        for mechanic in self._mechanics:
            mechanic.get_attributes()

    def get_by_name(self, name: str) -> ScribeMechanic | None:
        return self._by_name.get(name.lower())

    def get_by_class(self, class_name: str) -> ScribeMechanic | None:
        return self._by_class.get(class_name.lower())

    def __len__(self) -> int:
        return len(self._mechanics)


class InlineConditionRegistry(MechanicRegistry):
    """Inline conditions (?cond) share the condition registry's objects."""

    def __init__(self, conditions: MechanicRegistry):
        super().__init__(
            ObjectType.INLINECONDITION,
            r"(?:(?<=\s\?)|(?<=\s\?!)|(?<=\s\?~)|(?<=\s\?~!))[\w:]+",
        )
        self.conditions = conditions

    def get_mechanics(self) -> list[ScribeMechanic]:
        return self.conditions.get_mechanics()

    def get_by_name(self, name: str) -> ScribeMechanic | None:
        return self.conditions.get_by_name(name)

    def get_by_class(self, class_name: str) -> ScribeMechanic | None:
        return self.conditions.get_by_class(class_name)

    def __len__(self) -> int:
        return len(self.conditions)


def _mechanic_registry() -> MechanicRegistry:
    return MechanicRegistry(ObjectType.MECHANIC, r"(?<=\s- )[\w:]+")


def _condition_registry() -> MechanicRegistry:
    return MechanicRegistry(ObjectType.CONDITION, r"(?<=[\s|&][-(|&)] )[\w:]+")


@dataclass
class RegistrySet:
    """The registries a resolution runs against."""

    mechanic: MechanicRegistry = field(default_factory=_mechanic_registry)
    targeter: MechanicRegistry = field(
        default_factory=lambda: MechanicRegistry(ObjectType.TARGETER, r"(?<=[\s=]@)[\w:]+")
    )
    condition: MechanicRegistry = field(default_factory=_condition_registry)
    trigger: MechanicRegistry = field(
        default_factory=lambda: MechanicRegistry(ObjectType.TRIGGER, r"(?<=\s~)on[\w:]+")
    )
    aitarget: MechanicRegistry = field(
        default_factory=lambda: MechanicRegistry(ObjectType.AITARGET, r"(?<=\s- )[\w:]+")
    )
    aigoal: MechanicRegistry = field(
        default_factory=lambda: MechanicRegistry(ObjectType.AIGOAL, r"(?<=\s- )[\w:]+")
    )
    inline_condition: InlineConditionRegistry = field(init=False)

    def __post_init__(self) -> None:
        self.inline_condition = InlineConditionRegistry(self.condition)

    @classmethod
    def from_dataset(
        cls,
        dataset: ScribeDataset,
        enums: EnumHandler | None = None,
        config: ScribeConfig | None = None,
    ) -> "RegistrySet":
        registries = cls()
        for registry, records in (
            (registries.mechanic, dataset.mechanics),
            (registries.targeter, dataset.targeters),
            (registries.condition, dataset.conditions),
            (registries.trigger, dataset.triggers),
            (registries.aitarget, dataset.aitargets),
            (registries.aigoal, dataset.aigoals),
        ):
            registry.add_mechanics(*records, enums=enums, config=config)
            registry.resolve_inheritance()
        return registries

    def for_key(self, key: str) -> MechanicRegistry | None:
        """Registry whose objects are listed directly under a key category."""
        if key in KEY_ALIASES["Conditions"]:
            return self.condition
        if key in KEY_ALIASES["AITargetSelectors"]:
            return self.aitarget
        if key in KEY_ALIASES["AIGoalSelectors"]:
            return self.aigoal
        return None

    def cursor_registries(self) -> list[MechanicRegistry]:
        """Registries checked for an object name under the cursor in a skill line."""
        return [
            self.mechanic,
            self.targeter,
            self.trigger,
            self.inline_condition,
            self.condition,
        ]
